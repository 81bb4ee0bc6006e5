"""Data models for catalog-hub."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

RawValue = str | int | float | bool | None


class RawRecord(BaseModel):
    """Loosely-structured row produced by a source; every column is optional."""

    model_config = ConfigDict(extra="allow")

    id: RawValue = None
    category: RawValue = None
    tier: RawValue = None
    affiliate_link: RawValue = None
    description: RawValue = None

    def present(self, field: str) -> bool:
        """Whether ``field`` was supplied with a non-empty value."""
        value = getattr(self, field, None)
        if value is None or value is False:
            return False
        if isinstance(value, str):
            return bool(value.strip())
        return True

    def text(self, field: str, default: str = "") -> str:
        return str(getattr(self, field)).strip() if self.present(field) else default


class RawProductRecord(RawRecord):
    product_name: RawValue = None
    original_price: RawValue = None
    sale_price: RawValue = None
    sold_count: RawValue = None
    image_url: RawValue = None
    shop_name: RawValue = None


class RawShopRecord(RawRecord):
    shop_name: RawValue = None
    shop_type: RawValue = None
    rating: RawValue = None
    rating_count: RawValue = None
    followers: RawValue = None
    logo_url: RawValue = None
    verified: RawValue = None


class CanonicalProduct(BaseModel):
    """Fully-normalized product, safe for filtering, sorting and rendering."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = "Unknown Product"
    category: str = ""
    tier: str = "n3"
    original_price: float = Field(default=0.0, ge=0.0)
    sale_price: float = Field(default=0.0, ge=0.0)
    discount: int = 0
    sold_count: int = Field(default=0, ge=0)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    image: str = ""
    link: str = "#"
    shop_name: str = "Shopee"
    description: str = ""
    warnings: tuple[str, ...] = ()


class CanonicalShop(BaseModel):
    """Fully-normalized shop, safe for filtering, sorting and rendering."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = "Unknown Shop"
    category: str = ""
    tier: str = "n3"
    shop_type: str = "Cửa hàng chính thức"
    rating: float = Field(default=5.0, ge=0.0, le=5.0)
    rating_count: int = Field(default=0, ge=0)
    followers: int = Field(default=0, ge=0)
    logo: str = ""
    link: str = "#"
    verified: bool = False
    description: str = ""
    warnings: tuple[str, ...] = ()


CanonicalRecord = CanonicalProduct | CanonicalShop
