"""Filter predicates and the session filter manager."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any
from urllib.parse import parse_qsl, unquote, urlencode

from pydantic import BaseModel, Field

from catalog_hub.normalization.types import ProcessedCollection
from catalog_hub.query.events import Subscribers, Unsubscribe
from catalog_hub.query.search import matches_text

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")

# query-string key -> FilterState attribute
QUERY_PARAM_FIELDS = {
    "category": "category",
    "tier": "tier",
    "minPrice": "min_price",
    "maxPrice": "max_price",
    "minDiscount": "min_discount",
    "search": "search_query",
}


class FilterState(BaseModel):
    """Active filter selection; defaults mean "no constraint"."""

    category: str = "all"
    tier: str = "all"
    min_price: float = Field(default=0, ge=0)
    max_price: float = math.inf
    min_discount: int = Field(default=0, ge=0)
    min_rating: float = 0
    search_query: str = ""


class FilterStatistics(BaseModel):
    total_items: int
    filtered_items: int
    applied_filters: int
    active_filters: dict[str, Any] = Field(default_factory=dict)


def record_passes(record: Any, state: FilterState) -> bool:
    if state.category != "all" and getattr(record, "category", None) != state.category:
        return False

    if state.tier != "all" and getattr(record, "tier", None) != state.tier:
        return False

    sale_price = getattr(record, "sale_price", None)
    if sale_price is not None:
        if sale_price < state.min_price or sale_price > state.max_price:
            return False

    discount = getattr(record, "discount", None)
    if discount is not None and discount < state.min_discount:
        return False

    rating = getattr(record, "rating", None)
    if rating is not None and float(rating) < state.min_rating:
        return False

    if state.search_query:
        field = getattr(record, "name", None) or getattr(record, "shop_name", None)
        if field and not matches_text(field, state.search_query):
            return False

    return True


def apply_filters(records: ProcessedCollection | Sequence[Any], state: FilterState) -> list[Any]:
    """Return the records passing every active filter, in their original order."""
    source = records.all if isinstance(records, ProcessedCollection) else records
    return [record for record in source if record_passes(record, state)]


def active_filters(state: FilterState) -> dict[str, Any]:
    active: dict[str, Any] = {}
    if state.category != "all":
        active["category"] = state.category
    if state.tier != "all":
        active["tier"] = state.tier
    if state.min_price > 0:
        active["min_price"] = state.min_price
    if state.max_price < math.inf:
        active["max_price"] = state.max_price
    if state.min_discount > 0:
        active["min_discount"] = state.min_discount
    if state.min_rating > 0:
        active["min_rating"] = state.min_rating
    if state.search_query:
        active["search_query"] = state.search_query
    return active


def filter_state_to_params(state: FilterState) -> dict[str, str]:
    """Query parameters for ``state``; keys at their default value are omitted."""
    params: dict[str, str] = {}
    if state.category != "all":
        params["category"] = state.category
    if state.tier != "all":
        params["tier"] = state.tier
    if state.min_price > 0:
        params["minPrice"] = _format_number(state.min_price)
    if state.max_price < math.inf:
        params["maxPrice"] = _format_number(state.max_price)
    if state.min_discount > 0:
        params["minDiscount"] = str(state.min_discount)
    if state.search_query:
        params["search"] = state.search_query
    return params


def filter_state_from_params(params: Mapping[str, str], base: FilterState | None = None) -> FilterState:
    """Seed a filter state from already-split query parameters."""
    updates: dict[str, Any] = {}
    for key in ("category", "tier"):
        if params.get(key):
            updates[key] = params[key]

    for key in ("minPrice", "maxPrice", "minDiscount"):
        raw = params.get(key)
        if not raw:
            continue
        match = _LEADING_INT.match(raw)
        if match is None:
            logger.warning("Ignoring unparsable query parameter %s=%r", key, raw)
            continue
        value = int(match.group(0))
        if value < 0 and key != "maxPrice":
            logger.warning("Ignoring negative query parameter %s=%r", key, raw)
            continue
        updates[QUERY_PARAM_FIELDS[key]] = value

    if params.get("search"):
        updates["search_query"] = unquote(params["search"])

    return (base or FilterState()).model_copy(update=updates)


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class FilterManager:
    """Holds one session's filter state and its filtered view of the data."""

    def __init__(
        self,
        state: FilterState | None = None,
        *,
        on_params_change: Callable[[dict[str, str]], None] | None = None,
    ):
        self.state = state or FilterState()
        self.on_params_change = on_params_change
        self.original_data: list[Any] = []
        self.filtered_data: list[Any] = []
        self._subscribers = Subscribers("filter listener")

    def init_from_params(self, params: Mapping[str, str]) -> FilterState:
        self.state = filter_state_from_params(params, base=self.state)
        return self.state

    def init_from_query_string(self, query_string: str) -> FilterState:
        return self.init_from_params(dict(parse_qsl(query_string.lstrip("?"))))

    def set_data(self, data: ProcessedCollection | Sequence[Any]) -> None:
        self.original_data = list(data.all if isinstance(data, ProcessedCollection) else data)
        self.apply_filters()

    def set_category(self, category: str) -> None:
        self._update(category=category)

    def set_tier(self, tier: str) -> None:
        self._update(tier=tier)

    def set_price_range(self, min_price: float, max_price: float = math.inf) -> None:
        self._update(min_price=min_price, max_price=max_price)

    def set_min_discount(self, min_discount: int) -> None:
        self._update(min_discount=min_discount)

    def set_min_rating(self, min_rating: float) -> None:
        self._update(min_rating=min_rating)

    def set_search_query(self, query: str) -> None:
        self._update(search_query=query)

    def reset_filters(self) -> None:
        self.state = FilterState()
        self._changed()

    def apply_filters(self) -> list[Any]:
        self.filtered_data = apply_filters(self.original_data, self.state)
        return self.filtered_data

    def applied_filters_count(self) -> int:
        return len(active_filters(self.state))

    def active_filters(self) -> dict[str, Any]:
        return active_filters(self.state)

    def statistics(self) -> FilterStatistics:
        return FilterStatistics(
            total_items=len(self.original_data),
            filtered_items=len(self.filtered_data),
            applied_filters=self.applied_filters_count(),
            active_filters=self.active_filters(),
        )

    def to_query_params(self) -> dict[str, str]:
        return filter_state_to_params(self.state)

    def to_query_string(self) -> str:
        return urlencode(self.to_query_params())

    def subscribe(self, listener: Callable[[list[Any], FilterStatistics], Any]) -> Unsubscribe:
        return self._subscribers.subscribe(listener)

    def _update(self, **changes: Any) -> None:
        self.state = FilterState.model_validate({**self.state.model_dump(), **changes})
        self._changed()

    def _changed(self) -> None:
        self.apply_filters()
        if self.on_params_change is not None:
            self.on_params_change(self.to_query_params())
        self._subscribers.notify(self.filtered_data, self.statistics())
