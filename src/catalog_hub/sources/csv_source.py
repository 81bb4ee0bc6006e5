"""Delimited-text source."""

from __future__ import annotations

import csv
import io
import logging
import re
from pathlib import Path
from urllib import error, request

from catalog_hub.exceptions import LoadError
from catalog_hub.sources.base import BaseSource, Location, RawRow

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_header(header: str) -> str:
    return _WHITESPACE.sub("_", header.strip().lower())


def _is_url(location: Location) -> bool:
    return isinstance(location, str) and location.lower().startswith(("http://", "https://"))


class CSVSource(BaseSource):
    """Reads comma-separated (or otherwise delimited) files with a header row."""

    def __init__(self, delimiter: str = ",", *, timeout_sec: float = 10.0):
        self.delimiter = delimiter
        self.timeout_sec = timeout_sec

    def read_rows(self, location: Location) -> list[RawRow]:
        text = self._read_text(location)
        try:
            rows = self.parse(text)
        except csv.Error as exc:
            raise LoadError(f"Failed to parse {location}: {exc}") from exc
        logger.info("Loaded %d records from %s", len(rows), location)
        return rows

    def parse(self, text: str) -> list[RawRow]:
        """Parse CSV text into cleaned rows.

        Headers are trimmed, lowercased and have whitespace runs replaced by
        ``_``. Values are trimmed, rows with no non-empty value are skipped
        and rows without an ``id`` get ``item_<n>`` by position among the
        kept rows.
        """
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=self.delimiter)
        header = next(reader, None)
        if header is None:
            return []
        columns = [normalize_header(name) for name in header]

        rows: list[RawRow] = []
        for values in reader:
            row: RawRow = {}
            for index, column in enumerate(columns):
                if not column:
                    continue
                value = values[index].strip() if index < len(values) else None
                row[column] = value
            if not any(value for value in row.values()):
                continue
            if not row.get("id"):
                row["id"] = f"item_{len(rows) + 1}"
            rows.append(row)
        return rows

    def _read_text(self, location: Location) -> str:
        if _is_url(location):
            try:
                with request.urlopen(str(location), timeout=self.timeout_sec) as response:
                    payload = response.read()
            except (error.URLError, TimeoutError, ValueError) as exc:
                raise LoadError(f"Failed to fetch {location}: {exc}") from exc
        else:
            try:
                payload = Path(location).read_bytes()
            except OSError as exc:
                raise LoadError(f"Failed to read {location}: {exc}") from exc

        try:
            return payload.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise LoadError(f"{location} is not valid UTF-8: {exc}") from exc
