"""Per-keyword value parsers.

Each parser maps the raw value of one keyword occurrence to a typed value, or
to None when the value is not recognized. Parsers never raise on user input.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as dt_parser

from LibrarySearch.core.models import (
    DateFilter,
    FieldFilter,
    HasFilter,
    InFilter,
    LabelFilter,
    LabelFilterType,
    LibraryItemType,
    NoFilter,
    QueryDate,
    ReadFilter,
    Sort,
    SortBy,
    SortOrder,
)

_TYPE_NAMES: dict[str, LibraryItemType] = {
    "article": LibraryItemType.ARTICLE,
    "book": LibraryItemType.BOOK,
    "pdf": LibraryItemType.FILE,
    "file": LibraryItemType.FILE,
    "profile": LibraryItemType.PROFILE,
    "website": LibraryItemType.WEBSITE,
    "unknown": LibraryItemType.UNKNOWN,
}

_SORT_KEYS: dict[str, SortBy] = {
    "UPDATED": SortBy.UPDATED,
    "SAVED": SortBy.SAVED,
    "PUBLISHED": SortBy.PUBLISHED,
    "READ": SortBy.READ,
    "WORDSCOUNT": SortBy.WORDS_COUNT,
}

_DATE_FIELDS: dict[str, str] = {
    "SAVED": "savedAt",
    "PUBLISHED": "publishedAt",
    "UPDATED": "updatedAt",
}

_TERM_FIELDS: dict[str, str] = {
    "LANGUAGE": "item_language",
}

_NO_FIELDS: dict[str, str] = {
    "highlight": "highlight_annotations",
    "label": "label_names",
}

# Fills the parts a partial date leaves out, e.g. "2023-05" -> 2023-05-01.
_DATE_DEFAULT = datetime(2000, 1, 1, tzinfo=timezone.utc)
# A date must name its year; "1" or "March" alone is not a date.
_YEAR_RE = re.compile(r"\d{4}")


def parse_string_value(value: str) -> str:
    return value.lower()


def parse_in_filter(value: str) -> Optional[InFilter]:
    """Match an `in:` value. None means the section falls back to the default."""
    try:
        return InFilter[value.upper()]
    except KeyError:
        return None


def parse_is_filter(value: str) -> ReadFilter:
    upper = value.upper()
    if upper == "READ":
        return ReadFilter.READ
    if upper == "UNREAD":
        return ReadFilter.UNREAD
    return ReadFilter.ALL


def parse_type_filter(value: str) -> Optional[LibraryItemType]:
    return _TYPE_NAMES.get(value.lower())


def parse_label_filter(value: str, *, excluded: bool) -> LabelFilter:
    """Parse a comma separated `label:` value.

    Args:
        value: Raw value, e.g. "Work,Home".
        excluded: Whether the raw value was negated in the query.

    Returns:
        One filter holding every label of the occurrence.
    """
    return LabelFilter(
        type=LabelFilterType.EXCLUDE if excluded else LabelFilterType.INCLUDE,
        labels=tuple(label.lower() for label in value.split(",")),
    )


def parse_sort(value: str) -> Optional[Sort]:
    """Parse `key[-direction]`, e.g. "saved-asc".

    Returns:
        The sort, or None when the key is not sortable.
    """
    parts = value.split("-")
    order = SortOrder.DESCENDING
    if len(parts) > 1 and parts[1].upper() == "ASC":
        order = SortOrder.ASCENDING
    by = _SORT_KEYS.get(parts[0].upper())
    if by is None:
        return None
    return Sort(by=by, order=order)


def parse_has_filter(value: str) -> Optional[HasFilter]:
    try:
        return HasFilter[value.upper()]
    except KeyError:
        return None


def parse_date(text: str) -> QueryDate:
    """Parse one side of a date range.

    Naive results are taken as UTC. Unparseable text, or text without a
    four-digit year, still yields a bound, with no value.
    """
    if not _YEAR_RE.search(text):
        return QueryDate(raw=text, value=None)
    try:
        value = dt_parser.parse(text, default=_DATE_DEFAULT)
    except (ValueError, OverflowError):
        return QueryDate(raw=text, value=None)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return QueryDate(raw=text, value=value)


def _parse_bound(text: Optional[str]) -> Optional[QueryDate]:
    if not text or text == "*":
        return None
    return parse_date(text)


def parse_date_filter(keyword: str, value: str) -> DateFilter:
    """Parse an `A..B` range for a date keyword.

    Either side may be `*` or empty for an open bound. A value without `..`
    is a start date with an open end.

    Args:
        keyword: Keyword name; translated to the item attribute it filters.
        value: Raw range text.

    Returns:
        Date filter for the translated field.
    """
    parts = value.split("..")
    start = parts[0]
    end = parts[1] if len(parts) > 1 else None
    field = _DATE_FIELDS.get(keyword.upper(), keyword)
    return DateFilter(field=field, start=_parse_bound(start), end=_parse_bound(end))


def parse_field_filter(keyword: str, value: str) -> FieldFilter:
    field = _TERM_FIELDS.get(keyword.upper(), keyword)
    return FieldFilter(field=field, value=value.lower())


def parse_ids(value: str) -> list[str]:
    return value.split(",")


def parse_no_filter(value: str) -> Optional[NoFilter]:
    field = _NO_FIELDS.get(value.lower())
    return NoFilter(field=field) if field else None
