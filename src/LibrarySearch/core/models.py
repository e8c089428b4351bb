from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class InFilter(str, Enum):
    """Which part of the library a search is scoped to."""

    ALL = "ALL"
    INBOX = "INBOX"
    ARCHIVE = "ARCHIVE"
    TRASH = "TRASH"
    SUBSCRIPTION = "SUBSCRIPTION"
    LIBRARY = "LIBRARY"


class ReadFilter(str, Enum):
    ALL = "ALL"
    READ = "READ"
    UNREAD = "UNREAD"


class LibraryItemType(str, Enum):
    ARTICLE = "ARTICLE"
    BOOK = "BOOK"
    FILE = "FILE"
    PROFILE = "PROFILE"
    WEBSITE = "WEBSITE"
    TWEET = "TWEET"
    VIDEO = "VIDEO"
    IMAGE = "IMAGE"
    UNKNOWN = "UNKNOWN"


class LabelFilterType(str, Enum):
    INCLUDE = "INCLUDE"
    EXCLUDE = "EXCLUDE"


class HasFilter(str, Enum):
    HIGHLIGHTS = "HIGHLIGHTS"
    LABELS = "LABELS"


class SortBy(str, Enum):
    """Sortable item attributes, valued by their storage column names."""

    SAVED = "saved_at"
    UPDATED = "updated_at"
    PUBLISHED = "published_at"
    READ = "read_at"
    LISTENED = "listened_at"
    WORDS_COUNT = "word_count"


class SortOrder(str, Enum):
    ASCENDING = "ASC"
    DESCENDING = "DESC"


@dataclass(frozen=True, slots=True)
class Sort:
    by: SortBy
    order: SortOrder = SortOrder.DESCENDING


@dataclass(frozen=True, slots=True)
class LabelFilter:
    """One `label:` occurrence.

    Attributes:
        type: Whether matching items are kept or removed.
        labels: Lower-cased label names, in query order.
    """

    type: LabelFilterType
    labels: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class QueryDate:
    """A date bound taken from the query text.

    The bound is present even when the text could not be parsed; in that case
    `value` is None and deciding what an invalid bound means is left to the
    query executor.

    Attributes:
        raw: Text as written in the query.
        value: Parsed, timezone-aware datetime, or None when unparseable.
    """

    raw: str
    value: Optional[datetime]

    @property
    def is_valid(self) -> bool:
        return self.value is not None


@dataclass(frozen=True, slots=True)
class DateFilter:
    """Date range on an item attribute. Missing bounds are open."""

    field: str
    start: Optional[QueryDate] = None
    end: Optional[QueryDate] = None


@dataclass(frozen=True, slots=True)
class FieldFilter:
    field: str
    value: str


@dataclass(frozen=True, slots=True)
class NoFilter:
    """Matches items where `field` is empty."""

    field: str


@dataclass(frozen=True, slots=True)
class SearchFilter:
    """Normalized search intent handed to the query executor.

    List-valued fields accumulate one entry per keyword occurrence; scalar
    fields hold the value of the last occurrence.

    Attributes:
        query: Free-text part of the query, or None when there was none.
        in_filter: Library section to search.
        read_filter: Read state constraint.
        type_filter: Item type constraint.
        label_filters: Label constraints, one per `label:` keyword.
        sort: Requested ordering.
        has_filters: Required item attributes.
        date_filters: Date range constraints.
        term_filters: Exact-match field constraints.
        match_filters: Full-text field constraints.
        ids: Item identifiers to restrict the search to.
        no_filters: Fields that must be empty.
        recommended_by: Recommender name.
        site_name: Site name, case preserved.
        subscription: Subscription name.
    """

    query: Optional[str] = None
    in_filter: InFilter = InFilter.INBOX
    read_filter: ReadFilter = ReadFilter.ALL
    type_filter: Optional[LibraryItemType] = None
    label_filters: tuple[LabelFilter, ...] = ()
    sort: Optional[Sort] = None
    has_filters: tuple[HasFilter, ...] = ()
    date_filters: tuple[DateFilter, ...] = ()
    term_filters: tuple[FieldFilter, ...] = ()
    match_filters: tuple[FieldFilter, ...] = ()
    ids: tuple[str, ...] = ()
    no_filters: tuple[NoFilter, ...] = ()
    recommended_by: Optional[str] = None
    site_name: Optional[str] = None
    subscription: Optional[str] = None

    @classmethod
    def empty(cls) -> SearchFilter:
        """Return the filter used for an empty query (the inbox, everything)."""
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable mapping.

        Returns:
            Mapping with enum values, ISO-8601 dates and plain lists.
        """
        return {
            "query": self.query,
            "in_filter": self.in_filter.value,
            "read_filter": self.read_filter.value,
            "type_filter": self.type_filter.value if self.type_filter else None,
            "label_filters": [
                {"type": f.type.value, "labels": list(f.labels)} for f in self.label_filters
            ],
            "sort": (
                {"by": self.sort.by.value, "order": self.sort.order.value} if self.sort else None
            ),
            "has_filters": [h.value for h in self.has_filters],
            "date_filters": [
                {
                    "field": f.field,
                    "start": _date_payload(f.start),
                    "end": _date_payload(f.end),
                }
                for f in self.date_filters
            ],
            "term_filters": [_field_payload(f) for f in self.term_filters],
            "match_filters": [_field_payload(f) for f in self.match_filters],
            "ids": list(self.ids),
            "no_filters": [{"field": f.field} for f in self.no_filters],
            "recommended_by": self.recommended_by,
            "site_name": self.site_name,
            "subscription": self.subscription,
        }


def _date_payload(date: QueryDate | None) -> dict[str, Any] | None:
    if date is None:
        return None
    return {
        "raw": date.raw,
        "value": date.value.isoformat() if date.value else None,
        "valid": date.is_valid,
    }


def _field_payload(f: FieldFilter) -> dict[str, Any]:
    return {"field": f.field, "value": f.value}
