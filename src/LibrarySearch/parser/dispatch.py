"""Keyword dispatch.

Every recognized keyword maps to exactly one `KeywordRule`: the filter field
it writes, how repeated occurrences accumulate, and the parser producing the
value. The table is checked for completeness at import time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from LibrarySearch.core.models import (
    DateFilter,
    FieldFilter,
    HasFilter,
    InFilter,
    LabelFilter,
    LibraryItemType,
    NoFilter,
    ReadFilter,
    Sort,
)
from LibrarySearch.core.query import KeywordOffset, TokenizedQuery
from LibrarySearch.parser import handlers
from LibrarySearch.utils.log import log


class Keyword(str, Enum):
    IN = "in"
    IS = "is"
    TYPE = "type"
    LABEL = "label"
    SORT = "sort"
    HAS = "has"
    SAVED = "saved"
    PUBLISHED = "published"
    UPDATED = "updated"
    AUTHOR = "author"
    TITLE = "title"
    DESCRIPTION = "description"
    NOTE = "note"
    CONTENT = "content"
    LANGUAGE = "language"
    SUBSCRIPTION = "subscription"
    RSS = "rss"
    INCLUDES = "includes"
    RECOMMENDED_BY = "recommendedBy"
    NO = "no"
    MODE = "mode"
    SITE = "site"

    @classmethod
    def lookup(cls, name: str) -> Optional[Keyword]:
        """Find a keyword by name, ignoring case."""
        return _BY_NAME.get(name.lower())


_BY_NAME: dict[str, Keyword] = {k.value.lower(): k for k in Keyword}


class Accumulate(Enum):
    """How a keyword occurrence is merged into its field."""

    REPLACE = "replace"  # last occurrence wins, even when unrecognized
    REPLACE_VALID = "replace_valid"  # last recognized occurrence wins
    APPEND = "append"
    EXTEND = "extend"
    IGNORE = "ignore"


@dataclass(slots=True)
class FilterBuilder:
    """Mutable state for one normalization. Never shared between calls."""

    query: Optional[str] = None
    in_filter: Optional[InFilter] = None
    read_filter: ReadFilter = ReadFilter.ALL
    type_filter: Optional[LibraryItemType] = None
    label_filters: list[LabelFilter] = field(default_factory=list)
    sort: Optional[Sort] = None
    has_filters: list[HasFilter] = field(default_factory=list)
    date_filters: list[DateFilter] = field(default_factory=list)
    term_filters: list[FieldFilter] = field(default_factory=list)
    match_filters: list[FieldFilter] = field(default_factory=list)
    ids: list[str] = field(default_factory=list)
    no_filters: list[NoFilter] = field(default_factory=list)
    recommended_by: Optional[str] = None
    site_name: Optional[str] = None
    subscription: Optional[str] = None


# Parsers receive the keyword, the raw value and whether that value was negated.
Parse = Callable[[Keyword, str, bool], Any]


@dataclass(frozen=True, slots=True)
class KeywordRule:
    field: Optional[str]
    accumulate: Accumulate
    parse: Parse


def _value_only(fn: Callable[[str], Any]) -> Parse:
    return lambda keyword, value, excluded: fn(value)


def _with_keyword(fn: Callable[[str, str], Any]) -> Parse:
    return lambda keyword, value, excluded: fn(keyword.value, value)


_date = KeywordRule("date_filters", Accumulate.APPEND, _with_keyword(handlers.parse_date_filter))
_match = KeywordRule("match_filters", Accumulate.APPEND, _with_keyword(handlers.parse_field_filter))
_subscription = KeywordRule(
    "subscription", Accumulate.REPLACE, _value_only(handlers.parse_string_value)
)

RULES: dict[Keyword, KeywordRule] = {
    Keyword.IN: KeywordRule("in_filter", Accumulate.REPLACE, _value_only(handlers.parse_in_filter)),
    Keyword.IS: KeywordRule("read_filter", Accumulate.REPLACE, _value_only(handlers.parse_is_filter)),
    Keyword.TYPE: KeywordRule(
        "type_filter", Accumulate.REPLACE, _value_only(handlers.parse_type_filter)
    ),
    Keyword.LABEL: KeywordRule(
        "label_filters",
        Accumulate.APPEND,
        lambda keyword, value, excluded: handlers.parse_label_filter(value, excluded=excluded),
    ),
    Keyword.SORT: KeywordRule("sort", Accumulate.REPLACE_VALID, _value_only(handlers.parse_sort)),
    Keyword.HAS: KeywordRule(
        "has_filters", Accumulate.APPEND, _value_only(handlers.parse_has_filter)
    ),
    Keyword.SAVED: _date,
    Keyword.PUBLISHED: _date,
    Keyword.UPDATED: _date,
    Keyword.AUTHOR: _match,
    Keyword.TITLE: _match,
    Keyword.DESCRIPTION: _match,
    Keyword.NOTE: _match,
    Keyword.CONTENT: _match,
    Keyword.LANGUAGE: KeywordRule(
        "term_filters", Accumulate.APPEND, _with_keyword(handlers.parse_field_filter)
    ),
    Keyword.SUBSCRIPTION: _subscription,
    Keyword.RSS: _subscription,
    Keyword.INCLUDES: KeywordRule("ids", Accumulate.EXTEND, _value_only(handlers.parse_ids)),
    Keyword.RECOMMENDED_BY: KeywordRule(
        "recommended_by", Accumulate.REPLACE, _value_only(handlers.parse_string_value)
    ),
    Keyword.NO: KeywordRule("no_filters", Accumulate.APPEND, _value_only(handlers.parse_no_filter)),
    # Consumed by clients only.
    Keyword.MODE: KeywordRule(None, Accumulate.IGNORE, lambda keyword, value, excluded: None),
    Keyword.SITE: KeywordRule("site_name", Accumulate.REPLACE, lambda keyword, value, excluded: value),
}

_missing = set(Keyword) - set(RULES)
if _missing:
    raise RuntimeError(f"Keywords without a rule: {sorted(k.value for k in _missing)}")


def apply_keyword(builder: FilterBuilder, offset: KeywordOffset, tokens: TokenizedQuery) -> None:
    """Merge one keyword occurrence into `builder`.

    Args:
        builder: Filter under construction.
        offset: Keyword term to apply.
        tokens: Tokenizer output, consulted for the exclusion set.
    """
    keyword = Keyword.lookup(offset.keyword)
    if keyword is None:
        log.debug("Ignoring unknown keyword %r", offset.keyword)
        return

    rule = RULES[keyword]
    if rule.accumulate is Accumulate.IGNORE or rule.field is None:
        return

    excluded = tokens.is_excluded(keyword.value, offset.value)
    value = rule.parse(keyword, offset.value, excluded)

    if rule.accumulate is Accumulate.REPLACE:
        setattr(builder, rule.field, value)
        return

    if value is None:
        log.debug("Dropping unrecognized value %s:%r", keyword.value, offset.value)
        return

    if rule.accumulate is Accumulate.REPLACE_VALID:
        setattr(builder, rule.field, value)
    elif rule.accumulate is Accumulate.APPEND:
        getattr(builder, rule.field).append(value)
    elif rule.accumulate is Accumulate.EXTEND:
        getattr(builder, rule.field).extend(value)


def apply_keywords(builder: FilterBuilder, tokens: TokenizedQuery) -> None:
    """Apply every keyword offset of `tokens`, in query order."""
    for offset in tokens.keywords:
        apply_keyword(builder, offset, tokens)
