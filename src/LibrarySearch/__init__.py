"""LibrarySearch: turn search box text into a typed library filter."""

from __future__ import annotations

from LibrarySearch.core.models import SearchFilter, Sort
from LibrarySearch.parser import SortParams, normalize, parse_search_query, resolve_sort, tokenize

__all__ = [
    "SearchFilter",
    "Sort",
    "SortParams",
    "normalize",
    "parse_search_query",
    "resolve_sort",
    "tokenize",
]
