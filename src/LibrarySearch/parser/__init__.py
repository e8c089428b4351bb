"""Search query parsing: tokenizer, keyword dispatch and normalization."""

from __future__ import annotations

from LibrarySearch.parser.dispatch import Keyword
from LibrarySearch.parser.normalize import normalize, normalize_tokens, parse_search_query
from LibrarySearch.parser.sort import SortParams, resolve_sort
from LibrarySearch.parser.tokenizer import tokenize

__all__ = [
    "Keyword",
    "SortParams",
    "normalize",
    "normalize_tokens",
    "parse_search_query",
    "resolve_sort",
    "tokenize",
]
