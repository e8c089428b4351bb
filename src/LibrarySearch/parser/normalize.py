"""Query normalizer.

Turns the user's search box text into a `SearchFilter`:

1. tokenize the text into offsets,
2. assemble the free-text offsets into `query`,
3. dispatch every keyword offset to its rule, in order,
4. resolve the library section default and freeze the result.
"""

from __future__ import annotations

from typing import Iterable, Optional

from LibrarySearch.core.models import InFilter, SearchFilter
from LibrarySearch.core.query import TextOffset, TokenizedQuery
from LibrarySearch.parser.dispatch import FilterBuilder, apply_keywords
from LibrarySearch.parser.tokenizer import tokenize
from LibrarySearch.utils.log import log


def assemble_text(texts: Iterable[TextOffset]) -> Optional[str]:
    """Join free-text offsets back into one query string.

    Offsets containing whitespace are wrapped in double quotes, with `\\` and
    `"` escaped so the result tokenizes back to the same offsets. The
    tokenizer does not report which offsets were quoted, so unquoted text with
    inner whitespace would be quoted as well.

    Returns:
        The joined text, or None when there are no offsets.
    """
    parts: list[str] = []
    for offset in texts:
        text = offset.text
        if any(ch.isspace() for ch in text):
            escaped = text.replace("\\", "\\\\").replace('"', '\\"')
            text = f'"{escaped}"'
        parts.append(text)
    return " ".join(parts) if parts else None


def default_in_filter(query: Optional[str]) -> InFilter:
    """Section searched when no `in:` keyword names one."""
    return InFilter.ALL if query else InFilter.INBOX


def normalize_tokens(tokens: TokenizedQuery) -> SearchFilter:
    """Build a filter from already tokenized input.

    Args:
        tokens: Tokenizer output.

    Returns:
        Frozen search filter. The canonical empty filter when there are no
        offsets.
    """
    if not tokens.offsets:
        return SearchFilter.empty()

    builder = FilterBuilder(query=assemble_text(tokens.texts))
    apply_keywords(builder, tokens)

    return SearchFilter(
        query=builder.query,
        in_filter=builder.in_filter or default_in_filter(builder.query),
        read_filter=builder.read_filter,
        type_filter=builder.type_filter,
        label_filters=tuple(builder.label_filters),
        sort=builder.sort,
        has_filters=tuple(builder.has_filters),
        date_filters=tuple(builder.date_filters),
        term_filters=tuple(builder.term_filters),
        match_filters=tuple(builder.match_filters),
        ids=tuple(builder.ids),
        no_filters=tuple(builder.no_filters),
        recommended_by=builder.recommended_by,
        site_name=builder.site_name,
        subscription=builder.subscription,
    )


def normalize(raw_query: Optional[str]) -> SearchFilter:
    """Parse a search box query into a `SearchFilter`.

    Never raises on malformed input: unknown keywords and unrecognized values
    are dropped.

    Args:
        raw_query: Query text, possibly None or blank.

    Returns:
        Frozen search filter.
    """
    if not raw_query or not raw_query.strip():
        return SearchFilter.empty()

    tokens = tokenize(raw_query)
    log.debug("Tokenized %r into %d offsets", raw_query, len(tokens.offsets))
    return normalize_tokens(tokens)


parse_search_query = normalize
