"""Query tokenizer.

Splits a raw query into ordered text and `keyword:value` offsets.

Rules
- Terms are separated by whitespace.
- A double- or single-quoted run is a single term; `\\` escapes the quote
  character inside it.
- `name:value` is a keyword term only when `name` is one of the recognized
  keywords (case-insensitive). The value may be quoted: `label:"to read"`.
  Any other `name:value` term (`re:Invent`, `https://example.com`) is text.
- A leading `-` on a keyword term negates it. The offset is still emitted and
  its raw value is recorded in the exclusion set for that keyword.
- Keyword terms with an empty value and empty quoted phrases are dropped.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from LibrarySearch.core.query import KeywordOffset, Offset, TextOffset, TokenizedQuery
from LibrarySearch.parser.dispatch import Keyword


_TERM_RE = re.compile(
    r"""
      (?P<neg>-)?(?P<key>[A-Za-z][A-Za-z0-9_]*):
        (?: "(?P<kdq>(?:[^"\\]|\\.)*)"
          | '(?P<ksq>(?:[^'\\]|\\.)*)'
          | (?P<kval>\S*) )
    | "(?P<dq>(?:[^"\\]|\\.)*)"
    | '(?P<sq>(?:[^'\\]|\\.)*)'
    | (?P<bare>\S+)
    """,
    re.VERBOSE,
)
_ESCAPE_RE = re.compile(r"\\(.)")

_KEYWORD_NAMES = frozenset(k.value.lower() for k in Keyword)


def _unescape(text: str) -> str:
    return _ESCAPE_RE.sub(r"\1", text)


def tokenize(raw: str | None, keywords: Optional[Iterable[str]] = None) -> TokenizedQuery:
    """Split a raw query string into offsets and an exclusion set.

    Args:
        raw: Query text as typed by the user.
        keywords: Names treated as keywords. Defaults to every `Keyword`.

    Returns:
        Tokenized query. Empty when `raw` is None or blank.
    """
    if not raw or not raw.strip():
        return TokenizedQuery()

    names = _KEYWORD_NAMES if keywords is None else frozenset(k.lower() for k in keywords)
    offsets: list[Offset] = []
    exclude: dict[str, set[str]] = {}

    for match in _TERM_RE.finditer(raw):
        key = match.group("key")
        if key is not None:
            if key.lower() not in names:
                offsets.append(TextOffset(match.group(0)))
                continue
            quoted = match.group("kdq") if match.group("kdq") is not None else match.group("ksq")
            value = _unescape(quoted) if quoted is not None else match.group("kval")
            if not value:
                continue
            excluded = match.group("neg") is not None
            if excluded:
                exclude.setdefault(key.lower(), set()).add(value)
            offsets.append(KeywordOffset(keyword=key, value=value, excluded=excluded))
            continue

        phrase = match.group("dq") if match.group("dq") is not None else match.group("sq")
        if phrase is not None:
            text = _unescape(phrase)
            if text:
                offsets.append(TextOffset(text))
            continue

        offsets.append(TextOffset(match.group("bare")))

    return TokenizedQuery(
        offsets=tuple(offsets),
        exclude={k: frozenset(v) for k, v in exclude.items()},
    )
