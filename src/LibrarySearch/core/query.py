from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union


@dataclass(frozen=True, slots=True)
class TextOffset:
    """A free-text term. Quoted phrases arrive unquoted, as one offset."""

    text: str


@dataclass(frozen=True, slots=True)
class KeywordOffset:
    """A `keyword:value` term.

    Attributes:
        keyword: Keyword name as written in the query.
        value: Raw value with any surrounding quotes removed.
        excluded: Whether the term was negated with a leading `-`.
    """

    keyword: str
    value: str
    excluded: bool = False


Offset = Union[TextOffset, KeywordOffset]


@dataclass(frozen=True, slots=True)
class TokenizedQuery:
    """Tokenizer output consumed by the normalizer.

    Attributes:
        offsets: Terms in query order.
        exclude: Lower-cased keyword name to the raw values negated for it.
    """

    offsets: tuple[Offset, ...] = ()
    exclude: Mapping[str, frozenset[str]] = field(default_factory=dict)

    @property
    def texts(self) -> tuple[TextOffset, ...]:
        return tuple(o for o in self.offsets if isinstance(o, TextOffset))

    @property
    def keywords(self) -> tuple[KeywordOffset, ...]:
        return tuple(o for o in self.offsets if isinstance(o, KeywordOffset))

    def is_excluded(self, keyword: str, value: str) -> bool:
        """Return True if `value` was negated for `keyword`."""
        return value in self.exclude.get(keyword.lower(), frozenset())
