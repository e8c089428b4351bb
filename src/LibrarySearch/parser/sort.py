"""Structured sort request resolution.

Used when a client sends sort parameters separately from the query text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from LibrarySearch.core.models import Sort, SortBy, SortOrder

_SORT_TAGS: dict[str, SortBy] = {
    "UPDATED_TIME": SortBy.UPDATED,
    "PUBLISHED_AT": SortBy.PUBLISHED,
    "SAVED_AT": SortBy.SAVED,
}


@dataclass(frozen=True, slots=True)
class SortParams:
    """Client sort request.

    Attributes:
        by: Sort tag (UPDATED_TIME / PUBLISHED_AT / SAVED_AT).
        order: ASCENDING or DESCENDING.
    """

    by: Optional[str] = None
    order: Optional[str] = None


def resolve_sort(params: Optional[SortParams]) -> Sort:
    """Resolve a sort request, defaulting to most recently updated first.

    Args:
        params: Client request, or None.

    Returns:
        Sort with both key and order set. Unknown tags keep the defaults.
    """
    by = SortBy.UPDATED
    order = SortOrder.DESCENDING
    if params:
        if params.order == "ASCENDING":
            order = SortOrder.ASCENDING
        by = _SORT_TAGS.get(params.by or "", by)
    return Sort(by=by, order=order)
