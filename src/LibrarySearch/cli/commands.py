"""Command implementations for the LibrarySearch CLI.

Business logic for each command, separated from CLI parameter handling and
output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from LibrarySearch.core.models import SearchFilter, Sort
from LibrarySearch.parser import SortParams, normalize, resolve_sort
from LibrarySearch.renderers import OutputWriter
from LibrarySearch.utils.log import log


@dataclass(slots=True)
class ParseCommand:
    """Normalize each query and hand the filters to the output writer."""

    queries: Sequence[str]
    output_writer: OutputWriter

    def execute(self) -> list[SearchFilter]:
        filters: list[SearchFilter] = []
        multiple = len(self.queries) > 1
        for idx, raw_query in enumerate(self.queries, start=1):
            if multiple:
                log.debug("Normalizing query %d/%d: %r", idx, len(self.queries), raw_query)
            search_filter = normalize(raw_query)
            filters.append(search_filter)
            self.output_writer.write_filter(raw_query, search_filter)
        return filters


@dataclass(slots=True)
class SortCommand:
    """Resolve a structured sort request."""

    params: SortParams | None

    def execute(self) -> Sort:
        sort = resolve_sort(self.params)
        log.info("Sort: %s %s", sort.by.value, sort.order.value)
        return sort
