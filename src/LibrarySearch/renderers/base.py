"""Base classes for output writers.

Separates command control flow from how normalized filters are presented.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from LibrarySearch.core.models import SearchFilter


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_filter(self, raw_query: str, search_filter: SearchFilter) -> None:
        """Write the filter normalized from one query.

        Args:
            raw_query: Query text as given on the command line.
            search_filter: Normalized filter.
        """

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'parse').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_filter(self, raw_query: str, search_filter: SearchFilter) -> None:
        for writer in self.writers:
            writer.write_filter(raw_query, search_filter)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
