"""JSON output.

Renders filters into JSON-serialisable objects and writes them to a file
under `<base_dir>/json/` when the command finishes.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from LibrarySearch.core.models import SearchFilter
from LibrarySearch.renderers.base import OutputWriter
from LibrarySearch.utils.log import log


def render_json(raw_query: str, search_filter: SearchFilter) -> dict[str, Any]:
    """Render one query and its filter.

    Args:
        raw_query: Query text.
        search_filter: Normalized filter.

    Returns:
        Dict with the raw query and the filter payload.
    """
    return {"raw_query": raw_query, "filter": search_filter.to_dict()}


class JsonFileWriter(OutputWriter):
    """Accumulate results and write them to a JSON file on finalize."""

    def __init__(self, base_dir: str, indent: int = 2) -> None:
        """Initialize JSON writer.

        Args:
            base_dir: Base output directory.
            indent: JSON indentation width.
        """
        self.output_dir = Path(base_dir) / "json"
        self.indent = indent
        self.all_results: list[dict] = []
        self.output_path: Path | None = None

    def write_filter(self, raw_query: str, search_filter: SearchFilter) -> None:
        self.all_results.append(render_json(raw_query, search_filter))

    def finalize(self, action: str) -> None:
        """Write accumulated results to a timestamped JSON file.

        Args:
            action: The CLI command name (used in filename).
        """
        payload = json.dumps(self.all_results, ensure_ascii=False, indent=self.indent)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.output_path = self.output_dir / f"{action}_{timestamp}.json"
        self.output_path.write_text(payload, encoding="utf-8")
        log.info("JSON saved to %s", self.output_path)
