"""Console text output.

Renders a `SearchFilter` into a short human-readable block and writes it
through the package logger.
"""

from __future__ import annotations

from LibrarySearch.core.models import DateFilter, FieldFilter, LabelFilterType, QueryDate, SearchFilter
from LibrarySearch.renderers.base import OutputWriter
from LibrarySearch.utils.log import log


def _fmt_bound(date: QueryDate | None) -> str:
    if date is None:
        return "*"
    if date.value is None:
        return f"<invalid {date.raw!r}>"
    return date.value.strftime("%Y-%m-%d")


def _fmt_date_filter(f: DateFilter) -> str:
    return f"{f.field} {_fmt_bound(f.start)}..{_fmt_bound(f.end)}"


def _fmt_field_filters(filters: tuple[FieldFilter, ...]) -> str:
    return ", ".join(f"{f.field}={f.value}" for f in filters)


def render_text(search_filter: SearchFilter) -> str:
    """Render a filter as text, one line per non-empty field.

    Args:
        search_filter: Normalized filter.

    Returns:
        A formatted string ready to be printed.
    """
    f = search_filter
    lines = [
        f"Query: {f.query if f.query is not None else '-'}",
        f"In: {f.in_filter.value}  Read: {f.read_filter.value}",
    ]
    if f.type_filter:
        lines.append(f"Type: {f.type_filter.value}")
    for label_filter in f.label_filters:
        sign = "-" if label_filter.type is LabelFilterType.EXCLUDE else "+"
        lines.append(f"Labels: {sign}{','.join(label_filter.labels)}")
    if f.sort:
        lines.append(f"Sort: {f.sort.by.value} {f.sort.order.value}")
    if f.has_filters:
        lines.append(f"Has: {', '.join(h.value for h in f.has_filters)}")
    for date_filter in f.date_filters:
        lines.append(f"Date: {_fmt_date_filter(date_filter)}")
    if f.term_filters:
        lines.append(f"Terms: {_fmt_field_filters(f.term_filters)}")
    if f.match_filters:
        lines.append(f"Match: {_fmt_field_filters(f.match_filters)}")
    if f.ids:
        lines.append(f"Ids: {', '.join(f.ids)}")
    if f.no_filters:
        lines.append(f"No: {', '.join(n.field for n in f.no_filters)}")
    if f.recommended_by:
        lines.append(f"Recommended by: {f.recommended_by}")
    if f.site_name:
        lines.append(f"Site: {f.site_name}")
    if f.subscription:
        lines.append(f"Subscription: {f.subscription}")
    return "\n".join(lines) + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write filters to console via logging."""

    def write_filter(self, raw_query: str, search_filter: SearchFilter) -> None:
        log.info("=== %s ===", raw_query or "(empty query)")
        for line in render_text(search_filter).splitlines():
            log.info(line)

    def finalize(self, action: str) -> None:
        """No-op for console output."""
