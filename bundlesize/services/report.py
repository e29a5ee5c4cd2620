from __future__ import annotations

from collections.abc import Iterable

from bundlesize.config.schema import ReportConfig
from bundlesize.models.snapshot import FileDiff, ReportRow
from bundlesize.services.classify import delta_text, severity_icon
from bundlesize.services.formatting import format_bytes
from bundlesize.services.table import markdown_table

UNCHANGED_TITLE = "View Unchanged"


def _file_row(diff: FileDiff) -> ReportRow:
    original_size = diff.original_size
    return [
        f"`{diff.filename}`",
        format_bytes(diff.size),
        delta_text(diff.delta, original_size),
        severity_icon(diff.delta, original_size).value,
    ]


def _details(title: str, body: str) -> str:
    return f"\n\n<details><summary>ℹ️ <strong>{title}</strong></summary>\n\n{body}\n\n</details>\n\n"


def _totals(total_size: int, total_delta: int) -> str:
    original_size = total_size - total_delta
    change = delta_text(total_delta, original_size)
    icon = severity_icon(total_delta, original_size).value
    return f"**Size Change:** {change} {icon}\n\n**Total Size:** {format_bytes(total_size)}\n\n"


def build_report(file_diffs: Iterable[FileDiff], config: ReportConfig) -> str:
    """Render a Markdown size report for *file_diffs*.

    Files whose absolute delta is below ``config.minimum_change_threshold``
    count as unchanged: they are dropped with ``omit_unchanged`` or moved to a
    collapsed "View Unchanged" section with ``collapse_unchanged``.  Totals
    always include every file, shown or not.

    Filenames are wrapped in backticks and otherwise emitted as-is.
    """
    changed_rows: list[ReportRow] = []
    unchanged_rows: list[ReportRow] = []
    total_size = 0
    total_delta = 0

    for diff in file_diffs:
        total_size += diff.size
        total_delta += diff.delta

        is_unchanged = abs(diff.delta) < config.minimum_change_threshold
        if is_unchanged and config.omit_unchanged:
            continue

        row = _file_row(diff)
        if is_unchanged and config.collapse_unchanged:
            unchanged_rows.append(row)
        else:
            changed_rows.append(row)

    out = markdown_table(changed_rows)
    if unchanged_rows:
        out += _details(UNCHANGED_TITLE, markdown_table(unchanged_rows))

    if config.show_total:
        out = _totals(total_size, total_delta) + out
    return out
