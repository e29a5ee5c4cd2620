from __future__ import annotations

from collections.abc import Sequence

_HEADER = ("Filename", "Size", "Change", "")
_ALIGN = (":---", ":---:", ":---:", ":---:")
_CHANGE_COLUMN = 2
_NO_CHANGE = "0 B"


def _format_line(columns: Sequence[str]) -> str:
    return f"| {' | '.join(columns)} |"


def markdown_table(rows: Sequence[Sequence[str]]) -> str:
    """Render *rows* as a Markdown table.

    Trailing columns that are empty in every row are dropped, and so is the
    ``Change`` column when it only ever reads ``0 B``.  Returns ``""`` when
    nothing is left to show.  *rows* is not modified.
    """
    if not rows:
        return ""

    table = [list(columns) for columns in rows]
    width = max(len(columns) for columns in table)
    for columns in table:
        columns.extend([""] * (width - len(columns)))

    while width and all(not columns[width - 1] for columns in table):
        width -= 1

    if width == 3 and all(columns[_CHANGE_COLUMN] == _NO_CHANGE for columns in table):
        width -= 1

    if width == 0:
        return ""

    lines = [_format_line(_HEADER[:width]), _format_line(_ALIGN[:width])]
    lines.extend(_format_line(columns[:width]) for columns in table)
    return "\n".join(lines)
