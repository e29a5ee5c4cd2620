from __future__ import annotations

import math

_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


def _trim_number(value: float) -> str:
    # Three significant digits, trailing zeros dropped ("1.10" -> "1.1", "100" -> "100").
    rounded = float(f"{value:.3g}")
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:g}"


def format_bytes(num: int | float) -> str:
    """Format a byte count with decimal units, e.g. ``1100 -> "1.1 kB"``."""
    prefix = "-" if num < 0 else ""
    magnitude = abs(num)
    if magnitude < 1000:
        return f"{prefix}{_trim_number(magnitude)} B"

    exponent = min(int(math.log10(magnitude) // 3), len(_UNITS) - 1)
    return f"{prefix}{_trim_number(magnitude / 1000**exponent)} {_UNITS[exponent]}"


def signed_bytes(num: int | float) -> str:
    """Like :func:`format_bytes` with an explicit ``+`` for growth."""
    return ("+" if num > 0 else "") + format_bytes(num)
