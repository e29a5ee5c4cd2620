from __future__ import annotations

import math

from bundlesize.models.enums import SeverityIcon
from bundlesize.services.formatting import signed_bytes

# (minimum percentage, icon), largest growth first.
_GROWTH_THRESHOLDS: tuple[tuple[int, SeverityIcon], ...] = (
    (50, SeverityIcon.CRITICAL_GROWTH),
    (20, SeverityIcon.WARNING_GROWTH),
    (10, SeverityIcon.CAUTION_GROWTH),
    (5, SeverityIcon.NOTICE_GROWTH),
)

# (maximum percentage, icon), largest shrink first.
_SHRINK_THRESHOLDS: tuple[tuple[int, SeverityIcon], ...] = (
    (-50, SeverityIcon.TROPHY_SHRINK),
    (-20, SeverityIcon.CELEBRATION_SHRINK),
    (-10, SeverityIcon.APPLAUSE_SHRINK),
    (-5, SeverityIcon.CHECK_SHRINK),
)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def percent_change(delta: int, original_size: int) -> int:
    """Whole-number percentage change; *original_size* must be non-zero."""
    return _round_half_away(delta / original_size * 100)


def delta_text(delta: int, original_size: int) -> str:
    text = signed_bytes(delta)
    if delta == 0:
        return text
    if original_size == 0:
        return f"{text} (new file)"
    if original_size == -delta:
        return f"{text} (removed)"
    percentage = percent_change(delta, original_size)
    return f"{text} ({'+' if percentage > 0 else ''}{percentage}%)"


def severity_icon(delta: int, original_size: int) -> SeverityIcon:
    if original_size == 0:
        return SeverityIcon.NEW

    percentage = percent_change(delta, original_size)
    for minimum, icon in _GROWTH_THRESHOLDS:
        if percentage >= minimum:
            return icon
    for maximum, icon in _SHRINK_THRESHOLDS:
        if percentage <= maximum:
            return icon
    return SeverityIcon.NONE
