from __future__ import annotations

from enum import Enum
from typing import Any


class SeverityIcon(str, Enum):
    NEW = "🆕"
    CRITICAL_GROWTH = "🆘"
    WARNING_GROWTH = "🚨"
    CAUTION_GROWTH = "⚠️"
    NOTICE_GROWTH = "🔍"
    TROPHY_SHRINK = "🏆"
    CELEBRATION_SHRINK = "🎉"
    APPLAUSE_SHRINK = "👏"
    CHECK_SHRINK = "✅"
    NONE = ""


class Compression(str, Enum):
    GZIP = "gzip"
    BROTLI = "brotli"
    NONE = "none"

    @classmethod
    def from_str(cls, value: Any) -> Compression:
        try:
            return cls(str(value).lower())
        except ValueError:
            msg = f"Unsupported compression: {value!r}. Use: {', '.join(c.value for c in cls)}."
            raise ValueError(msg) from None
