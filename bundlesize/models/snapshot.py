from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias

# Normalized filename -> byte size.
SizeSnapshot: TypeAlias = Mapping[str, int]

# Display strings for one table line: filename, size, delta text, icon.
ReportRow: TypeAlias = list[str]


def freeze_snapshot(sizes: Mapping[str, int]) -> SizeSnapshot:
    """Return a read-only copy of *sizes*, preserving key order."""
    return MappingProxyType(dict(sizes))


@dataclass(slots=True, frozen=True)
class FileDiff:
    filename: str
    size: int
    delta: int

    @property
    def original_size(self) -> int:
        return self.size - self.delta


@dataclass(slots=True, frozen=True)
class DevStats:
    size: int = 0
    count: int = 0


@dataclass(slots=True, frozen=True)
class Baseline:
    """Canonical in-memory shape of a stored size document."""

    bundle: SizeSnapshot = field(default_factory=lambda: freeze_snapshot({}))
    dev_stats: DevStats | None = None

    @classmethod
    def empty(cls) -> Baseline:
        return cls()
