from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bundlesize.models.enums import Compression

# (json_key, attr_name) for optional string settings; None disables the feature.
_OPTIONAL_STR_FIELDS: tuple[tuple[str, str], ...] = (
    ("stripHash", "strip_hash"),
    ("excludePattern", "exclude_pattern"),
    ("trimPath", "trim_path"),
)

# Thresholds below this are floored rather than rejected.
MIN_THRESHOLD = 0


def threshold_bytes(raw: Any) -> int:
    """Coerce a threshold from the config file or the command line to whole bytes."""
    return max(MIN_THRESHOLD, int(raw))


def _get_optional_str(data: dict[str, Any], json_key: str, default: str | None) -> str | None:
    if json_key not in data:
        return default
    raw = data[json_key]
    return str(raw) if raw else None


@dataclass(slots=True)
class ReportConfig:
    show_total: bool = True
    collapse_unchanged: bool = True
    omit_unchanged: bool = False
    minimum_change_threshold: int = 10


@dataclass(slots=True)
class MeasureConfig:
    pattern: str = "./build/**/*.{js,css,html}"
    exclude: str = "{**/*.map,**/node_modules/**}"
    compression: Compression = Compression.GZIP
    strip_hash: str | None = r"\.(\w{8})\.js$"
    exclude_pattern: str | None = r"/precache-manifest\."
    trim_path: str | None = "/build/output"


@dataclass(slots=True)
class AppConfig:
    measure: MeasureConfig = field(default_factory=MeasureConfig)
    threshold: int = 10
    dev_stats_dir: str = "./node_modules"

    def report_config(self, threshold: int | None = None) -> ReportConfig:
        effective = self.threshold if threshold is None else threshold_bytes(threshold)
        return ReportConfig(
            show_total=True,
            collapse_unchanged=True,
            omit_unchanged=False,
            minimum_change_threshold=effective,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.measure.pattern,
            "exclude": self.measure.exclude,
            "compression": self.measure.compression.value,
            "stripHash": self.measure.strip_hash,
            "excludePattern": self.measure.exclude_pattern,
            "trimPath": self.measure.trim_path,
            "threshold": self.threshold,
            "devStatsDir": self.dev_stats_dir,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], defaults: AppConfig) -> AppConfig:
        compression_raw = data.get("compression")
        if compression_raw is not None:
            compression = Compression.from_str(compression_raw)
        else:
            compression = defaults.measure.compression

        str_kwargs: dict[str, str | None] = {}
        for json_key, attr in _OPTIONAL_STR_FIELDS:
            str_kwargs[attr] = _get_optional_str(data, json_key, getattr(defaults.measure, attr))

        measure = MeasureConfig(
            pattern=str(data.get("pattern", defaults.measure.pattern)),
            exclude=str(data.get("exclude", defaults.measure.exclude)),
            compression=compression,
            **str_kwargs,
        )

        return cls(
            measure=measure,
            dev_stats_dir=str(data.get("devStatsDir", defaults.dev_stats_dir)),
            threshold=threshold_bytes(data.get("threshold", defaults.threshold)),
        )
