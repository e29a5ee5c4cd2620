from __future__ import annotations

from bundlesize.config.schema import AppConfig, MeasureConfig
from bundlesize.models.enums import Compression


def default_config() -> AppConfig:
    return AppConfig(
        measure=MeasureConfig(
            pattern="./build/**/*.{js,css,html}",
            exclude="{**/*.map,**/node_modules/**}",
            compression=Compression.GZIP,
            strip_hash=r"\.(\w{8})\.js$",
            exclude_pattern=r"/precache-manifest\.",
            trim_path="/build/output",
        ),
        threshold=10,
        dev_stats_dir="./node_modules",
    )
