from __future__ import annotations

import gzip
import logging
import re
from collections.abc import Mapping
from pathlib import Path

import brotli

from bundlesize.config.schema import MeasureConfig
from bundlesize.models.enums import Compression
from bundlesize.models.snapshot import SizeSnapshot, freeze_snapshot
from bundlesize.services.normalize import strip_hash
from bundlesize.services.patterns import compile_globs, iter_files

logger = logging.getLogger(__name__)


def compressed_size(data: bytes, compression: Compression) -> int:
    if compression is Compression.GZIP:
        return len(gzip.compress(data, compresslevel=9))
    if compression is Compression.BROTLI:
        return len(brotli.compress(data, quality=11))
    return len(data)


def measure_sizes(root: Path, config: MeasureConfig) -> dict[str, int]:
    """Measure every build file under *root* selected by *config*.

    Keys are root-relative paths with a leading ``/``, passed through the
    hash-stripping normalizer.  When two files normalize to the same key the
    later one (in sorted path order) wins.
    """
    normalize = strip_hash(config.strip_hash)
    include = compile_globs(config.pattern)
    exclude = compile_globs(config.exclude)

    sizes: dict[str, int] = {}
    for path in iter_files(root, include, exclude):
        key = normalize("/" + path.relative_to(root).as_posix())
        sizes[key] = compressed_size(path.read_bytes(), config.compression)
        logger.debug("Measured %s: %d bytes (%s)", key, sizes[key], config.compression.value)

    logger.info("Measured %d files under %s", len(sizes), root)
    return sizes


def clean_sizes(
    sizes: Mapping[str, int],
    exclude_pattern: str | None = None,
    trim_path: str | None = None,
) -> dict[str, int]:
    """Drop keys matching *exclude_pattern* and shorten keys by removing *trim_path*."""
    excluded = re.compile(exclude_pattern) if exclude_pattern else None
    cleaned: dict[str, int] = {}
    for name, size in sizes.items():
        if excluded is not None and excluded.search(name):
            continue
        key = name.replace(trim_path, "", 1) if trim_path else name
        cleaned[key] = size
    return cleaned


def read_current_sizes(root: Path, config: MeasureConfig) -> SizeSnapshot:
    return freeze_snapshot(clean_sizes(measure_sizes(root, config), config.exclude_pattern, config.trim_path))
