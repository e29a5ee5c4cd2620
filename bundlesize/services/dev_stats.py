from __future__ import annotations

import logging
import os
from pathlib import Path

from bundlesize.models.snapshot import DevStats
from bundlesize.services.classify import severity_icon
from bundlesize.services.formatting import format_bytes

logger = logging.getLogger(__name__)


def folder_size(root: Path) -> int:
    """Total size of regular files under *root*; symlinks are not followed."""
    total = 0
    stack = [str(root)]
    while stack:
        path = stack.pop()
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        stack.append(entry.path)
                    elif entry.is_file(follow_symlinks=False):
                        total += entry.stat(follow_symlinks=False).st_size
        except OSError as exc:
            logger.debug("Skipping unreadable %s: %s", path, exc)
    return total


def collect_dev_stats(directory: Path) -> DevStats:
    if not directory.is_dir():
        logger.warning("Dev stats directory %s does not exist", directory)
        return DevStats()
    count = sum(1 for _ in directory.iterdir())
    return DevStats(size=folder_size(directory), count=count)


def _change(diff: int, original: int, text: str) -> str:
    sign = "+" if diff > 0 else "-"
    return f" (**{sign}{text}** change) {severity_icon(diff, original).value}"


def dev_stats_report(current: DevStats, previous: DevStats | None) -> str:
    count_change = ""
    size_change = ""
    if previous is not None:
        count_diff = current.count - previous.count
        size_diff = current.size - previous.size
        if count_diff:
            count_change = _change(count_diff, previous.count, str(abs(count_diff)))
        if size_diff:
            size_change = _change(size_diff, previous.size, format_bytes(abs(size_diff)))

    return (
        "## node_modules stats\n\n"
        f"**Module count:** {current.count}{count_change}\n\n"
        f"**Total Size:** {format_bytes(current.size)}{size_change}\n"
    )
