from __future__ import annotations

from bundlesize.models.snapshot import FileDiff, SizeSnapshot


def diff_snapshots(previous: SizeSnapshot, current: SizeSnapshot) -> list[FileDiff]:
    """Pair up *previous* and *current* by filename.

    Files from *previous* come first in their stored order, followed by files
    that only exist in *current*.  A file missing on either side counts as 0
    bytes there.
    """
    filenames = dict.fromkeys(previous)
    filenames.update(dict.fromkeys(current))

    diffs: list[FileDiff] = []
    for filename in filenames:
        size = current.get(filename, 0)
        diffs.append(FileDiff(filename=filename, size=size, delta=size - previous.get(filename, 0)))
    return diffs
