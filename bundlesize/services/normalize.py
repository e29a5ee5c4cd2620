from __future__ import annotations

import re
from typing import Callable

Normalizer = Callable[[str], str]


def identity(filename: str) -> str:
    return filename


def _mask(match: re.Match[str]) -> str:
    text = match.group(0)
    hashes = [value for value in match.groups() if value]
    if not hashes:
        return ""
    for value in hashes:
        text = text.replace(value, "*" * len(value), 1)
    return text


def strip_hash(pattern: str | None) -> Normalizer:
    """Build a normalizer that masks content hashes captured by *pattern*.

    Each captured hash is overwritten with ``*`` so that ``app.a1b2c3d4.js``
    and ``app.99ffee00.js`` normalize to the same ``app.********.js``.  A match
    without any non-empty capture is removed entirely.  Filenames the pattern
    does not match are returned unchanged.  Without a pattern the
    :func:`identity` normalizer is returned.
    """
    if not pattern:
        return identity

    regex = re.compile(pattern)

    def normalize(filename: str) -> str:
        return regex.sub(_mask, filename, count=1)

    return normalize
