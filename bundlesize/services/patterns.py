# Glob helpers for selecting build output files.
#
# Patterns follow the usual bundler conventions:
#
#   ./build/**/*.{js,css,html}     include pattern, relative to the root
#   {**/*.map,**/node_modules/**}  exclude patterns
#
#   1. Brace expansion — expand_braces turns "*.{js,css}" into "*.js" and
#      "*.css".  A top-level brace group is how several exclude patterns are
#      packed into one string.
#
#   2. Include — each expanded pattern is handed to Path.glob, where "**"
#      matches zero or more directories.
#
#   3. Exclude — patterns are matched against the root-relative POSIX path
#      with fnmatchcase.  fnmatch's "*" already crosses "/", so "**/" only
#      needs care at the start (match top-level files too) and in the middle
#      (match zero directories).

from __future__ import annotations

from collections.abc import Iterator
from fnmatch import fnmatchcase
from pathlib import Path


def expand_braces(pattern: str) -> tuple[str, ...]:
    start = pattern.find("{")
    end = pattern.find("}", start + 1)
    if start == -1 or end == -1:
        return (pattern,)
    choices = pattern[start + 1 : end].split(",")
    prefix = pattern[:start]
    suffix = pattern[end + 1 :]
    expanded: list[str] = []
    for choice in choices:
        expanded.extend(expand_braces(f"{prefix}{choice}{suffix}"))
    return tuple(expanded)


def _strip_dot(pattern: str) -> str:
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern


def compile_globs(pattern: str | None) -> tuple[str, ...]:
    """Expand braces and drop leading ``./`` from every resulting pattern."""
    if not pattern:
        return ()
    return tuple(_strip_dot(p) for p in expand_braces(pattern) if p)


def match_glob(pattern: str, rel_path: str) -> bool:
    """Return True when *rel_path* (root-relative, ``/``-separated) matches."""
    if pattern.startswith("**/"):
        return fnmatchcase(f"/{rel_path}", pattern)
    if "/**/" in pattern and fnmatchcase(rel_path, pattern.replace("/**/", "/", 1)):
        return True
    return fnmatchcase(rel_path, pattern)


def matches_any(patterns: tuple[str, ...], rel_path: str) -> bool:
    for pattern in patterns:
        if match_glob(pattern, rel_path):
            return True
    return False


def iter_files(root: Path, include: tuple[str, ...], exclude: tuple[str, ...] = ()) -> Iterator[Path]:
    """Yield regular files under *root* matching *include* and none of *exclude*.

    Each file is yielded once, in sorted order.
    """
    found: set[Path] = set()
    for pattern in include:
        found.update(root.glob(pattern))
    for path in sorted(found):
        if not path.is_file():
            continue
        if exclude and matches_any(exclude, path.relative_to(root).as_posix()):
            continue
        yield path
