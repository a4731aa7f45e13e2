"""Release tag parsing and latest-tag resolution."""

from __future__ import annotations

import re
from typing import Iterable, Optional

_RELEASE_TAG_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)", re.ASCII)


def parse_release_version(tag: str) -> Optional[tuple[int, int, int]]:
    """
    Return (major, minor, patch) for a full release tag, else None.

    Only bare MAJOR.MINOR.PATCH tags qualify; any prefix or suffix
    (pre-release, build metadata, "v") disqualifies the tag.
    """
    m = _RELEASE_TAG_RE.fullmatch(tag)
    if m is None:
        return None
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def is_release_tag(tag: str) -> bool:
    return parse_release_version(tag) is not None


def minor_series(tag: str) -> str:
    """Return "<major>.<minor>" of a release tag. Raises ValueError otherwise."""
    version = parse_release_version(tag)
    if version is None:
        raise ValueError(f"Not a release tag: {tag!r}")
    return f"{version[0]}.{version[1]}"


def latest_release_tag(tags: Iterable[str]) -> Optional[str]:
    """
    Return the full release tag with the highest (major, minor, patch).

    Ordering is numeric, not lexical. None means no stable release exists.
    """
    best: Optional[str] = None
    best_version: Optional[tuple[int, int, int]] = None
    for tag in tags:
        version = parse_release_version(tag)
        if version is None:
            continue
        if best_version is None or version > best_version:
            best, best_version = tag, version
    return best
