"""Data models for local artifact files and remote objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class LocalFile:
    """
    A file of the local artifact tree.

    Notes:
        - path is relative to the artifact root, posix separators.
        - md5 is base64-encoded, the encoding the object store reports.
    """

    path: str
    abs_path: str
    size: int
    md5: str


@dataclass(slots=True)
class RemoteObject:
    """
    An object stored under a remote location.

    key is relative to the location (no leading slash); name is the full
    object name in the bucket.
    """

    key: str
    name: str
    size: Optional[int] = None
    md5: Optional[str] = None
