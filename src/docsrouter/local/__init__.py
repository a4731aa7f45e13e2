"""Local artifact tree helpers."""

from __future__ import annotations

from .filters import ExcludeMatcher, load_exclude_file
from .tree import scan_tree

__all__ = ["ExcludeMatcher", "load_exclude_file", "scan_tree"]
