"""Scan a local artifact tree."""

from __future__ import annotations

import os
from typing import Optional

from docsrouter.errors import LocalValidationError
from docsrouter.models import LocalFile
from docsrouter.util.hashing import md5_base64

from .filters import ExcludeMatcher


def scan_tree(root: str, matcher: Optional[ExcludeMatcher] = None) -> list[LocalFile]:
    """
    List files under root, skipping excluded paths, sorted by relative path.

    Symlinked directories are not followed. Files are hashed (md5, base64).

    Raises:
        LocalValidationError: if root is missing or not a directory, or a file
            cannot be read.
    """
    if not os.path.isdir(root):
        raise LocalValidationError(
            f"Artifact directory does not exist: {root}",
            details={"artifact_dir": root},
        )

    files: list[LocalFile] = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(dirpath, root)
        rel_dir = "" if rel_dir == "." else rel_dir.replace(os.sep, "/")
        dirnames.sort()

        for name in sorted(filenames):
            rel = f"{rel_dir}/{name}" if rel_dir else name
            if matcher is not None and matcher.is_excluded(rel):
                continue

            abs_path = os.path.join(dirpath, name)
            try:
                size = os.path.getsize(abs_path)
                md5 = md5_base64(abs_path)
            except OSError as exc:
                raise LocalValidationError(
                    f"Failed to read artifact file: {rel}",
                    details={"path": rel},
                    cause=exc,
                ) from exc
            files.append(LocalFile(path=rel, abs_path=abs_path, size=size, md5=md5))

    files.sort(key=lambda f: f.path)
    return files
