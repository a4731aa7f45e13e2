"""Thin wrapper around the git command line."""

from __future__ import annotations

import logging
import subprocess
from typing import Mapping, Optional, Sequence

from docsrouter.errors import GitError

logger = logging.getLogger(__name__)


def run_git(
    args: Sequence[str],
    *,
    cwd: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Run `git <args>` and return stdout.

    Raises:
        GitError: if git is missing or exits non-zero. The message names the
            git subcommand only; stderr is kept in details.
    """
    cmd = ["git", *args]
    logger.debug("Running git %s", args[0] if args else "")
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise GitError("git is not available", cause=exc) from exc

    if proc.returncode != 0:
        raise GitError(
            f"git {args[0] if args else ''} failed with exit code {proc.returncode}",
            details={"returncode": proc.returncode, "stderr": proc.stderr.strip()},
        )
    return proc.stdout


def list_tags(repo_dir: str = ".") -> list[str]:
    """Return all tag names of the repository at repo_dir."""
    out = run_git(["tag", "--list"], cwd=repo_dir)
    return [line.strip() for line in out.splitlines() if line.strip()]
