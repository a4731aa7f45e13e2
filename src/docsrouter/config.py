"""Router and translatables configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_NOTEBOOK_CELL_TIMEOUT = 300
DEFAULT_COMMIT_AUTHOR = "docsrouter <docsrouter@localhost>"


class FailurePolicy(str, Enum):
    """What to do with the remaining destinations after one fails."""

    FAIL_FAST = "fail-fast"
    CONTINUE = "continue"


@dataclass(slots=True, frozen=True)
class RouterConfig:
    """
    Explicit configuration for a DeploymentRouter.

    root_prefix is the fixed documentation root every destination lives
    under; it is never taken from operator input, so a dispatched prefix
    cannot reach outside it.

    credential_file is the encrypted service account key; its key/iv are
    not configuration and are handed to DeploymentRouter.from_credential.
    """

    bucket: str
    root_prefix: str = "documentation"
    primary_branch: str = "main"
    exclude_file: Optional[str] = None
    credential_file: Optional[str] = None
    failure_policy: FailurePolicy = FailurePolicy.FAIL_FAST

    def __post_init__(self) -> None:
        if not isinstance(self.bucket, str) or not self.bucket.strip():
            raise ValueError("RouterConfig.bucket must be a non-empty string")
        if not isinstance(self.root_prefix, str) or not self.root_prefix.strip("/"):
            raise ValueError("RouterConfig.root_prefix must be a non-empty path")
        if not self.primary_branch:
            raise ValueError("RouterConfig.primary_branch must be a non-empty string")
        if not isinstance(self.failure_policy, FailurePolicy):
            raise TypeError("RouterConfig.failure_policy must be a FailurePolicy")
        if self.credential_file is not None and not self.credential_file.strip():
            raise ValueError("RouterConfig.credential_file must be None or a non-empty path")

    def location_for(self, prefix: str) -> str:
        """Remote location of a destination prefix: "<root_prefix>/<prefix>"."""
        root = self.root_prefix.strip("/")
        return f"{root}/{prefix}".rstrip("/")


@dataclass(slots=True, frozen=True)
class TranslatablesConfig:
    """Where and as whom the translatable strings are pushed."""

    remote_url: str
    key_file: str
    branch: str = "translatables"
    commit_author: str = DEFAULT_COMMIT_AUTHOR

    def __post_init__(self) -> None:
        for name in ("remote_url", "key_file", "branch", "commit_author"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"TranslatablesConfig.{name} must be a non-empty string")


def docs_build_environment(
    notebook_cell_timeout: int = DEFAULT_NOTEBOOK_CELL_TIMEOUT,
) -> dict[str, str]:
    """
    Environment variables passed to the documentation build.

    notebook_cell_timeout is the per-cell execution ceiling (seconds); the
    router itself executes no notebooks.
    """
    if notebook_cell_timeout <= 0:
        raise ValueError("notebook cell timeout must be positive")
    return {"DOCS_CELL_TIMEOUT": str(notebook_cell_timeout)}
