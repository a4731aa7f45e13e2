"""Result models for deploy runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

from docsrouter.errors import SyncError


OperationStatus = Literal["success", "failed"]
DestinationStatus = Literal["success", "failed", "skipped"]
DeployStatus = Literal["success", "failed", "noop"]


@dataclass(slots=True)
class OperationResult:
    """Result for a single MirrorOperation."""

    op_id: str
    seq: int
    action: str
    key: str
    status: OperationStatus

    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None


@dataclass(slots=True)
class DestinationResult:
    """Result of mirroring one destination prefix."""

    prefix: str
    location: str
    status: DestinationStatus
    results: list[OperationResult] = field(default_factory=list)
    stopped_op_id: Optional[str] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def transfers(self) -> int:
        """Number of successful uploads/updates."""
        return sum(
            1 for r in self.results
            if r.status == "success" and r.action != "DELETE"
        )

    @property
    def deletions(self) -> int:
        return sum(
            1 for r in self.results
            if r.status == "success" and r.action == "DELETE"
        )


@dataclass(slots=True)
class DeployResult:
    """Aggregate result of a deploy run over a SyncPlan."""

    status: DeployStatus
    destinations: list[DestinationResult] = field(default_factory=list)
    summary: dict[str, int] = field(default_factory=dict)

    @property
    def exit_code(self) -> int:
        return 1 if self.status == "failed" else 0

    @property
    def failed_prefixes(self) -> list[str]:
        return [d.prefix for d in self.destinations if d.status == "failed"]

    def raise_for_status(self) -> None:
        """Raise SyncError naming the failed destinations, if any."""
        if self.status != "failed":
            return
        failed = [d for d in self.destinations if d.status == "failed"]
        raise SyncError(
            "Deployment failed for: " + ", ".join(repr(d.location) for d in failed),
            details={
                "failed_prefixes": [d.prefix for d in failed],
                "errors": {d.location: d.error_message for d in failed},
            },
        )
