"""Public model exports for docsrouter."""

from __future__ import annotations

from .events import (
    BranchPush,
    ManualDispatch,
    TagPush,
    TriggerEvent,
    event_kind,
    parse_trigger_event,
)
from .objects import LocalFile, RemoteObject
from .results import (
    DeployResult,
    DeployStatus,
    DestinationResult,
    DestinationStatus,
    OperationResult,
    OperationStatus,
)

__all__ = [
    "BranchPush",
    "TagPush",
    "ManualDispatch",
    "TriggerEvent",
    "event_kind",
    "parse_trigger_event",
    "LocalFile",
    "RemoteObject",
    "OperationStatus",
    "DestinationStatus",
    "DeployStatus",
    "OperationResult",
    "DestinationResult",
    "DeployResult",
]
