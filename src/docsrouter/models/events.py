"""Trigger event models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from docsrouter.errors import ClassificationError


@dataclass(slots=True, frozen=True)
class BranchPush:
    """A push to a branch."""

    branch_name: str


@dataclass(slots=True, frozen=True)
class TagPush:
    """A push of a tag."""

    tag_name: str


@dataclass(slots=True, frozen=True)
class ManualDispatch:
    """
    An operator-triggered run.

    requested_prefix is trusted verbatim, including the empty string (root).
    """

    requested_prefix: str = ""
    do_deploy: bool = False
    do_translatables: bool = False


TriggerEvent = Union[BranchPush, TagPush, ManualDispatch]


def event_kind(event: TriggerEvent) -> str:
    """Short name of the event variant, for logs and error details."""
    if isinstance(event, BranchPush):
        return "branch_push"
    if isinstance(event, TagPush):
        return "tag_push"
    if isinstance(event, ManualDispatch):
        return "manual_dispatch"
    raise ClassificationError(
        "Unhandled event type",
        details={"event_type": type(event).__name__},
    )


def parse_trigger_event(
    event_name: str,
    *,
    ref_type: Optional[str] = None,
    ref_name: Optional[str] = None,
    inputs: Optional[Mapping[str, Any]] = None,
) -> TriggerEvent:
    """
    Build a TriggerEvent from CI event metadata.

    Accepted shapes:
        - event_name="push", ref_type="branch", ref_name=<branch>
        - event_name="push", ref_type="tag", ref_name=<tag>
        - event_name="workflow_dispatch", inputs={deploy_prefix, do_deployment,
          do_translatables}

    Raises:
        ClassificationError: for any other event name or ref type.
    """
    if event_name == "push":
        if not ref_name:
            raise ClassificationError(
                "Push event without a ref name",
                details={"event_name": event_name, "ref_type": ref_type},
            )
        if ref_type == "branch":
            return BranchPush(branch_name=ref_name)
        if ref_type == "tag":
            return TagPush(tag_name=ref_name)
        raise ClassificationError(
            f"Unhandled reference type '{ref_type}'",
            details={"event_name": event_name, "ref_type": ref_type},
        )

    if event_name == "workflow_dispatch":
        data = dict(inputs or {})
        prefix = data.get("deploy_prefix")
        return ManualDispatch(
            requested_prefix="" if prefix is None else str(prefix),
            do_deploy=_as_bool(data.get("do_deployment")),
            do_translatables=_as_bool(data.get("do_translatables")),
        )

    raise ClassificationError(
        f"Unhandled event '{event_name}'",
        details={"event_name": event_name},
    )


def _as_bool(value: Any) -> bool:
    # Dispatch inputs may arrive as JSON booleans or as "true"/"false" strings.
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)
