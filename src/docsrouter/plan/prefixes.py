"""Resolve a trigger event into destination prefixes."""

from __future__ import annotations

import logging
from typing import Optional

from docsrouter.errors import ClassificationError
from docsrouter.models import BranchPush, ManualDispatch, TagPush, TriggerEvent

from .sync_plan import SyncPlan
from .versions import is_release_tag, minor_series

logger = logging.getLogger(__name__)

DEV_PREFIX: str = "dev"
ROOT_PREFIX: str = ""
STABLE_PREFIX_FMT: str = "stable/{minor}"


def resolve_sync_plan(
    event: TriggerEvent,
    latest_tag: Optional[str],
    *,
    primary_branch: str = "main",
) -> SyncPlan:
    """
    Compute the SyncPlan for an event.

    Rules:
        - BranchPush to primary_branch -> ("dev",); other branches are rejected.
        - TagPush of a release tag -> ("stable/<major>.<minor>",), plus the
          root ("") when the tag is the latest release tag.
        - ManualDispatch -> (requested_prefix,) verbatim, or nothing when
          do_deploy is False.

    Raises:
        ClassificationError: unhandled branch, tag format or event type.
    """
    if isinstance(event, BranchPush):
        if event.branch_name != primary_branch:
            raise ClassificationError(
                f"Push to unhandled branch '{event.branch_name}'",
                details={"branch": event.branch_name, "primary_branch": primary_branch},
            )
        plan = SyncPlan.build(event, [DEV_PREFIX], latest_tag)

    elif isinstance(event, TagPush):
        tag = event.tag_name
        if not is_release_tag(tag):
            raise ClassificationError(
                f"Unhandled tag format '{tag}'",
                details={"tag": tag},
            )
        minor = minor_series(tag)
        logger.info("Full tag: %s; minor version: %s", tag, minor)
        prefixes = [STABLE_PREFIX_FMT.format(minor=minor)]
        if latest_tag is not None and tag == latest_tag:
            prefixes.append(ROOT_PREFIX)
        plan = SyncPlan.build(event, prefixes, latest_tag)

    elif isinstance(event, ManualDispatch):
        if not event.do_deploy:
            plan = SyncPlan.build(event, [], latest_tag)
        else:
            plan = SyncPlan.build(event, [event.requested_prefix], latest_tag)

    else:
        raise ClassificationError(
            "Unhandled event type",
            details={"event_type": type(event).__name__},
        )

    if plan.is_empty:
        logger.info("Nothing to deploy to.")
    else:
        logger.info("Chosen deployment prefixes: '%s'", plan.joined())
    return plan


def should_push_translatables(event: TriggerEvent, latest_tag: Optional[str]) -> bool:
    """
    Return True if translatable strings should be pushed for this event.

    Fires on a manual dispatch that asks for it, or on a tag push of the
    latest release tag.
    """
    if isinstance(event, ManualDispatch):
        return event.do_translatables
    if isinstance(event, TagPush):
        return latest_tag is not None and event.tag_name == latest_tag
    return False
