"""Public plan exports for docsrouter."""

from __future__ import annotations

from .actions import Action
from .mirror import build_mirror_plan
from .operation import MirrorOperation
from .ordering import build_apply_order
from .prefixes import (
    DEV_PREFIX,
    ROOT_PREFIX,
    resolve_sync_plan,
    should_push_translatables,
)
from .sync_plan import MirrorPlan, SyncPlan
from .versions import (
    is_release_tag,
    latest_release_tag,
    minor_series,
    parse_release_version,
)

__all__ = [
    "Action",
    "MirrorOperation",
    "MirrorPlan",
    "SyncPlan",
    "build_apply_order",
    "build_mirror_plan",
    "DEV_PREFIX",
    "ROOT_PREFIX",
    "resolve_sync_plan",
    "should_push_translatables",
    "is_release_tag",
    "latest_release_tag",
    "minor_series",
    "parse_release_version",
]
