"""Diff a local artifact tree against a remote location."""

from __future__ import annotations

from typing import Optional

from docsrouter.local.filters import ExcludeMatcher
from docsrouter.models import LocalFile, RemoteObject
from docsrouter.util.ids import new_op_id, new_plan_id
from docsrouter.util.mime import guess_content_type
from docsrouter.util.time import now_utc

from .actions import Action
from .operation import MirrorOperation
from .ordering import build_apply_order
from .sync_plan import MirrorPlan


def build_mirror_plan(
    location: str,
    local_files: list[LocalFile],
    remote_objects: list[RemoteObject],
    matcher: Optional[ExcludeMatcher] = None,
) -> MirrorPlan:
    """
    Build the operations that make `location` match local_files.

    Rules:
        - Local file missing remotely -> UPLOAD.
        - Local file whose md5 or size differs remotely -> UPDATE.
        - Remote object absent locally -> DELETE, unless excluded.
        - Identical files produce no operation, so an unchanged tree yields an
          empty plan.
    """
    remote_by_key = {obj.key: obj for obj in remote_objects}
    local_keys: set[str] = set()
    ops: list[MirrorOperation] = []

    for lf in local_files:
        if matcher is not None and matcher.is_excluded(lf.path):
            continue
        local_keys.add(lf.path)

        remote = remote_by_key.get(lf.path)
        if remote is None:
            action = Action.UPLOAD
        elif _differs(lf, remote):
            action = Action.UPDATE
        else:
            continue

        op = MirrorOperation(
            op_id=new_op_id(),
            seq=len(ops),
            action=action,
            key=lf.path,
            local_path=lf.abs_path,
            content_type=guess_content_type(lf.path),
        )
        op.validate_required_fields()
        ops.append(op)

    for key in sorted(remote_by_key):
        if key in local_keys:
            continue
        if matcher is not None and matcher.is_excluded(key):
            continue
        op = MirrorOperation(
            op_id=new_op_id(),
            seq=len(ops),
            action=Action.DELETE,
            key=key,
        )
        op.validate_required_fields()
        ops.append(op)

    return MirrorPlan(
        plan_id=new_plan_id(),
        location=location,
        created_at=now_utc(),
        operations=ops,
        apply_order=build_apply_order(ops),
    )


def _differs(local: LocalFile, remote: RemoteObject) -> bool:
    if remote.md5 is not None:
        return remote.md5 != local.md5
    # No checksum (e.g. composite objects): fall back to size.
    return remote.size != local.size
