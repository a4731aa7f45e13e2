"""Apply ordering rules for MirrorPlan operations."""

from __future__ import annotations

from .actions import Action
from .operation import MirrorOperation


def build_apply_order(operations: list[MirrorOperation]) -> list[str]:
    """
    Build apply_order from operations.

    Rules:
        - Uploads and updates first, seq ascending.
        - Deletions last, deepest keys first (tie-breaker: seq ascending), so
          stale pages disappear only after their replacements are in place.
    """
    ops = sorted(operations, key=lambda op: op.seq)
    writes = [op for op in ops if op.action is not Action.DELETE]
    deletes = sorted(
        (op for op in ops if op.action is Action.DELETE),
        key=lambda op: (-op.key.count("/"), op.seq),
    )
    return [op.op_id for op in writes + deletes]
