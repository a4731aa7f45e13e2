"""SyncPlan and MirrorPlan models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from docsrouter.models import TriggerEvent

from .operation import MirrorOperation


@dataclass(slots=True, frozen=True)
class SyncPlan:
    """
    Ordered, duplicate-free set of destination prefixes for one run.

    An empty prefix ("") is the documentation root and is distinct from an
    empty plan.
    """

    event: TriggerEvent
    prefixes: tuple[str, ...] = ()
    latest_tag: Optional[str] = None

    @classmethod
    def build(
        cls,
        event: TriggerEvent,
        prefixes: Iterable[str],
        latest_tag: Optional[str] = None,
    ) -> SyncPlan:
        """Collapse duplicates, keeping first-occurrence order."""
        unique = tuple(dict.fromkeys(prefixes))
        return cls(event=event, prefixes=unique, latest_tag=latest_tag)

    @property
    def destinations(self) -> list[str]:
        return list(self.prefixes)

    @property
    def is_empty(self) -> bool:
        return not self.prefixes

    def joined(self) -> str:
        """
        Colon-joined prefixes with a trailing colon.

        The trailing colon keeps a lone root prefix ("") distinguishable from
        an empty plan.
        """
        return "".join(f"{p}:" for p in self.prefixes)


@dataclass(slots=True)
class MirrorPlan:
    """File-level plan that makes one remote location match the artifact tree."""

    plan_id: str
    location: str
    created_at: datetime
    operations: list[MirrorOperation]
    apply_order: list[str]

    @property
    def is_noop(self) -> bool:
        return not self.operations

    def counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for op in self.operations:
            counts[op.action.value] = counts.get(op.action.value, 0) + 1
        return counts
