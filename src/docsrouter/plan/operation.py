"""Mirror operation model (explicit fields; no args dict)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .actions import Action


@dataclass(slots=True)
class MirrorOperation:
    """A single file-level operation within a MirrorPlan."""

    op_id: str
    seq: int
    action: Action
    key: str

    local_path: Optional[str] = None
    content_type: Optional[str] = None

    def validate_required_fields(self) -> None:
        """Validate required fields according to action. Raises ValueError."""
        _require(self.key, "key")

        if self.action in (Action.UPLOAD, Action.UPDATE):
            _require(self.local_path, "local_path")
            return

        if self.action is Action.DELETE:
            return

        raise ValueError(f"Unsupported action: {self.action}")


def _require(value: object, field_name: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {field_name}")
