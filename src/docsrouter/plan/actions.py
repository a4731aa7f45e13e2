"""Mirror actions for docsrouter."""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """File-level actions of a mirror sync."""

    UPLOAD = "UPLOAD"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
