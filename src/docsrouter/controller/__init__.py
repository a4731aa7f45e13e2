"""Internal controller exports for docsrouter."""

from __future__ import annotations

from .storage_controller import StorageController, location_prefix

__all__ = ["StorageController", "location_prefix"]
