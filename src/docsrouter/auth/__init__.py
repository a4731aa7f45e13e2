"""Public auth exports for docsrouter."""

from __future__ import annotations

from .secret import EncryptedSecret
from .storage_client import StorageClient

__all__ = ["EncryptedSecret", "StorageClient"]
