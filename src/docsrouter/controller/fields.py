"""Partial-response field selectors for Cloud Storage JSON API calls."""

from __future__ import annotations

# Only what the mirror diff compares.
OBJECT_FIELDS: str = "name,size,md5Hash"

LIST_FIELDS: str = f"nextPageToken,items({OBJECT_FIELDS})"
