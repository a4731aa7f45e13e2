from __future__ import annotations

import mimetypes

DEFAULT_CONTENT_TYPE: str = "application/octet-stream"

# Types a docs build emits that mimetypes does not know on every platform.
DOCS_CONTENT_TYPES: dict[str, str] = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
    ".svg": "image/svg+xml",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ipynb": "application/x-ipynb+json",
    ".inv": "application/octet-stream",
    ".txt": "text/plain",
}


def guess_content_type(path: str) -> str:
    """Return the Content-Type to store an artifact file with."""
    lower = path.lower()
    for ext, content_type in DOCS_CONTENT_TYPES.items():
        if lower.endswith(ext):
            return content_type

    guessed, _ = mimetypes.guess_type(path)
    return guessed or DEFAULT_CONTENT_TYPE
