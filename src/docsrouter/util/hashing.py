from __future__ import annotations

import base64
import hashlib

_CHUNK_SIZE = 1024 * 1024


def md5_base64(path: str) -> str:
    """
    Return the base64-encoded MD5 digest of a file.

    This is the encoding Cloud Storage reports in an object's md5Hash.
    """
    digest = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return base64.b64encode(digest.digest()).decode("ascii")
