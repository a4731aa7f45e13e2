"""Cloud Storage API controller (internal use only)."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from docsrouter.auth import EncryptedSecret, StorageClient
from docsrouter.errors import (
    ApiError,
    AuthError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    RateLimitError,
    map_http_error,
)
from docsrouter.models import RemoteObject

from .fields import LIST_FIELDS, OBJECT_FIELDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class StorageController:
    """
    Object store controller for one bucket (internal only).

    Notes:
        - The API `service` object is NOT exposed.
        - Locations are "/"-separated object name prefixes inside the bucket.
    """

    def __init__(self, bucket: str, secret: EncryptedSecret) -> None:
        if not bucket:
            raise InvalidArgumentError("bucket must be a non-empty string")
        self._bucket = bucket
        self._retry_policy = _RetryPolicy()
        self._service = StorageClient(secret).build_storage_service()

    @classmethod
    def from_service(cls, service: Any, bucket: str) -> "StorageController":
        """Create controller from a pre-built Storage service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._bucket = bucket
        obj._retry_policy = _RetryPolicy()
        obj._service = service
        return obj

    @property
    def bucket(self) -> str:
        return self._bucket

    # ----------------------------
    # Public API
    # ----------------------------
    def list_objects(self, location: str) -> list[RemoteObject]:
        """List every object under location (paginated)."""
        prefix = location_prefix(location)
        results: list[RemoteObject] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.objects().list(
                bucket=self._bucket,
                prefix=prefix or None,
                fields=LIST_FIELDS,
                pageToken=page_token,
            )
            data = self._execute(req.execute)
            for item in data.get("items", []) or []:
                obj = _object_dict_to_remote_object(item, prefix)
                if obj is not None:
                    results.append(obj)

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return results

    def upload(self, local_path: str, location: str, key: str, *, content_type: str) -> None:
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")

        try:
            from googleapiclient.http import MediaFileUpload
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-api-python-client is not available",
                cause=exc,
            ) from exc

        name = location_prefix(location) + key
        media = MediaFileUpload(local_path, mimetype=content_type, resumable=False)
        req = self._service.objects().insert(
            bucket=self._bucket,
            name=name,
            media_body=media,
            fields=OBJECT_FIELDS,
        )
        self._execute(req.execute)
        logger.debug("Uploaded gs://%s/%s", self._bucket, name)

    def delete(self, location: str, key: str) -> None:
        name = location_prefix(location) + key
        req = self._service.objects().delete(bucket=self._bucket, object=name)
        self._execute(req.execute)
        logger.debug("Deleted gs://%s/%s", self._bucket, name)

    # ----------------------------
    # Internals
    # ----------------------------
    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    logger.warning(
                        "Retrying after %s (attempt %d/%d)",
                        type(mapped).__name__,
                        attempt + 1,
                        self._retry_policy.max_retries,
                    )
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, RateLimitError):
            return True
        if isinstance(exc, NetworkError):
            return True
        if isinstance(exc, ApiError):
            status_code = getattr(exc, "details", {}).get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        try:
            from googleapiclient.errors import HttpError
        except Exception:  # pragma: no cover
            HttpError = None  # type: ignore[assignment]

        if HttpError is not None and isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Storage API error", cause=exc)


def location_prefix(location: str) -> str:
    """Object name prefix for a location ("" for the bucket root)."""
    stripped = location.strip("/")
    return f"{stripped}/" if stripped else ""


def _object_dict_to_remote_object(data: dict[str, Any], prefix: str) -> Optional[RemoteObject]:
    name = data.get("name")
    if not isinstance(name, str) or not name.startswith(prefix):
        return None
    key = name[len(prefix):]
    # Zero-byte "directory" placeholders have no file counterpart.
    if not key or key.endswith("/"):
        return None

    size = None
    if isinstance(data.get("size"), str) and data["size"].isdigit():
        size = int(data["size"])
    elif isinstance(data.get("size"), int):
        size = data["size"]

    md5 = data.get("md5Hash")
    return RemoteObject(
        key=key,
        name=name,
        size=size,
        md5=md5 if isinstance(md5, str) else None,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = {}
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
