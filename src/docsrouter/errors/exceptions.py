"""Exception hierarchy and HTTP error mapping for docsrouter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DocsRouterError(Exception):
    """
    Root of every error docsrouter raises.

    details holds structured context (status code, location, file path) and
    never key material; cause is the wrapped lower-level exception, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ClassificationError(DocsRouterError):
    """Raised when a trigger event cannot be classified (branch, tag, event kind)."""


class CredentialDecryptError(DocsRouterError):
    """Raised when an encrypted credential blob cannot be decrypted."""


class LocalValidationError(DocsRouterError):
    """Raised when local inputs (artifact tree, exclude file) are invalid."""


class InvalidStateError(DocsRouterError):
    """A router or pusher is missing something it needs (e.g. a credential)."""


class AuthError(DocsRouterError):
    """Raised when authentication against the object store fails."""


class PermissionError(DocsRouterError):
    """The service account may not touch the bucket or object (403)."""


class InvalidArgumentError(DocsRouterError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class NotFoundError(DocsRouterError):
    """Raised when a remote resource is not found (HTTP 404)."""


class ConflictError(DocsRouterError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(DocsRouterError):
    """Throttled (429, or 403 with a rate-limit reason); retried."""


class QuotaExceededError(DocsRouterError):
    """Project quota exhausted (403 quotaExceeded); not retried."""


class NetworkError(DocsRouterError):
    """Connection failure or request timeout (408); retried."""


class ApiError(DocsRouterError):
    """Anything else the storage API returns; 5xx is retried."""


class SyncError(DocsRouterError):
    """Raised when mirroring one destination fails; details carry the location."""


class GitError(DocsRouterError):
    """Raised when a git invocation fails."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Status, reason and message pulled out of a googleapiclient HttpError."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


# 403 reasons Cloud Storage uses for throttling; mapped like 429.
_RATE_LIMIT_REASONS = frozenset({"rateLimitExceeded", "userRateLimitExceeded", "tooManyRequests"})
_QUOTA_REASONS = frozenset({"quotaExceeded", "dailyLimitExceeded"})
_QUOTA_DOMAIN = "usageLimits"

_STATUS_ERRORS: dict[int, type[DocsRouterError]] = {
    400: InvalidArgumentError,
    401: AuthError,
    404: NotFoundError,
    408: NetworkError,
    409: ConflictError,
    412: ConflictError,
    429: RateLimitError,
}


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> DocsRouterError:
    """
    Map a Cloud Storage JSON API error to a docsrouter exception.

    RateLimitError and NetworkError are the transient outcomes the
    controller retries; ApiError is retried only for 5xx.

        400            -> InvalidArgumentError
        401            -> AuthError
        403 throttled  -> RateLimitError
        403 quota      -> QuotaExceededError (reason, or the usageLimits domain)
        403 otherwise  -> PermissionError
        404            -> NotFoundError
        408            -> NetworkError
        409/412        -> ConflictError
        429            -> RateLimitError
        anything else  -> ApiError
    """
    details: dict[str, Any] = {"status_code": info.status_code, "reason": info.reason}
    if info.details:
        details.update(info.details)
    message = info.message or f"HTTP error {info.status_code}"
    status = info.status_code

    if status == 403:
        if info.reason in _RATE_LIMIT_REASONS:
            return RateLimitError(message, details=details, cause=cause)
        if info.reason in _QUOTA_REASONS or details.get("domain") == _QUOTA_DOMAIN:
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)

    error_cls = _STATUS_ERRORS.get(status, ApiError)
    return error_cls(message, details=details, cause=cause)

