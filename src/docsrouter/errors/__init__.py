"""Public error exports for docsrouter."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    ClassificationError,
    ConflictError,
    CredentialDecryptError,
    DocsRouterError,
    GitError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    LocalValidationError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    SyncError,
    map_http_error,
)

__all__ = [
    "DocsRouterError",
    "ClassificationError",
    "CredentialDecryptError",
    "LocalValidationError",
    "InvalidStateError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "SyncError",
    "GitError",
    "HttpErrorInfo",
    "map_http_error",
]
