"""docsrouter public API."""

from __future__ import annotations

from docsrouter.auth import EncryptedSecret, StorageClient
from docsrouter.config import FailurePolicy, RouterConfig, TranslatablesConfig
from docsrouter.errors import (
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
from docsrouter.models import (
    BranchPush,
    DeployResult,
    DestinationResult,
    LocalFile,
    ManualDispatch,
    OperationResult,
    RemoteObject,
    TagPush,
    TriggerEvent,
    parse_trigger_event,
)
from docsrouter.plan import (
    Action,
    MirrorOperation,
    MirrorPlan,
    SyncPlan,
    latest_release_tag,
    resolve_sync_plan,
    should_push_translatables,
)
from docsrouter.router import DeploymentRouter
from docsrouter.translatables import TranslatablesPusher

__all__ = [
    # High-level
    "DeploymentRouter",
    "TranslatablesPusher",
    "RouterConfig",
    "TranslatablesConfig",
    "FailurePolicy",
    # Auth
    "EncryptedSecret",
    "StorageClient",
    # Events / Plan / Models
    "BranchPush",
    "TagPush",
    "ManualDispatch",
    "TriggerEvent",
    "parse_trigger_event",
    "latest_release_tag",
    "resolve_sync_plan",
    "should_push_translatables",
    "Action",
    "MirrorOperation",
    "MirrorPlan",
    "SyncPlan",
    "LocalFile",
    "RemoteObject",
    "OperationResult",
    "DestinationResult",
    "DeployResult",
    # Errors
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
