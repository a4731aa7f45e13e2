"""DeploymentRouter: resolves trigger events and mirrors artifacts to each destination."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from docsrouter.auth import EncryptedSecret
from docsrouter.config import FailurePolicy, RouterConfig
from docsrouter.controller import StorageController
from docsrouter.errors import (
    AuthError,
    CredentialDecryptError,
    DocsRouterError,
    InvalidArgumentError,
    InvalidStateError,
    PermissionError,
)
from docsrouter.local import ExcludeMatcher, load_exclude_file, scan_tree
from docsrouter.models import (
    DeployResult,
    DestinationResult,
    LocalFile,
    OperationResult,
    TriggerEvent,
    event_kind,
)
from docsrouter.plan import (
    Action,
    MirrorOperation,
    MirrorPlan,
    SyncPlan,
    build_mirror_plan,
    latest_release_tag,
    resolve_sync_plan,
)

logger = logging.getLogger(__name__)


class DeploymentRouter:
    """High-level router: event -> SyncPlan -> mirror each destination."""

    def __init__(
        self,
        config: RouterConfig,
        *,
        secret: Optional[EncryptedSecret] = None,
    ) -> None:
        self._config = config
        self._secret = secret
        self._controller: Optional[StorageController] = None
        self._matcher: Optional[ExcludeMatcher] = None

    @classmethod
    def from_controller(
        cls,
        config: RouterConfig,
        controller: StorageController,
    ) -> "DeploymentRouter":
        """Create router with an injected controller (useful for tests)."""
        obj = cls(config)
        obj._controller = controller
        return obj

    @classmethod
    def from_credential(
        cls,
        config: RouterConfig,
        *,
        key_hex: str,
        iv_hex: str,
    ) -> "DeploymentRouter":
        """
        Create router whose object store credential is config.credential_file,
        opened with key_hex/iv_hex when the first destination is synced.

        Raises:
            InvalidStateError: config.credential_file is not set.
            CredentialDecryptError: key_hex or iv_hex is empty.
        """
        if config.credential_file is None:
            raise InvalidStateError(
                "RouterConfig.credential_file is required",
                details={"bucket": config.bucket},
            )
        secret = EncryptedSecret(config.credential_file, key_hex=key_hex, iv_hex=iv_hex)
        return cls(config, secret=secret)

    @property
    def config(self) -> RouterConfig:
        return self._config

    # ----------------------------
    # Resolution
    # ----------------------------
    def resolve(self, event: TriggerEvent, tags: Iterable[str]) -> SyncPlan:
        """
        Compute the SyncPlan for event given the repository tag history.

        Raises:
            ClassificationError: unhandled branch, tag format or event type.
        """
        logger.info("Resolving %s event", event_kind(event))
        latest = latest_release_tag(tags)
        logger.info("Latest release tag: '%s'", latest or "")
        return resolve_sync_plan(
            event,
            latest,
            primary_branch=self._config.primary_branch,
        )

    # ----------------------------
    # Planning / apply
    # ----------------------------
    def plan(self, sync_plan: SyncPlan, artifact_dir: str) -> list[MirrorPlan]:
        """Build one MirrorPlan per destination without writing anything."""
        if sync_plan.is_empty:
            return []
        local_files = self._scan(artifact_dir)
        controller = self._get_controller()
        return [
            build_mirror_plan(
                self._config.location_for(prefix),
                local_files,
                controller.list_objects(self._config.location_for(prefix)),
                self._get_matcher(),
            )
            for prefix in sync_plan.prefixes
        ]

    def deploy(self, sync_plan: SyncPlan, artifact_dir: str) -> DeployResult:
        """
        Mirror artifact_dir to every destination of sync_plan, in order.

        Policy:
            - Empty plan: no-op success, no credential is decrypted.
            - Within a destination, the first failed operation stops it.
            - FAIL_FAST: after a failed destination the rest are skipped.
              CONTINUE: every destination is attempted.
            - Fatal errors (auth, permission, invalid argument/state,
              credential decryption) are raised.
        """
        if sync_plan.is_empty:
            logger.info("Nothing to deploy to.")
            return DeployResult(status="noop", summary=_summarize([]))

        local_files = self._scan(artifact_dir)
        controller = self._get_controller()

        destinations: list[DestinationResult] = []
        stop = False
        for prefix in sync_plan.prefixes:
            location = self._config.location_for(prefix)
            if stop:
                destinations.append(
                    DestinationResult(prefix=prefix, location=location, status="skipped")
                )
                continue

            logger.info("Deploying to '%s/%s'", controller.bucket, location)
            result = self._deploy_one(controller, prefix, location, local_files)
            destinations.append(result)

            if result.status == "failed":
                logger.error(
                    "Deployment to '%s' failed: %s",
                    location,
                    result.error_message,
                )
                if self._config.failure_policy is FailurePolicy.FAIL_FAST:
                    stop = True
            else:
                logger.info(
                    "Deployed '%s': %d transferred, %d deleted",
                    location,
                    result.transfers,
                    result.deletions,
                )

        failed = any(d.status == "failed" for d in destinations)
        return DeployResult(
            status="failed" if failed else "success",
            destinations=destinations,
            summary=_summarize(destinations),
        )

    # ----------------------------
    # Internals
    # ----------------------------
    def _deploy_one(
        self,
        controller: StorageController,
        prefix: str,
        location: str,
        local_files: list[LocalFile],
    ) -> DestinationResult:
        try:
            remote = controller.list_objects(location)
        except DocsRouterError as exc:
            if _is_fatal(exc):
                raise
            return _failed_destination(prefix, location, exc, [])

        plan = build_mirror_plan(location, local_files, remote, self._get_matcher())
        if plan.is_noop:
            logger.info("'%s' is up to date", location)
            return DestinationResult(prefix=prefix, location=location, status="success")

        ops_by_id = {op.op_id: op for op in plan.operations}
        results: list[OperationResult] = []
        for op_id in plan.apply_order:
            op = ops_by_id[op_id]
            try:
                op.validate_required_fields()
            except ValueError as exc:
                raise InvalidArgumentError(
                    "Invalid operation: missing required fields",
                    details={"op_id": op.op_id, "action": op.action.value},
                    cause=exc,
                ) from exc

            try:
                self._apply_one(controller, location, op)
                results.append(_success_result(op))
            except DocsRouterError as exc:
                if _is_fatal(exc):
                    raise
                results.append(_failed_result(op, exc))
                failure = _failed_destination(prefix, location, exc, results)
                failure.stopped_op_id = op.op_id
                return failure

        return DestinationResult(
            prefix=prefix,
            location=location,
            status="success",
            results=results,
        )

    def _apply_one(
        self,
        controller: StorageController,
        location: str,
        op: MirrorOperation,
    ) -> None:
        if op.action in (Action.UPLOAD, Action.UPDATE):
            controller.upload(
                op.local_path,  # type: ignore[arg-type]
                location,
                op.key,
                content_type=op.content_type or "application/octet-stream",
            )
            return

        if op.action is Action.DELETE:
            controller.delete(location, op.key)
            return

        raise InvalidArgumentError("Unsupported action", details={"action": op.action})

    def _scan(self, artifact_dir: str) -> list[LocalFile]:
        files = scan_tree(artifact_dir, self._get_matcher())
        logger.info("Found %d artifact files under %s", len(files), artifact_dir)
        return files

    def _get_matcher(self) -> ExcludeMatcher:
        if self._matcher is None:
            self._matcher = load_exclude_file(self._config.exclude_file)
        return self._matcher

    def _get_controller(self) -> StorageController:
        # Built lazily so the credential is decrypted only when a write is due.
        if self._controller is None:
            if self._secret is None:
                raise InvalidStateError(
                    "No credential configured for the object store",
                    details={"bucket": self._config.bucket},
                )
            self._controller = StorageController(self._config.bucket, self._secret)
        return self._controller


def _is_fatal(exc: DocsRouterError) -> bool:
    return isinstance(
        exc,
        (
            AuthError,
            PermissionError,
            InvalidArgumentError,
            InvalidStateError,
            CredentialDecryptError,
        ),
    )


def _success_result(op: MirrorOperation) -> OperationResult:
    return OperationResult(
        op_id=op.op_id,
        seq=op.seq,
        action=op.action.value,
        key=op.key,
        status="success",
    )


def _failed_result(op: MirrorOperation, exc: DocsRouterError) -> OperationResult:
    return OperationResult(
        op_id=op.op_id,
        seq=op.seq,
        action=op.action.value,
        key=op.key,
        status="failed",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        error_details=getattr(exc, "details", None),
    )


def _failed_destination(
    prefix: str,
    location: str,
    exc: DocsRouterError,
    results: list[OperationResult],
) -> DestinationResult:
    return DestinationResult(
        prefix=prefix,
        location=location,
        status="failed",
        results=results,
        error_type=exc.__class__.__name__,
        error_message=f"Sync to '{location}' failed: {exc}",
    )


def _summarize(destinations: list[DestinationResult]) -> dict[str, int]:
    summary: dict[str, int] = {
        "success": 0,
        "failed": 0,
        "skipped": 0,
        "transferred": 0,
        "deleted": 0,
    }
    for d in destinations:
        summary[d.status] = summary.get(d.status, 0) + 1
        summary["transferred"] += d.transfers
        summary["deleted"] += d.deletions
    return summary
