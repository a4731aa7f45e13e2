"""Build an authenticated Cloud Storage service from an encrypted credential."""

from __future__ import annotations

import json
from typing import Any, Sequence

from docsrouter.errors import AuthError, CredentialDecryptError, InvalidArgumentError

from .secret import EncryptedSecret


class StorageClient:
    """
    Create credentials and Cloud Storage API service objects.

    The service-account key is decrypted right before the credentials are
    built and lives only in memory; nothing is written to disk.
    """

    DEFAULT_SCOPES: tuple[str, ...] = (
        "https://www.googleapis.com/auth/devstorage.read_write",
    )

    def __init__(self, secret: EncryptedSecret) -> None:
        self._secret = secret

    def get_credentials(self, scopes: Sequence[str] = DEFAULT_SCOPES):
        """
        Return service-account credentials for the given scopes.

        Returns:
            google.oauth2.service_account.Credentials

        Raises:
            CredentialDecryptError: if the blob cannot be decrypted or parsed.
            AuthError: if the credentials cannot be built.
            InvalidArgumentError: if scopes is invalid.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise InvalidArgumentError("scopes must be a non-empty sequence of strings")

        try:
            from google.oauth2 import service_account
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth"},
                cause=exc,
            ) from exc

        info = _load_service_account_info(self._secret)
        try:
            return service_account.Credentials.from_service_account_info(
                info,
                scopes=list(scopes),
            )
        except Exception:
            raise AuthError(
                "Failed to build service account credentials",
                details={"encrypted_file": self._secret.encrypted_file},
            ) from None

    def build_storage_service(self, scopes: Sequence[str] = DEFAULT_SCOPES):
        """
        Build a Cloud Storage JSON API service resource.

        Returns:
            googleapiclient.discovery.Resource
        """
        try:
            from googleapiclient.discovery import build
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-api-python-client is not available",
                details={"hint": "Install google-api-python-client"},
                cause=exc,
            ) from exc

        creds = self.get_credentials(scopes=scopes)
        try:
            return build("storage", "v1", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Storage service", cause=exc) from exc


def _load_service_account_info(secret: EncryptedSecret) -> dict[str, Any]:
    plaintext = secret.decrypt()
    try:
        info = json.loads(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise CredentialDecryptError(
            "Decrypted credential is not valid JSON",
            details={"encrypted_file": secret.encrypted_file},
        ) from None
    if not isinstance(info, dict):
        raise CredentialDecryptError(
            "Decrypted credential must be a JSON object",
            details={"encrypted_file": secret.encrypted_file},
        )
    return info
