"""Encrypted secret blobs (AES-256-CBC, openssl `-K/-iv` compatible)."""

from __future__ import annotations

import binascii
import logging
from dataclasses import dataclass, field

from docsrouter.errors import CredentialDecryptError

logger = logging.getLogger(__name__)

_KEY_BYTES = 32
_IV_BYTES = 16


@dataclass(slots=True, frozen=True)
class EncryptedSecret:
    """
    A checked-in encrypted file plus the key/iv needed to open it.

    The blob is raw AES-256-CBC ciphertext with PKCS7 padding, as produced by
    `openssl aes-256-cbc -K <hex> -iv <hex> -in plain -out blob`. key_hex and
    iv_hex never appear in repr, messages or logs.
    """

    encrypted_file: str
    key_hex: str = field(repr=False)
    iv_hex: str = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.encrypted_file, str) or not self.encrypted_file.strip():
            raise CredentialDecryptError("encrypted_file must be a non-empty string")
        if not self.key_hex:
            raise CredentialDecryptError(
                "Decryption key is empty",
                details={"encrypted_file": self.encrypted_file},
            )
        if not self.iv_hex:
            raise CredentialDecryptError(
                "Decryption IV is empty",
                details={"encrypted_file": self.encrypted_file},
            )

    def decrypt(self) -> bytes:
        """
        Read and decrypt the blob. The plaintext is returned, never stored.

        Raises:
            CredentialDecryptError: unreadable file, malformed key/iv, or bad
                padding (wrong key or corrupted blob).
        """
        try:
            from cryptography.hazmat.primitives import padding
            from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
        except Exception as exc:  # pragma: no cover
            raise CredentialDecryptError(
                "cryptography is not available",
                details={"hint": "Install cryptography"},
                cause=exc,
            ) from exc

        key = _unhex(self.key_hex, _KEY_BYTES, "key", self.encrypted_file)
        iv = _unhex(self.iv_hex, _IV_BYTES, "IV", self.encrypted_file)

        try:
            with open(self.encrypted_file, "rb") as f:
                ciphertext = f.read()
        except OSError as exc:
            raise CredentialDecryptError(
                "Failed to read encrypted credential file",
                details={"encrypted_file": self.encrypted_file},
                cause=exc,
            ) from exc

        if not ciphertext or len(ciphertext) % _IV_BYTES:
            raise CredentialDecryptError(
                "Encrypted credential has an invalid length",
                details={"encrypted_file": self.encrypted_file},
            )

        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        try:
            padded = decryptor.update(ciphertext) + decryptor.finalize()
            plaintext = unpadder.update(padded) + unpadder.finalize()
        except ValueError:
            # No cause attached: the padding error can carry plaintext bytes.
            raise CredentialDecryptError(
                "Failed to decrypt credential (wrong key or corrupted file)",
                details={"encrypted_file": self.encrypted_file},
            ) from None

        logger.debug("Decrypted %s", self.encrypted_file)
        return plaintext


def _unhex(value: str, size: int, what: str, encrypted_file: str) -> bytes:
    try:
        raw = binascii.unhexlify(value.strip())
    except (binascii.Error, ValueError):
        raise CredentialDecryptError(
            f"Decryption {what} is not valid hex",
            details={"encrypted_file": encrypted_file},
        ) from None
    if len(raw) != size:
        raise CredentialDecryptError(
            f"Decryption {what} must be {size} bytes",
            details={"encrypted_file": encrypted_file, "actual_bytes": len(raw)},
        )
    return raw
