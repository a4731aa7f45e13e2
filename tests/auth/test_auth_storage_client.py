import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from docsrouter.auth import EncryptedSecret, StorageClient
from docsrouter.errors import CredentialDecryptError, InvalidArgumentError

KEY = bytes(range(32))
IV = bytes(range(16))


def encrypt(plaintext: bytes) -> bytes:
    padder = padding.PKCS7(128).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(KEY), modes.CBC(IV)).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


class TestStorageClient(unittest.TestCase):
    def _secret(self, tmp: str, plaintext: bytes) -> EncryptedSecret:
        path = Path(tmp) / "cred.enc"
        path.write_bytes(encrypt(plaintext))
        return EncryptedSecret(str(path), key_hex=KEY.hex(), iv_hex=IV.hex())

    def test_get_credentials_uses_decrypted_info_in_memory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            client = StorageClient(self._secret(tmp, b'{"type": "service_account"}'))
            with patch(
                "google.oauth2.service_account.Credentials.from_service_account_info",
                return_value="CREDS",
            ) as factory:
                creds = client.get_credentials()

            self.assertEqual(creds, "CREDS")
            info = factory.call_args.args[0]
            self.assertEqual(info, {"type": "service_account"})
            self.assertEqual(
                factory.call_args.kwargs["scopes"], list(StorageClient.DEFAULT_SCOPES)
            )
            # Only the encrypted blob exists on disk.
            self.assertEqual(sorted(p.name for p in Path(tmp).iterdir()), ["cred.enc"])

    def test_non_json_plaintext(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            client = StorageClient(self._secret(tmp, b"not json"))
            with self.assertRaises(CredentialDecryptError):
                client.get_credentials()

    def test_invalid_scopes(self) -> None:
        secret = EncryptedSecret("x.enc", key_hex=KEY.hex(), iv_hex=IV.hex())
        with self.assertRaises(InvalidArgumentError):
            StorageClient(secret).get_credentials(scopes=[])


if __name__ == "__main__":
    unittest.main()
