"""Push translatable-string files to a dedicated branch of a git repository."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import tempfile
from email.utils import parseaddr
from typing import Callable, Mapping, Optional, Sequence

from docsrouter.auth import EncryptedSecret
from docsrouter.config import DEFAULT_COMMIT_AUTHOR, TranslatablesConfig
from docsrouter.errors import InvalidArgumentError, LocalValidationError
from docsrouter.util.git import run_git

logger = logging.getLogger(__name__)

GitRunner = Callable[..., str]


class TranslatablesPusher:
    """
    Publish a translatables tree as the sole commit of `branch` on `remote_url`.

    The branch lives outside the main history and is overwritten by a force
    push on every run. The ssh deploy key is decrypted per push, written to a
    0600 file inside a temporary directory and removed with it.
    """

    def __init__(
        self,
        remote_url: str,
        secret: EncryptedSecret,
        *,
        branch: str = "translatables",
        author: str = DEFAULT_COMMIT_AUTHOR,
        git: GitRunner = run_git,
    ) -> None:
        if not remote_url:
            raise InvalidArgumentError("remote_url must be a non-empty string")
        if not branch:
            raise InvalidArgumentError("branch must be a non-empty string")
        name, email = parseaddr(author)
        if not name or not email:
            raise InvalidArgumentError(
                "author must look like 'Name <email>'",
                details={"author": author},
            )

        self._remote_url = remote_url
        self._secret = secret
        self._branch = branch
        self._author_name = name
        self._author_email = email
        self._git = git

    @classmethod
    def from_config(
        cls,
        config: TranslatablesConfig,
        *,
        key_hex: str,
        iv_hex: str,
        git: GitRunner = run_git,
    ) -> "TranslatablesPusher":
        """Create a pusher whose deploy key is config.key_file opened with key_hex/iv_hex."""
        return cls(
            config.remote_url,
            EncryptedSecret(config.key_file, key_hex=key_hex, iv_hex=iv_hex),
            branch=config.branch,
            author=config.commit_author,
            git=git,
        )

    @property
    def branch(self) -> str:
        return self._branch

    def push(self, source_dir: str, *, message: Optional[str] = None) -> None:
        """
        Commit source_dir on the branch and force-push it.

        Raises:
            LocalValidationError: if source_dir is missing or empty.
            CredentialDecryptError: if the deploy key cannot be decrypted.
            GitError: if any git step fails.
        """
        if not os.path.isdir(source_dir) or not os.listdir(source_dir):
            raise LocalValidationError(
                f"Translatables directory is missing or empty: {source_dir}",
                details={"source_dir": source_dir},
            )

        with tempfile.TemporaryDirectory(prefix="docsrouter-") as tmp:
            key_path = os.path.join(tmp, "deploy_key")
            _write_private(key_path, self._secret.decrypt())

            work = os.path.join(tmp, "work")
            shutil.copytree(source_dir, work)

            env = dict(os.environ)
            env["GIT_SSH_COMMAND"] = (
                f"ssh -i {shlex.quote(key_path)} -o IdentitiesOnly=yes "
                "-o StrictHostKeyChecking=accept-new"
            )
            self._run(["init", "-q"], work, env)
            self._run(["checkout", "-q", "-b", self._branch], work, env)
            self._run(["add", "-A"], work, env)
            self._run(
                [
                    "-c", f"user.name={self._author_name}",
                    "-c", f"user.email={self._author_email}",
                    "commit", "-q", "-m", message or "Update translatable strings",
                ],
                work,
                env,
            )
            logger.info("Pushing translatable strings to branch '%s'", self._branch)
            self._run(
                ["push", "--force", self._remote_url, f"{self._branch}:{self._branch}"],
                work,
                env,
            )

    def _run(self, args: Sequence[str], cwd: str, env: Mapping[str, str]) -> str:
        return self._git(args, cwd=cwd, env=env)


def _write_private(path: str, data: bytes) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
        # ssh rejects keys without a trailing newline.
        if not data.endswith(b"\n"):
            f.write(b"\n")
