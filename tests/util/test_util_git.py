import subprocess
import unittest
from unittest.mock import patch

from docsrouter.errors import GitError
from docsrouter.util.git import list_tags, run_git


class TestUtilGit(unittest.TestCase):
    def test_list_tags_parses_lines(self) -> None:
        proc = subprocess.CompletedProcess(
            args=[], returncode=0, stdout="1.0.0\n1.1.0rc1\n\n2.0.0\n", stderr=""
        )
        with patch("subprocess.run", return_value=proc) as run:
            tags = list_tags("/repo")

        self.assertEqual(tags, ["1.0.0", "1.1.0rc1", "2.0.0"])
        self.assertEqual(run.call_args.args[0], ["git", "tag", "--list"])
        self.assertEqual(run.call_args.kwargs["cwd"], "/repo")

    def test_nonzero_exit_raises(self) -> None:
        proc = subprocess.CompletedProcess(
            args=[], returncode=128, stdout="", stderr="fatal: not a git repository"
        )
        with patch("subprocess.run", return_value=proc):
            with self.assertRaises(GitError) as ctx:
                run_git(["tag", "--list"])
        self.assertEqual(ctx.exception.details["returncode"], 128)
        self.assertIn("git tag", str(ctx.exception))

    def test_missing_git_raises(self) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("git")):
            with self.assertRaises(GitError):
                run_git(["status"])


if __name__ == "__main__":
    unittest.main()
