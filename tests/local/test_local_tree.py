import base64
import hashlib
import tempfile
import unittest
from pathlib import Path

from docsrouter.errors import LocalValidationError
from docsrouter.local import ExcludeMatcher, scan_tree


class TestScanTree(unittest.TestCase):
    def test_scan_lists_relative_posix_paths_with_md5(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "api").mkdir()
            (root / "index.html").write_bytes(b"<html></html>")
            (root / "api" / "mod.html").write_bytes(b"mod")

            files = scan_tree(str(root))

        self.assertEqual([f.path for f in files], ["api/mod.html", "index.html"])
        index = files[1]
        self.assertEqual(index.size, len(b"<html></html>"))
        expected = base64.b64encode(hashlib.md5(b"<html></html>").digest()).decode()
        self.assertEqual(index.md5, expected)

    def test_scan_skips_excluded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".doctrees").mkdir()
            (root / ".doctrees" / "env.pickle").write_bytes(b"x")
            (root / ".buildinfo").write_bytes(b"x")
            (root / "index.html").write_bytes(b"x")

            matcher = ExcludeMatcher.from_lines([".doctrees/", ".buildinfo"])
            files = scan_tree(str(root), matcher)

        self.assertEqual([f.path for f in files], ["index.html"])

    def test_missing_root_raises(self) -> None:
        with self.assertRaises(LocalValidationError):
            scan_tree("/nonexistent/artifacts")


if __name__ == "__main__":
    unittest.main()
