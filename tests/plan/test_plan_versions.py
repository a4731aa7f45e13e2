import unittest

from docsrouter.plan import (
    is_release_tag,
    latest_release_tag,
    minor_series,
    parse_release_version,
)


class TestReleaseVersions(unittest.TestCase):
    def test_parse_release_version(self) -> None:
        self.assertEqual(parse_release_version("25.3.1"), (25, 3, 1))
        self.assertEqual(parse_release_version("0.0.0"), (0, 0, 0))

    def test_suffixed_tags_are_not_releases(self) -> None:
        for tag in ("25.0.0rc1", "v25.0.0", "25.0", "25.0.0.1", "25.0.0\n", "25.0.0-beta"):
            self.assertIsNone(parse_release_version(tag), tag)
            self.assertFalse(is_release_tag(tag), tag)

    def test_non_ascii_digits_are_not_releases(self) -> None:
        arabic_indic = "\u0661.\u0662.\u0663"
        fullwidth = "\uff11.\uff10.\uff10"
        for tag in (arabic_indic, fullwidth):
            self.assertIsNone(parse_release_version(tag), tag)
        self.assertEqual(latest_release_tag(["1.0.0", arabic_indic]), "1.0.0")

    def test_minor_series(self) -> None:
        self.assertEqual(minor_series("25.3.1"), "25.3")
        with self.assertRaises(ValueError):
            minor_series("main")

    def test_latest_excludes_prerelease(self) -> None:
        tags = ["24.1.0", "25.0.0", "25.0.0rc1", "25.1.2"]
        self.assertEqual(latest_release_tag(tags), "25.1.2")

    def test_latest_is_numeric_not_lexical(self) -> None:
        tags = ["0.9.0", "0.10.0", "0.2.11"]
        self.assertEqual(latest_release_tag(tags), "0.10.0")

        tags = ["1.2.9", "1.2.10"]
        self.assertEqual(latest_release_tag(tags), "1.2.10")

    def test_lexically_greater_suffix_tag_is_ignored(self) -> None:
        tags = ["1.0.0", "9.9.9rc1", "1.0.1"]
        self.assertEqual(latest_release_tag(tags), "1.0.1")

    def test_no_release_tag_is_none(self) -> None:
        self.assertIsNone(latest_release_tag([]))
        self.assertIsNone(latest_release_tag(["1.0.0rc1", "nightly"]))


if __name__ == "__main__":
    unittest.main()
