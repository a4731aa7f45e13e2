import unittest
from datetime import timezone

from docsrouter.util.time import now_utc


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_tz_aware(self) -> None:
        self.assertEqual(now_utc().tzinfo, timezone.utc)


if __name__ == "__main__":
    unittest.main()
