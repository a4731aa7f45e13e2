import dataclasses
import unittest

from docsrouter.models import ManualDispatch
from docsrouter.plan import SyncPlan


class TestSyncPlan(unittest.TestCase):
    def test_build_collapses_duplicates_in_order(self) -> None:
        plan = SyncPlan.build(ManualDispatch(), ["b", "", "a", "b", ""])
        self.assertEqual(plan.prefixes, ("b", "", "a"))

    def test_is_immutable(self) -> None:
        plan = SyncPlan.build(ManualDispatch(), ["dev"])
        with self.assertRaises(dataclasses.FrozenInstanceError):
            plan.prefixes = ()  # type: ignore[misc]

    def test_root_is_distinct_from_empty(self) -> None:
        root = SyncPlan.build(ManualDispatch(), [""])
        empty = SyncPlan.build(ManualDispatch(), [])
        self.assertFalse(root.is_empty)
        self.assertTrue(empty.is_empty)
        self.assertNotEqual(root.joined(), empty.joined())


if __name__ == "__main__":
    unittest.main()
