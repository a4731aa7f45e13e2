import unittest
import uuid

from docsrouter.util.ids import new_op_id, new_plan_id, new_uuid


class TestUtilIds(unittest.TestCase):
    def test_ids_are_uuid4_strings(self) -> None:
        for value in (new_uuid(), new_plan_id(), new_op_id()):
            self.assertEqual(uuid.UUID(value).version, 4)

    def test_ids_are_unique(self) -> None:
        self.assertNotEqual(new_op_id(), new_op_id())


if __name__ == "__main__":
    unittest.main()
