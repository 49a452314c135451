import unittest

from shapir.errors import InvalidArgumentError
from shapir.models import UserId, UserIdKind


class TestUserId(unittest.TestCase):
    def test_by_id(self) -> None:
        user = UserId.by_id("ID!")
        self.assertTrue(user.is_id)
        self.assertFalse(user.is_email)
        self.assertEqual(user.id, "ID!")
        self.assertIsNone(user.email)
        self.assertEqual(user.to_json(), {"Id": "ID!"})

    def test_by_email(self) -> None:
        user = UserId.by_email("email@address.com")
        self.assertTrue(user.is_email)
        self.assertEqual(user.email, "email@address.com")
        self.assertIsNone(user.id)
        self.assertEqual(user.to_json(), {"Email": "email@address.com"})

    def test_malformed_email_is_rejected(self) -> None:
        for value in ("not-an-email", "a@", "@b.com", "a b@c.com", ""):
            with self.subTest(value=value):
                with self.assertRaises(InvalidArgumentError):
                    UserId.by_email(value)

    def test_direct_construction_validates_too(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            UserId(UserIdKind.EMAIL, "nope")


if __name__ == "__main__":
    unittest.main()
