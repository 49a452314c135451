import unittest
from unittest.mock import Mock

from shapir.auth import AuthData
from shapir.connection import Connection
from shapir.errors import InvalidArgumentError


class TestUsers(unittest.TestCase):
    def setUp(self) -> None:
        self.session = Mock()
        conn = Connection.from_session(self.session, AuthData(subdomain="acme", access_token="tok"))
        self.users = conn.users()

    def test_by_id(self) -> None:
        self.assertEqual(self.users.by_id("u1").to_json(), {"Id": "u1"})

    def test_by_email(self) -> None:
        user = self.users.by_email("email@address.com")
        self.assertEqual(user.email, "email@address.com")

    def test_invalid_email(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            self.users.by_email("email.address.com")
        self.session.request.assert_not_called()


if __name__ == "__main__":
    unittest.main()
