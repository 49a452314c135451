import unittest
from unittest.mock import Mock

from shapir.auth import AuthData
from shapir.connection import Connection, ConnectionBuilder
from shapir.errors import ConfigurationError


class TestConnectionBuilder(unittest.TestCase):
    def test_builder_accumulates_settings(self) -> None:
        builder = (
            Connection.new()
            .subdomain("acme")
            .username("user@acme.com")
            .password("pw")
            .client_id("cid")
            .client_secret("csecret")
            .upload_chunk_size(4096)
            .timeout(10.0)
        )
        self.assertIsInstance(builder, ConnectionBuilder)

        settings = builder.settings()
        self.assertEqual(settings.subdomain, "acme")
        self.assertEqual(settings.username, "user@acme.com")
        self.assertEqual(settings.client_secret, "csecret")
        self.assertEqual(settings.upload_chunk_size, 4096)
        self.assertEqual(settings.timeout, 10.0)

    def test_settings_snapshot_is_not_changed_by_later_calls(self) -> None:
        builder = ConnectionBuilder().subdomain("acme")
        before = builder.settings()
        builder.subdomain("other")
        self.assertEqual(before.subdomain, "acme")
        self.assertEqual(builder.settings().subdomain, "other")

    def test_connect_without_required_fields_sends_nothing(self) -> None:
        authenticator = Mock()
        builder = ConnectionBuilder().subdomain("acme").username("u")
        with self.assertRaises(ConfigurationError) as ctx:
            builder.connect(authenticator=authenticator)
        self.assertEqual(ctx.exception.details["field"], "password")
        authenticator.authenticate.assert_not_called()

    def test_connect_returns_authenticated_connection(self) -> None:
        authenticator = Mock()
        authenticator.authenticate.return_value = AuthData(subdomain="acme", access_token="tok")

        conn = (
            ConnectionBuilder()
            .subdomain("acme")
            .username("u")
            .password("p")
            .client_id("c")
            .client_secret("s")
            .connect(authenticator=authenticator)
        )

        self.assertTrue(conn.is_authenticated)
        self.assertEqual(conn.settings.subdomain, "acme")
        authenticator.authenticate.assert_called_once()


if __name__ == "__main__":
    unittest.main()
