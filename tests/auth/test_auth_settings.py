import unittest

from shapir.auth import DEFAULT_CHUNK_SIZE, ConnectionSettings, settings_from_env
from shapir.errors import ConfigurationError


def _complete(**overrides) -> ConnectionSettings:
    values = {
        "subdomain": "acme",
        "username": "user@acme.com",
        "password": "pw",
        "client_id": "cid",
        "client_secret": "csecret",
    }
    values.update(overrides)
    return ConnectionSettings(**values)


class TestConnectionSettings(unittest.TestCase):
    def test_complete_settings_validate(self) -> None:
        settings = _complete()
        settings.validate()
        self.assertEqual(settings.upload_chunk_size, DEFAULT_CHUNK_SIZE)
        self.assertEqual(settings.token_url, "https://acme.sharefile.com/oauth/token")

    def test_missing_field_is_named(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            _complete(client_secret=None).validate()
        self.assertEqual(ctx.exception.details["field"], "client_secret")
        self.assertIn("Client Secret", str(ctx.exception))

    def test_blank_field_is_missing(self) -> None:
        with self.assertRaises(ConfigurationError):
            _complete(subdomain="   ").validate()

    def test_chunk_size_must_be_positive(self) -> None:
        with self.assertRaises(ConfigurationError):
            _complete(upload_chunk_size=0).validate()

    def test_settings_are_immutable(self) -> None:
        settings = _complete()
        with self.assertRaises(AttributeError):
            settings.subdomain = "other"  # type: ignore[misc]


class TestSettingsFromEnv(unittest.TestCase):
    def test_reads_prefixed_variables(self) -> None:
        env = {
            "SHAPIR_SUBDOMAIN": "acme",
            "SHAPIR_USERNAME": "user@acme.com",
            "SHAPIR_PASSWORD": "pw",
            "SHAPIR_CLIENT_ID": "cid",
            "SHAPIR_CLIENT_SECRET": "csecret",
            "SHAPIR_UPLOAD_CHUNK_SIZE": "1024",
            "SHAPIR_TIMEOUT": "2.5",
        }
        settings = settings_from_env(environ=env)
        settings.validate()
        self.assertEqual(settings.subdomain, "acme")
        self.assertEqual(settings.upload_chunk_size, 1024)
        self.assertEqual(settings.timeout, 2.5)

    def test_missing_variables_stay_none(self) -> None:
        settings = settings_from_env(environ={})
        self.assertIsNone(settings.username)
        self.assertEqual(settings.upload_chunk_size, DEFAULT_CHUNK_SIZE)
        self.assertIsNone(settings.timeout)

    def test_invalid_number_raises(self) -> None:
        with self.assertRaises(ConfigurationError):
            settings_from_env(environ={"SHAPIR_UPLOAD_CHUNK_SIZE": "lots"})


if __name__ == "__main__":
    unittest.main()
