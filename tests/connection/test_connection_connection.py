import json
import unittest
from unittest.mock import Mock

import requests

from shapir.api import Items, Shares, Users
from shapir.auth import AuthData, ConnectionSettings
from shapir.connection import Connection
from shapir.errors import (
    ConfigurationError,
    DeserializationError,
    NetworkError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)

AUTH = AuthData(subdomain="acme", access_token="tok")


def _response(status_code=200, payload=None, raw=None, reason=None):
    resp = Mock()
    resp.status_code = status_code
    resp.reason = reason
    if raw is not None:
        resp.content = raw
        resp.json.side_effect = ValueError("not json")
    elif payload is not None:
        resp.content = json.dumps(payload).encode("utf-8")
        resp.json.return_value = payload
    else:
        resp.content = b""
    return resp


class TestConnectionState(unittest.TestCase):
    def test_entities_require_authentication(self) -> None:
        conn = Connection.configured(ConnectionSettings(subdomain="acme"))
        self.assertFalse(conn.is_authenticated)
        with self.assertRaises(UnauthorizedError):
            conn.items()
        with self.assertRaises(UnauthorizedError):
            conn.shares()
        with self.assertRaises(UnauthorizedError):
            conn.query("GET", "Items(home)")

    def test_entities_from_authenticated_connection(self) -> None:
        conn = Connection.from_session(Mock(), AUTH)
        self.assertIsInstance(conn.items(), Items)
        self.assertIsInstance(conn.shares(), Shares)
        self.assertIsInstance(conn.users(), Users)
        self.assertEqual(conn.endpoint, "https://acme.sf-api.com/sf/v3/")

    def test_connect_validates_before_authenticating(self) -> None:
        authenticator = Mock()
        conn = Connection.configured(ConnectionSettings(subdomain="acme"))
        with self.assertRaises(ConfigurationError):
            conn.connect(authenticator=authenticator)
        authenticator.authenticate.assert_not_called()

    def test_connect_stores_auth(self) -> None:
        settings = ConnectionSettings(
            subdomain="acme",
            username="u",
            password="p",
            client_id="c",
            client_secret="s",
        )
        authenticator = Mock()
        authenticator.authenticate.return_value = AUTH

        conn = Connection(settings, session=Mock()).connect(authenticator=authenticator)

        self.assertIs(conn.auth, AUTH)
        self.assertTrue(conn.is_authenticated)

    def test_context_manager_closes_session(self) -> None:
        session = Mock()
        with Connection.from_session(session, AUTH):
            pass
        session.close.assert_called_once()


class TestConnectionRequests(unittest.TestCase):
    def test_query_adds_bearer_token_and_endpoint(self) -> None:
        session = Mock()
        session.request.return_value = _response(payload={"Id": "x"})
        conn = Connection.from_session(session, AUTH)

        data = conn.query_json("GET", "Items(home)", params=[("$expand", "Children")])

        self.assertEqual(data, {"Id": "x"})
        args, kwargs = session.request.call_args
        self.assertEqual(args, ("GET", "https://acme.sf-api.com/sf/v3/Items(home)"))
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer tok")
        self.assertEqual(kwargs["params"], [("$expand", "Children")])

    def test_empty_body_returns_none(self) -> None:
        session = Mock()
        session.request.return_value = _response(status_code=204)
        conn = Connection.from_session(session, AUTH)
        self.assertIsNone(conn.query_json("DELETE", "Items(x)"))

    def test_non_json_body(self) -> None:
        session = Mock()
        session.request.return_value = _response(raw=b"<html/>")
        conn = Connection.from_session(session, AUTH)
        with self.assertRaises(DeserializationError):
            conn.query_json("GET", "Items(home)")

    def test_vendor_error_in_success_body(self) -> None:
        session = Mock()
        session.request.return_value = _response(
            payload={"code": "BadRequest", "message": {"lang": "en-US", "value": "nope"}}
        )
        conn = Connection.from_session(session, AUTH)
        with self.assertRaises(ValidationError) as ctx:
            conn.query_json("GET", "Items(home)")
        self.assertEqual(str(ctx.exception), "nope")

    def test_status_mapping(self) -> None:
        session = Mock()
        conn = Connection.from_session(session, AUTH)

        session.request.return_value = _response(
            status_code=404,
            payload={"code": "NotFound", "message": {"value": "Item not found"}},
        )
        with self.assertRaises(NotFoundError) as ctx:
            conn.query_json("GET", "Items(x)")
        self.assertEqual(str(ctx.exception), "Item not found")

        session.request.return_value = _response(status_code=502, raw=b"Bad Gateway")
        with self.assertRaises(ServerError) as ctx:
            conn.query_json("GET", "Items(x)")
        self.assertEqual(ctx.exception.status_code, 502)

    def test_transport_failure_is_network_error(self) -> None:
        session = Mock()
        session.request.side_effect = requests.exceptions.Timeout("slow")
        conn = Connection.from_session(session, AUTH)
        with self.assertRaises(NetworkError):
            conn.query_json("GET", "Items(home)")

    def test_custom_request_has_no_authorization(self) -> None:
        session = Mock()
        session.request.return_value = _response()
        conn = Connection.from_session(session, AUTH)

        conn.custom_request("POST", "https://upload.example/chunk?uploadid=1", data=b"x")

        kwargs = session.request.call_args.kwargs
        self.assertIsNone(kwargs["headers"])
        self.assertEqual(kwargs["data"], b"x")


if __name__ == "__main__":
    unittest.main()
