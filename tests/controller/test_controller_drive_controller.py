import io
import json
import unittest
from datetime import timedelta
from unittest.mock import MagicMock, Mock

import requests

from onedrivemgr.auth import AccessToken
from onedrivemgr.controller.drive_controller import OneDriveController, _response_to_info
from onedrivemgr.controller.endpoints import encode_path, item_by_id
from onedrivemgr.errors import (
    ApiError,
    AuthError,
    ConflictError,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
)
from onedrivemgr.models import APP_ROOT, ConflictBehavior, FileItem, FolderItem
from onedrivemgr.util.time import now_utc

BASE = "https://graph.microsoft.com/v1.0/me/drive/"


class StaticTokenProvider:
    def __init__(self, value: str = "tok") -> None:
        self.value = value
        self.calls = 0

    def get_token(self) -> AccessToken:
        self.calls += 1
        return AccessToken(value=self.value, expires_on=now_utc() + timedelta(hours=1))


def _response(status_code: int = 200, body=None, reason: str = "OK") -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.reason = reason
    resp.ok = 200 <= status_code < 400
    if body is None:
        resp.content = b""
    elif isinstance(body, bytes):
        resp.content = body
    else:
        resp.content = json.dumps(body).encode("utf-8")
    return resp


class TestEndpoints(unittest.TestCase):
    def test_encode_path_strips_and_quotes(self) -> None:
        self.assertEqual(encode_path("/FolderA/Text B.txt"), "FolderA/Text%20B.txt")
        self.assertEqual(encode_path("a#b?.txt"), "a%23b%3F.txt")

    def test_encode_path_rejects_empty(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            encode_path("  / ")

    def test_item_by_id(self) -> None:
        self.assertEqual(item_by_id("01ABC!123"), "items/01ABC!123")
        with self.assertRaises(InvalidArgumentError):
            item_by_id("")


class TestDriveControllerMocked(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MagicMock()
        self.session.__enter__.return_value = self.session
        self.tokens = StaticTokenProvider()
        self.controller = OneDriveController(
            self.tokens,
            timeout=5.0,
            session_factory=lambda: self.session,
        )

    def _request_kwargs(self) -> dict:
        return self.session.request.call_args.kwargs

    def _request_args(self) -> tuple:
        return self.session.request.call_args.args

    def test_get_item_builds_path_url_and_bearer_header(self) -> None:
        self.session.request.return_value = _response(body={"id": "F1", "name": "a.txt", "size": 3})

        item = self.controller.get_item("FolderA/a.txt")

        self.assertIsInstance(item, FileItem)
        method, url = self._request_args()
        self.assertEqual(method, "GET")
        self.assertEqual(url, BASE + "root:/FolderA/a.txt")
        self.assertEqual(self._request_kwargs()["headers"]["Authorization"], "Bearer tok")
        self.assertEqual(self._request_kwargs()["timeout"], 5.0)
        self.session.__exit__.assert_called_once()

    def test_get_item_in_app_root(self) -> None:
        self.session.request.return_value = _response(body={"id": "D1", "folder": {}})
        item = self.controller.get_item("Docs", APP_ROOT)
        self.assertIsInstance(item, FolderItem)
        self.assertEqual(self._request_args()[1], BASE + "special/approot:/Docs")

    def test_each_call_fetches_a_token(self) -> None:
        self.session.request.return_value = _response(body={"id": "F1"})
        self.controller.get_item("a")
        self.controller.get_item("b")
        self.assertEqual(self.tokens.calls, 2)

    def test_get_item_404_raises_not_found(self) -> None:
        self.session.request.return_value = _response(
            404,
            body={"error": {"code": "itemNotFound", "message": "Item does not exist"}},
            reason="Not Found",
        )
        with self.assertRaises(NotFoundError) as ctx:
            self.controller.get_item("missing.txt")
        self.assertEqual(ctx.exception.details["error_code"], "itemNotFound")
        self.assertEqual(str(ctx.exception), "Item does not exist")

    def test_upload_sends_octet_stream_and_closes_stream(self) -> None:
        self.session.request.return_value = _response(
            201, body={"id": "F1", "name": "a.txt", "size": 5, "file": {}}
        )
        stream = io.BytesIO(b"hello")

        item = self.controller.upload("a.txt", stream, APP_ROOT)

        self.assertEqual(item.size, 5)
        self.assertTrue(stream.closed)
        method, url = self._request_args()
        self.assertEqual(method, "PUT")
        self.assertEqual(url, BASE + "special/approot:/a.txt:/content")
        kwargs = self._request_kwargs()
        self.assertEqual(kwargs["data"], b"hello")
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/octet-stream")
        self.assertEqual(kwargs["headers"]["Content-Length"], "5")

    def test_upload_conflict_raises_and_closes_stream(self) -> None:
        self.session.request.return_value = _response(409, reason="Conflict")
        stream = io.BytesIO(b"x")
        with self.assertRaises(ConflictError) as ctx:
            self.controller.upload("a.txt", stream)
        self.assertEqual(str(ctx.exception), "Conflict")
        self.assertTrue(stream.closed)

    def test_upload_closes_stream_when_token_fails(self) -> None:
        tokens = Mock()
        tokens.get_token.side_effect = AuthError("no token")
        controller = OneDriveController(tokens, session_factory=lambda: self.session)
        stream = io.BytesIO(b"x")
        with self.assertRaises(AuthError):
            controller.upload("a.txt", stream)
        self.assertTrue(stream.closed)
        self.session.request.assert_not_called()

    def test_create_folder_serializes_body_as_json(self) -> None:
        self.session.request.return_value = _response(
            201, body={"id": "D1", "name": "It's \"new\"", "folder": {"childCount": 0}}
        )

        item = self.controller.create_folder("It's \"new\"", ConflictBehavior.RENAME)

        self.assertIsInstance(item, FolderItem)
        method, url = self._request_args()
        self.assertEqual(method, "POST")
        self.assertEqual(url, BASE + "root/children")
        kwargs = self._request_kwargs()
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")
        body = json.loads(kwargs["data"].decode("utf-8"))
        self.assertEqual(
            body,
            {
                "name": "It's \"new\"",
                "folder": {},
                "@microsoft.graph.conflictBehavior": "rename",
            },
        )

    def test_rename_body_with_single_quote_is_valid_json(self) -> None:
        self.session.request.return_value = _response(200, body={"id": "F1"})

        self.controller.rename("F1", "O'Brien's notes.txt")

        method, url = self._request_args()
        self.assertEqual(method, "PATCH")
        self.assertEqual(url, BASE + "items/F1")
        body = json.loads(self._request_kwargs()["data"])
        self.assertEqual(body, {"name": "O'Brien's notes.txt"})

    def test_delete(self) -> None:
        self.session.request.return_value = _response(204)
        self.controller.delete("F1")
        method, url = self._request_args()
        self.assertEqual(method, "DELETE")
        self.assertEqual(url, BASE + "items/F1")

    def test_app_root(self) -> None:
        self.session.request.return_value = _response(body={"id": "APP", "folder": {}})
        payload = self.controller.get_app_root()
        self.assertEqual(payload["id"], "APP")
        self.assertEqual(self._request_args()[1], BASE + "special/approot/")

    def test_connection_error_maps_to_network_error(self) -> None:
        self.session.request.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(NetworkError):
            self.controller.get_item("a.txt")

    def test_other_request_exception_maps_to_api_error(self) -> None:
        self.session.request.side_effect = requests.TooManyRedirects("loop")
        with self.assertRaises(ApiError):
            self.controller.get_item("a.txt")

    def test_base_url_gets_trailing_slash(self) -> None:
        controller = OneDriveController(self.tokens, base_url="https://example.test/drive")
        self.assertEqual(controller.base_url, "https://example.test/drive/")


class TestResponseToInfo(unittest.TestCase):
    def test_non_json_body(self) -> None:
        info = _response_to_info(_response(500, body=b"<html>", reason="Server Error"))
        self.assertEqual(info.status_code, 500)
        self.assertEqual(info.reason, "Server Error")
        self.assertIsNone(info.message)


if __name__ == "__main__":
    unittest.main()
