"""OneDrive REST API controller (internal use only)."""

from __future__ import annotations

import json
from typing import IO, Any, Callable, Optional

import requests
import structlog

from onedrivemgr.auth import TokenProvider
from onedrivemgr.errors import (
    ApiError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    OneDriveMgrError,
    map_http_error,
)
from onedrivemgr.models import (
    DRIVE_ROOT,
    ConflictBehavior,
    DriveItem,
    DriveRoot,
    item_from_json,
)

from .endpoints import (
    APP_ROOT_ENDPOINT,
    CONFLICT_BEHAVIOR_KEY,
    OCTET_STREAM,
    SERVICE_ENDPOINT,
    encode_path,
    item_by_id,
)

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SEC: float = 60.0


class OneDriveController:
    """
    Drive REST controller (internal only).

    Notes:
        - Every call fetches a token from the provider and uses its own
          HTTP session, closed before returning.
        - No retries: one failed attempt raises the mapped error.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        *,
        base_url: str = SERVICE_ENDPOINT,
        timeout: Optional[float] = DEFAULT_TIMEOUT_SEC,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._token_provider = token_provider
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._timeout = timeout
        self._session_factory = session_factory

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    # ----------------------------
    # Public API
    # ----------------------------
    def get_app_root(self) -> dict[str, Any]:
        response = self._send("GET", APP_ROOT_ENDPOINT)
        return _decode_json(response)

    def get_item(self, path: str, root: DriveRoot = DRIVE_ROOT) -> DriveItem:
        response = self._send("GET", root.path(encode_path(path)))
        return item_from_json(response.content)

    def upload(self, path: str, stream: IO[bytes], root: DriveRoot = DRIVE_ROOT) -> DriveItem:
        """PUT the stream as the content of `path`. The stream is always closed."""
        try:
            endpoint = root.content(encode_path(path))
            try:
                data = stream.read()
            except (OSError, ValueError) as exc:
                raise InvalidArgumentError(
                    "Failed to read upload stream",
                    details={"path": path},
                    cause=exc,
                ) from exc
            headers = {
                "Content-Type": OCTET_STREAM,
                "Content-Length": str(len(data)),
            }
            response = self._send("PUT", endpoint, data=data, headers=headers)
        finally:
            stream.close()
        return item_from_json(response.content)

    def create_folder(
        self,
        name: str,
        conflict_behavior: ConflictBehavior,
        root: DriveRoot = DRIVE_ROOT,
    ) -> DriveItem:
        body = {
            "name": name,
            "folder": {},
            CONFLICT_BEHAVIOR_KEY: ConflictBehavior(conflict_behavior).value,
        }
        response = self._send("POST", root.children(), json_body=body)
        return item_from_json(response.content)

    def rename(self, item_id: str, new_name: str) -> None:
        self._send("PATCH", item_by_id(item_id), json_body={"name": new_name})

    def delete(self, item_id: str) -> None:
        self._send("DELETE", item_by_id(item_id))

    # ----------------------------
    # Internals
    # ----------------------------
    def _send(
        self,
        method: str,
        endpoint: str,
        *,
        data: Optional[bytes] = None,
        json_body: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> requests.Response:
        token = self._token_provider.get_token()

        all_headers = {"Authorization": token.authorization_header}
        if json_body is not None:
            all_headers["Content-Type"] = "application/json"
            data = json.dumps(json_body).encode("utf-8")
        if headers:
            all_headers.update(headers)

        url = f"{self._base_url}{endpoint}"
        try:
            with self._session_factory() as session:
                response = session.request(
                    method,
                    url,
                    data=data,
                    headers=all_headers,
                    timeout=self._timeout,
                )
                # Read the body before the session closes.
                _ = response.content
        except requests.RequestException as exc:
            logger.warning("request_failed", method=method, endpoint=endpoint, error=str(exc))
            raise _map_request_exception(exc) from exc

        logger.debug(
            "request_completed",
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
        )

        if not response.ok:
            raise map_http_error(_response_to_info(response))
        return response


def _decode_json(response: requests.Response) -> dict[str, Any]:
    try:
        payload = json.loads(response.content)
    except (TypeError, ValueError) as exc:
        raise ApiError("Response body is not valid JSON", cause=exc) from exc
    if not isinstance(payload, dict):
        raise ApiError("Response body is not a JSON object")
    return payload


def _map_request_exception(exc: requests.RequestException) -> OneDriveMgrError:
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return NetworkError("Network error", cause=exc)
    return ApiError("HTTP request failed", cause=exc)


def _response_to_info(response: Any) -> HttpErrorInfo:
    status_code = getattr(response, "status_code", None)
    reason = getattr(response, "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(response, "content", None)
    if isinstance(content, (bytes, bytearray)) and content:
        try:
            payload = json.loads(content.decode("utf-8"))
            err = payload.get("error", {})
            if isinstance(err, dict):
                message = err.get("message") or None
                if isinstance(err.get("code"), str):
                    details["error_code"] = err["code"]
        except (UnicodeDecodeError, ValueError, AttributeError):
            pass

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message if isinstance(message, str) else None,
        details=details or None,
    )
