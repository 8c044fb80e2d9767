"""Exception hierarchy and HTTP error mapping for onedrivemgr."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class OneDriveMgrError(Exception):
    """
    Base exception for onedrivemgr.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class AuthError(OneDriveMgrError):
    """Raised when token acquisition fails or the API rejects the token (401)."""


class InvalidArgumentError(OneDriveMgrError):
    """Raised when request arguments are invalid (HTTP 400, empty paths, etc.)."""


class PermissionError(OneDriveMgrError):
    """Raised when access is denied (HTTP 403)."""


class NotFoundError(OneDriveMgrError):
    """Raised when a drive item does not exist (HTTP 404)."""


class ConflictError(OneDriveMgrError):
    """Raised on a name collision (HTTP 409/412). Message is the server reason."""


class NetworkError(OneDriveMgrError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(OneDriveMgrError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


class ItemParseError(OneDriveMgrError):
    """Raised when a response body is not a JSON object."""


class ItemTypeError(OneDriveMgrError):
    """Raised when an item is a file where a folder was expected, or vice versa."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to onedrivemgr exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> OneDriveMgrError:
    """
    Map an HTTP error to an onedrivemgr exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError
        - 404 -> NotFoundError
        - 409/412 -> ConflictError (message is the reason phrase)
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    if info.status_code in (409, 412):
        # Callers surface the server's reason phrase for conflicts.
        message = info.reason or info.message or f"HTTP error {info.status_code}"
        return ConflictError(message, details=details, cause=cause)

    message = info.message or info.reason or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
