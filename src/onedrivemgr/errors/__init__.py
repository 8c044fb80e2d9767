"""Public error exports for onedrivemgr."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    ItemParseError,
    ItemTypeError,
    NetworkError,
    NotFoundError,
    OneDriveMgrError,
    PermissionError,
    map_http_error,
)

__all__ = [
    "OneDriveMgrError",
    "AuthError",
    "InvalidArgumentError",
    "PermissionError",
    "NotFoundError",
    "ConflictError",
    "NetworkError",
    "ApiError",
    "ItemParseError",
    "ItemTypeError",
    "HttpErrorInfo",
    "map_http_error",
]
