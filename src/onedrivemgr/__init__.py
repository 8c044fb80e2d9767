"""onedrivemgr public API."""

from __future__ import annotations

from onedrivemgr.auth import AccessToken, AuthInfo, OAuthClient, TokenProvider
from onedrivemgr.client import OneDriveClient
from onedrivemgr.config import DriveConfig
from onedrivemgr.errors import (
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
from onedrivemgr.models import (
    APP_ROOT,
    DRIVE_ROOT,
    ConflictBehavior,
    DriveItem,
    DriveRoot,
    FileItem,
    FolderItem,
    FolderView,
    Outcome,
    ParentReference,
    item_from_json,
    item_to_json,
)

__all__ = [
    # High-level
    "OneDriveClient",
    "DriveConfig",
    # Auth
    "AuthInfo",
    "OAuthClient",
    "TokenProvider",
    "AccessToken",
    # Models
    "DriveRoot",
    "DRIVE_ROOT",
    "APP_ROOT",
    "ConflictBehavior",
    "DriveItem",
    "FileItem",
    "FolderItem",
    "FolderView",
    "ParentReference",
    "Outcome",
    "item_from_json",
    "item_to_json",
    # Errors
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
