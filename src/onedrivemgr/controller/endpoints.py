"""Endpoint definitions for the OneDrive REST API."""

from __future__ import annotations

from urllib.parse import quote

from onedrivemgr.errors import InvalidArgumentError

SERVICE_ENDPOINT: str = "https://graph.microsoft.com/v1.0/me/drive/"

APP_ROOT_ENDPOINT: str = "special/approot/"

OCTET_STREAM: str = "application/octet-stream"

CONFLICT_BEHAVIOR_KEY: str = "@microsoft.graph.conflictBehavior"


def item_by_id(item_id: str) -> str:
    if not isinstance(item_id, str) or not item_id.strip():
        raise InvalidArgumentError("item id must be a non-empty string")
    return f"items/{quote(item_id.strip(), safe='!')}"


def encode_path(path: str) -> str:
    """
    Prepare a slash-delimited caller path for path-based addressing.

    Leading slashes are dropped and each segment is percent-encoded.
    """
    if not isinstance(path, str):
        raise InvalidArgumentError("path must be a string")
    cleaned = path.strip().lstrip("/")
    if not cleaned:
        raise InvalidArgumentError("path must be a non-empty string", details={"path": path})
    return quote(cleaned, safe="/")
