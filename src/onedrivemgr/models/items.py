"""Data model for drive items and their JSON mapping."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

from onedrivemgr.errors import ItemParseError, ItemTypeError
from onedrivemgr.util.time import parse_rfc3339, to_rfc3339


@dataclass(slots=True, frozen=True)
class ParentReference:
    """Location of an item's parent folder."""

    drive_id: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    path: Optional[str] = None


@dataclass(slots=True, frozen=True)
class FolderView:
    """Display preferences recorded for a folder."""

    view_type: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass(slots=True, frozen=True)
class FileItem:
    """
    A file stored in the drive.

    Notes:
        - `size` is the byte count reported by the server (0 when absent).
        - `mime_type` comes from the `file` facet and may be None.
    """

    id: str = ""
    name: str = ""
    created_date_time: Optional[datetime] = None
    last_modified_date_time: Optional[datetime] = None
    parent_reference: Optional[ParentReference] = None
    web_url: Optional[str] = None

    size: int = 0
    mime_type: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return True

    @property
    def is_folder(self) -> bool:
        return False


@dataclass(slots=True, frozen=True)
class FolderItem:
    """A folder stored in the drive."""

    id: str = ""
    name: str = ""
    created_date_time: Optional[datetime] = None
    last_modified_date_time: Optional[datetime] = None
    parent_reference: Optional[ParentReference] = None
    web_url: Optional[str] = None

    child_count: int = 0
    view: Optional[FolderView] = None

    @property
    def is_file(self) -> bool:
        return False

    @property
    def is_folder(self) -> bool:
        return True


DriveItem = Union[FileItem, FolderItem]


def item_from_json(text: str | bytes) -> DriveItem:
    """
    Parse a response body into a FileItem or FolderItem.

    Raises:
        ItemParseError: if the body is not valid JSON or not a JSON object.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ItemParseError("Response body is not valid JSON", cause=exc) from exc
    return item_from_dict(data)


def item_from_dict(data: Any) -> DriveItem:
    """
    Build a drive item from a decoded JSON object.

    A "folder" key selects FolderItem; anything else is a FileItem.
    Unknown keys are ignored and missing keys fall back to defaults.
    """
    if not isinstance(data, dict):
        raise ItemParseError(
            "Drive item payload must be a JSON object",
            details={"type": type(data).__name__},
        )

    common = {
        "id": _str(data.get("id")) or "",
        "name": _str(data.get("name")) or "",
        "created_date_time": _time(data.get("createdDateTime")),
        "last_modified_date_time": _time(data.get("lastModifiedDateTime")),
        "parent_reference": _parent_reference(data.get("parentReference")),
        "web_url": _str(data.get("webUrl")),
    }

    if "folder" in data:
        folder = data.get("folder")
        if not isinstance(folder, dict):
            folder = {}
        return FolderItem(
            **common,
            child_count=_int(folder.get("childCount")),
            view=_folder_view(folder.get("view")),
        )

    file_facet = data.get("file")
    mime_type = None
    if isinstance(file_facet, dict):
        mime_type = _str(file_facet.get("mimeType"))

    return FileItem(
        **common,
        size=_int(data.get("size")),
        mime_type=mime_type,
    )


def item_to_dict(item: DriveItem) -> dict[str, Any]:
    """Serialize an item back into the Graph JSON shape."""
    data: dict[str, Any] = {"id": item.id, "name": item.name}
    if item.created_date_time is not None:
        data["createdDateTime"] = to_rfc3339(item.created_date_time)
    if item.last_modified_date_time is not None:
        data["lastModifiedDateTime"] = to_rfc3339(item.last_modified_date_time)
    if item.parent_reference is not None:
        ref = item.parent_reference
        data["parentReference"] = _drop_none(
            {"driveId": ref.drive_id, "id": ref.id, "name": ref.name, "path": ref.path}
        )
    if item.web_url is not None:
        data["webUrl"] = item.web_url

    if isinstance(item, FolderItem):
        folder: dict[str, Any] = {"childCount": item.child_count}
        if item.view is not None:
            folder["view"] = _drop_none(
                {
                    "viewType": item.view.view_type,
                    "sortBy": item.view.sort_by,
                    "sortOrder": item.view.sort_order,
                }
            )
        data["folder"] = folder
        return data

    data["size"] = item.size
    data["file"] = _drop_none({"mimeType": item.mime_type})
    return data


def item_to_json(item: DriveItem) -> str:
    return json.dumps(item_to_dict(item))


def require_file(item: DriveItem) -> FileItem:
    """Return `item` if it is a FileItem, else raise ItemTypeError."""
    if isinstance(item, FileItem):
        return item
    raise ItemTypeError(
        "Expected a file but the item is a folder",
        details={"id": item.id, "name": item.name},
    )


def require_folder(item: DriveItem) -> FolderItem:
    """Return `item` if it is a FolderItem, else raise ItemTypeError."""
    if isinstance(item, FolderItem):
        return item
    raise ItemTypeError(
        "Expected a folder but the item is a file",
        details={"id": item.id, "name": item.name},
    )


def _parent_reference(value: Any) -> Optional[ParentReference]:
    if not isinstance(value, dict):
        return None
    return ParentReference(
        drive_id=_str(value.get("driveId")),
        id=_str(value.get("id")),
        name=_str(value.get("name")),
        path=_str(value.get("path")),
    )


def _folder_view(value: Any) -> Optional[FolderView]:
    if not isinstance(value, dict):
        return None
    return FolderView(
        view_type=_str(value.get("viewType")),
        sort_by=_str(value.get("sortBy")),
        sort_order=_str(value.get("sortOrder")),
    )


def _time(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        return parse_rfc3339(value)
    except ValueError:
        return None


def _int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return 0


def _str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}
