"""Public model exports for onedrivemgr."""

from __future__ import annotations

from .conflict import ConflictBehavior
from .items import (
    DriveItem,
    FileItem,
    FolderItem,
    FolderView,
    ParentReference,
    item_from_dict,
    item_from_json,
    item_to_dict,
    item_to_json,
    require_file,
    require_folder,
)
from .results import Outcome, OutcomeStatus
from .root import APP_ROOT, DRIVE_ROOT, DriveRoot

__all__ = [
    "ConflictBehavior",
    "DriveItem",
    "FileItem",
    "FolderItem",
    "FolderView",
    "ParentReference",
    "item_from_dict",
    "item_from_json",
    "item_to_dict",
    "item_to_json",
    "require_file",
    "require_folder",
    "Outcome",
    "OutcomeStatus",
    "DriveRoot",
    "DRIVE_ROOT",
    "APP_ROOT",
]
