"""Internal controller exports for onedrivemgr."""

from __future__ import annotations

from .drive_controller import OneDriveController

__all__ = ["OneDriveController"]
