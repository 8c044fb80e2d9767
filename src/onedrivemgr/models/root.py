"""Addressable roots of a drive."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class DriveRoot:
    """
    A root that paths are resolved against.

    `selector` is the URL segment naming the root below the drive endpoint,
    e.g. "root" or "special/approot".
    """

    selector: str

    def path(self, path: str) -> str:
        """Endpoint addressing `path` below this root."""
        return f"{self.selector}:/{path}"

    def content(self, path: str) -> str:
        """Endpoint for the content stream of the file at `path`."""
        return f"{self.selector}:/{path}:/content"

    def children(self) -> str:
        """Endpoint for the direct children collection of this root."""
        return f"{self.selector}/children"


# The user's full drive.
DRIVE_ROOT = DriveRoot("root")

# Folder private to the calling application (Apps/<app name>).
APP_ROOT = DriveRoot("special/approot")
