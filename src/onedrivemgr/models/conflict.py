"""Name collision policy for item creation."""

from __future__ import annotations

from enum import Enum


class ConflictBehavior(str, Enum):
    """Server-side handling when the target name already exists."""

    FAIL = "fail"
    REPLACE = "replace"
    RENAME = "rename"
