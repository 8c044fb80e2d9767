"""Result model shared by every drive operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, Optional, TypeVar

from onedrivemgr.errors import (
    ApiError,
    ConflictError,
    NotFoundError,
    OneDriveMgrError,
)
from onedrivemgr.errors import exceptions as _exceptions

T = TypeVar("T")

OutcomeStatus = Literal["success", "not_found", "conflict", "failed"]


@dataclass(slots=True, frozen=True)
class Outcome(Generic[T]):
    """
    Result of a single drive operation.

    status:
        - "success": `value` holds the result (an item, or None for
          delete/rename).
        - "not_found": the addressed item does not exist.
        - "conflict": the server refused because of a name collision;
          `error_message` is the server reason phrase.
        - "failed": any other failure; `error_type` names the error class.
    """

    status: OutcomeStatus
    value: Optional[T] = None

    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(status="success", value=value)

    @classmethod
    def from_error(cls, exc: OneDriveMgrError) -> "Outcome[T]":
        if isinstance(exc, NotFoundError):
            status: OutcomeStatus = "not_found"
        elif isinstance(exc, ConflictError):
            status = "conflict"
        else:
            status = "failed"
        return cls(
            status=status,
            error_type=exc.__class__.__name__,
            error_message=str(exc),
            error_details=dict(exc.details) or None,
        )

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def is_not_found(self) -> bool:
        return self.status == "not_found"

    @property
    def is_conflict(self) -> bool:
        return self.status == "conflict"

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status behind a failure, when there was one."""
        if not self.error_details:
            return None
        code = self.error_details.get("status_code")
        return code if isinstance(code, int) else None

    def unwrap(self) -> T:
        """
        Return `value` on success; otherwise raise the recorded error kind.

        Raises:
            OneDriveMgrError subclass matching `error_type` (ApiError if unknown).
        """
        if self.ok:
            return self.value  # type: ignore[return-value]

        exc_cls = getattr(_exceptions, self.error_type or "", None)
        if not (isinstance(exc_cls, type) and issubclass(exc_cls, OneDriveMgrError)):
            exc_cls = ApiError
        raise exc_cls(
            self.error_message or f"Operation {self.status}",
            details=self.error_details,
        )
