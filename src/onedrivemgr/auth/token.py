"""Token and account value types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from onedrivemgr.util.time import expires_within


@dataclass(slots=True, frozen=True)
class AccessToken:
    """Bearer token with its absolute (tz-aware) expiration."""

    value: str = field(repr=False)
    expires_on: datetime

    def expires_within(self, window: timedelta) -> bool:
        return expires_within(self.expires_on, window)

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.value}"


@dataclass(slots=True)
class Account:
    """
    A signed-in identity.

    `credentials` is a google.oauth2.credentials.Credentials configured
    against the Microsoft token endpoint; it carries the refresh token.
    """

    account_id: str
    credentials: Any = field(repr=False)
