"""Authentication information for onedrivemgr (OAuth only, v1)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

DEFAULT_TENANT = "common"
AUTHORITY_HOST = "https://login.microsoftonline.com"


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information for a Microsoft identity platform app.

    v1 supports OAuth only:
        kind = "oauth"
        data must include:
            - client_id
            - client_secret
        data may include:
            - tenant (default "common")
            - token_file (persist the signed-in account between runs)

    The sign-in flow always sends client_secret, so the app registration
    must be a confidential client: add a client secret and register
    http://localhost as a redirect URI on the Web platform.
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind != "oauth":
            raise ValueError("AuthInfo.kind must be 'oauth' in v1")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        for key in ("client_id", "client_secret"):
            value = self.data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

        for key in ("tenant", "token_file"):
            value = self.data.get(key)
            if value is not None and (not isinstance(value, str) or not value.strip()):
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string if set")

    @property
    def client_id(self) -> str:
        """Application (client) id of the app registration."""
        return str(self.data["client_id"])

    @property
    def client_secret(self) -> str:
        return str(self.data["client_secret"])

    @property
    def tenant(self) -> str:
        return str(self.data.get("tenant") or DEFAULT_TENANT)

    @property
    def token_file(self) -> Optional[str]:
        """Path of the account file, or None to keep accounts in memory only."""
        value = self.data.get("token_file")
        return str(value) if value else None

    @property
    def authority(self) -> str:
        return f"{AUTHORITY_HOST}/{self.tenant}"

    @property
    def auth_uri(self) -> str:
        return f"{self.authority}/oauth2/v2.0/authorize"

    @property
    def token_uri(self) -> str:
        return f"{self.authority}/oauth2/v2.0/token"

    def client_config(self) -> dict[str, Any]:
        """Client config in the "installed app" shape the OAuth flow expects."""
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": self.auth_uri,
                "token_uri": self.token_uri,
                "redirect_uris": ["http://localhost"],
            }
        }
