"""Configuration for onedrivemgr.

Settings can be built directly or read from the environment:

    ONEDRIVEMGR_CLIENT_ID      - application (client) id (required)
    ONEDRIVEMGR_CLIENT_SECRET  - client secret (required)
    ONEDRIVEMGR_TENANT         - tenant id or "common" (default)
    ONEDRIVEMGR_TOKEN_FILE     - persist the signed-in account to this file
    ONEDRIVEMGR_BASE_URL       - drive endpoint (default: Graph /me/drive/)
    ONEDRIVEMGR_TIMEOUT        - request timeout in seconds (default 60)
    ONEDRIVEMGR_REDIRECT_PORT  - loopback port for sign-in (default: any free)

A `.env` file in the working directory is loaded first; variables already
present in the environment take precedence.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from onedrivemgr.auth import AuthInfo
from onedrivemgr.controller.drive_controller import DEFAULT_TIMEOUT_SEC
from onedrivemgr.controller.endpoints import SERVICE_ENDPOINT
from onedrivemgr.errors import InvalidArgumentError

ENV_PREFIX = "ONEDRIVEMGR_"


@dataclass(frozen=True)
class DriveConfig:
    """Settings for OneDriveClient."""

    auth: AuthInfo
    base_url: str = SERVICE_ENDPOINT
    timeout: Optional[float] = DEFAULT_TIMEOUT_SEC
    redirect_port: int = 0

    @classmethod
    def from_env(
        cls,
        prefix: str = ENV_PREFIX,
        *,
        env_file: Optional[Path] = None,
    ) -> "DriveConfig":
        """Create a DriveConfig from environment variables.

        Args:
            prefix: Variable name prefix.
            env_file: .env file to load. Defaults to ./.env if present.

        Returns:
            DriveConfig with values from the environment.

        Raises:
            InvalidArgumentError: if required variables are missing or malformed.
        """
        load_dotenv(env_file or Path.cwd() / ".env", override=False)

        def get(name: str) -> Optional[str]:
            value = os.environ.get(prefix + name, "").strip()
            return value or None

        data: dict[str, str] = {}
        for key in ("client_id", "client_secret", "tenant", "token_file"):
            value = get(key.upper())
            if value is not None:
                data[key] = value

        try:
            auth = AuthInfo(kind="oauth", data=data)
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Missing or invalid {prefix}CLIENT_ID / {prefix}CLIENT_SECRET",
                cause=exc,
            ) from exc

        timeout_raw = get("TIMEOUT")
        port_raw = get("REDIRECT_PORT")
        try:
            timeout = float(timeout_raw) if timeout_raw is not None else DEFAULT_TIMEOUT_SEC
            redirect_port = int(port_raw) if port_raw is not None else 0
        except ValueError as exc:
            raise InvalidArgumentError(
                "Invalid numeric setting",
                details={"timeout": timeout_raw, "redirect_port": port_raw},
                cause=exc,
            ) from exc

        return cls(
            auth=auth,
            base_url=get("BASE_URL") or SERVICE_ENDPOINT,
            timeout=timeout,
            redirect_port=redirect_port,
        )
