"""OneDriveClient: file and folder operations on a user's drive (v1)."""

from __future__ import annotations

from typing import IO, Callable, Optional, TypeVar

import structlog

from onedrivemgr.auth import AccountStore, AuthInfo, OAuthClient, TokenProvider
from onedrivemgr.config import DriveConfig
from onedrivemgr.controller import OneDriveController
from onedrivemgr.errors import AuthError, OneDriveMgrError
from onedrivemgr.models import (
    DRIVE_ROOT,
    ConflictBehavior,
    DriveRoot,
    FileItem,
    FolderItem,
    Outcome,
    require_file,
    require_folder,
)

logger = structlog.get_logger()

T = TypeVar("T")


class OneDriveClient:
    """
    High-level drive client.

    Every operation returns an Outcome ("success", "not_found", "conflict"
    or "failed") instead of raising, except AuthError, which is raised:
    without a token no operation can proceed.

    Paths are slash-delimited and resolved against a DriveRoot: DRIVE_ROOT
    (the whole drive, default) or APP_ROOT (the application's folder).
    Delete and rename address items by the id returned from a lookup or
    creation.
    """

    def __init__(self, config: DriveConfig) -> None:
        oauth = OAuthClient(
            config.auth,
            account_store=AccountStore(config.auth.token_file),
            redirect_port=config.redirect_port,
        )
        self._token_provider = TokenProvider(oauth)
        self._controller = OneDriveController(
            self._token_provider,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    @classmethod
    def from_auth_info(cls, auth_info: AuthInfo) -> "OneDriveClient":
        return cls(DriveConfig(auth=auth_info))

    @classmethod
    def from_env(cls) -> "OneDriveClient":
        return cls(DriveConfig.from_env())

    @classmethod
    def from_controller(
        cls,
        controller: OneDriveController,
        token_provider: Optional[TokenProvider] = None,
    ) -> "OneDriveClient":
        """Create client with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._controller = controller
        obj._token_provider = token_provider
        return obj

    @property
    def token_provider(self) -> Optional[TokenProvider]:
        return self._token_provider

    def sign_out(self) -> None:
        """Forget the signed-in account and its cached token."""
        if self._token_provider is not None:
            self._token_provider.sign_out()

    # ----------------------------
    # App root
    # ----------------------------
    def app_root_exists(self) -> bool:
        """Return True if the application folder can be read; False on any error."""
        try:
            self._controller.get_app_root()
        except Exception as exc:
            logger.debug("app_root_check_failed", error=str(exc))
            return False
        return True

    # ----------------------------
    # Files
    # ----------------------------
    def get_file(self, path: str, root: DriveRoot = DRIVE_ROOT) -> Outcome[FileItem]:
        """Look up the file at `path` (e.g. "FolderA/TextB.txt")."""
        return self._run(lambda: require_file(self._controller.get_item(path, root)))

    def upload_file(
        self,
        path: str,
        stream: IO[bytes],
        root: DriveRoot = DRIVE_ROOT,
    ) -> Outcome[FileItem]:
        """
        Upload `stream` as the content of the file at `path`.

        The stream is closed whatever the result. A name collision yields a
        "conflict" outcome carrying the server's reason phrase.
        """
        return self._run(lambda: require_file(self._controller.upload(path, stream, root)))

    def delete_file(self, file_id: str) -> Outcome[None]:
        return self._run(lambda: self._controller.delete(file_id))

    def rename_file(self, file_id: str, new_name: str) -> Outcome[None]:
        return self._run(lambda: self._controller.rename(file_id, new_name))

    # ----------------------------
    # Folders
    # ----------------------------
    def get_folder(self, path: str, root: DriveRoot = DRIVE_ROOT) -> Outcome[FolderItem]:
        return self._run(lambda: require_folder(self._controller.get_item(path, root)))

    def create_folder(
        self,
        name: str,
        conflict_behavior: ConflictBehavior = ConflictBehavior.FAIL,
        root: DriveRoot = DRIVE_ROOT,
    ) -> Outcome[FolderItem]:
        """Create folder `name` directly under `root`."""
        return self._run(
            lambda: require_folder(self._controller.create_folder(name, conflict_behavior, root))
        )

    def delete_folder(self, folder_id: str) -> Outcome[None]:
        return self._run(lambda: self._controller.delete(folder_id))

    def rename_folder(self, folder_id: str, new_name: str) -> Outcome[None]:
        return self._run(lambda: self._controller.rename(folder_id, new_name))

    # ----------------------------
    # Internals
    # ----------------------------
    def _run(self, func: Callable[[], T]) -> Outcome[T]:
        try:
            return Outcome.success(func())
        except AuthError as exc:
            # 401 from the API is reported, failed token acquisition is not.
            if exc.details.get("status_code") == 401:
                return Outcome.from_error(exc)
            raise
        except OneDriveMgrError as exc:
            logger.info(
                "operation_failed",
                error_type=exc.__class__.__name__,
                status_code=exc.details.get("status_code"),
            )
            return Outcome.from_error(exc)
