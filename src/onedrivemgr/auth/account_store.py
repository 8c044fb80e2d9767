"""Store of signed-in accounts."""

from __future__ import annotations

import os
import threading
from typing import Optional

import structlog

from onedrivemgr.errors import AuthError
from onedrivemgr.util.ids import new_account_id

from .token import Account

logger = structlog.get_logger()

# Access tokens never reach disk; only the refresh-capable part is written.
_STRIPPED_FIELDS = ["token", "expiry"]


class AccountStore:
    """
    Ordered collection of accounts.

    With `token_file` set, the store loads a previously saved account on
    construction and rewrites/removes the file as accounts change.
    """

    def __init__(self, token_file: Optional[str] = None) -> None:
        self._token_file = token_file
        self._accounts: list[Account] = []
        self._lock = threading.Lock()

        if token_file and os.path.exists(token_file):
            self._accounts.append(self._load(token_file))

    @property
    def token_file(self) -> Optional[str]:
        return self._token_file

    def accounts(self) -> list[Account]:
        with self._lock:
            return list(self._accounts)

    def first(self) -> Optional[Account]:
        with self._lock:
            return self._accounts[0] if self._accounts else None

    def add(self, credentials) -> Account:
        """Register credentials from a completed sign-in as the active account."""
        account = Account(account_id=new_account_id(), credentials=credentials)
        with self._lock:
            # Only one account is active at a time.
            self._accounts = [account]
            if self._token_file:
                self._save(credentials)
        logger.info("account_added", account_id=account.account_id)
        return account

    def remove(self, account: Account) -> None:
        with self._lock:
            self._accounts = [a for a in self._accounts if a.account_id != account.account_id]
            if not self._accounts:
                self._delete_file()
        logger.info("account_removed", account_id=account.account_id)

    def persist(self, account: Account) -> None:
        """Rewrite the token file after the account's refresh token rotated."""
        if not self._token_file:
            return
        with self._lock:
            if any(a.account_id == account.account_id for a in self._accounts):
                self._save(account.credentials)

    def _load(self, token_file: str) -> Account:
        try:
            from google.oauth2.credentials import Credentials

            creds = Credentials.from_authorized_user_file(token_file)
        except Exception as exc:
            raise AuthError(
                "Failed to load token_file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc
        return Account(account_id=new_account_id(), credentials=creds)

    def _save(self, creds) -> None:
        token_file = self._token_file
        if not token_file:
            return
        token_dir = os.path.dirname(token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)

        try:
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json(strip=_STRIPPED_FIELDS))
        except Exception as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc

    def _delete_file(self) -> None:
        token_file = self._token_file
        if not token_file or not os.path.exists(token_file):
            return
        try:
            os.remove(token_file)
        except OSError as exc:
            raise AuthError(
                "Failed to remove OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc
