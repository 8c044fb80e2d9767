"""Bearer token provider for the drive client."""

from __future__ import annotations

import threading
from datetime import timedelta
from typing import Optional, Sequence

import structlog

from onedrivemgr.errors import AuthError

from .oauth_client import OAuthClient
from .token import AccessToken

logger = structlog.get_logger()

DEFAULT_SCOPES: tuple[str, ...] = (
    "https://graph.microsoft.com/User.Read",
    "https://graph.microsoft.com/Files.ReadWrite",
    "https://graph.microsoft.com/Files.ReadWrite.AppFolder",
)

# A cached token closer than this to expiry is not reused after a failed
# silent acquisition.
FRESHNESS_WINDOW = timedelta(minutes=5)


class TokenProvider:
    """
    Produce a valid bearer token for the first known account.

    Acquisition order:
        1. Silent acquisition with the cached account; success always
           replaces the cached token.
        2. On any silent failure, reuse the cached token unless there is none
           or it expires within FRESHNESS_WINDOW; in that case run the
           interactive flow.

    A single lock covers the whole acquisition, so concurrent callers never
    both prompt the user or both write the cache.
    """

    def __init__(
        self,
        oauth_client: OAuthClient,
        *,
        scopes: Optional[Sequence[str]] = None,
    ) -> None:
        self._client = oauth_client
        self._scopes = tuple(scopes) if scopes is not None else DEFAULT_SCOPES
        self._token: Optional[AccessToken] = None
        self._lock = threading.Lock()

    @property
    def oauth_client(self) -> OAuthClient:
        return self._client

    @property
    def scopes(self) -> tuple[str, ...]:
        return self._scopes

    @property
    def cached_token(self) -> Optional[AccessToken]:
        return self._token

    def get_token(self) -> AccessToken:
        """
        Return a bearer token.

        Raises:
            AuthError: if both silent and interactive acquisition fail.
        """
        with self._lock:
            try:
                token = self._client.acquire_token_silent(
                    self._scopes,
                    self._first_account(),
                )
            except Exception as exc:
                logger.debug("silent_token_failed", error=str(exc))
                if self._token is not None and not self._token.expires_within(FRESHNESS_WINDOW):
                    logger.debug("token_reused", expires_on=self._token.expires_on.isoformat())
                    return self._token
                token = self._acquire_interactive()
            else:
                logger.debug("token_acquired", path="silent")

            self._token = token
            return token

    def sign_out(self) -> None:
        """Remove every cached account and forget the cached token."""
        with self._lock:
            self._token = None
            accounts = self._client.get_accounts()
            for account in accounts:
                self._client.remove_account(account)
        logger.info("signed_out", removed_accounts=len(accounts))

    def _first_account(self):
        accounts = self._client.get_accounts()
        return accounts[0] if accounts else None

    def _acquire_interactive(self) -> AccessToken:
        logger.info("interactive_sign_in_required")
        try:
            token = self._client.acquire_token_interactive(self._scopes)
        except AuthError:
            raise
        except Exception as exc:
            raise AuthError("Interactive token acquisition failed", cause=exc) from exc
        logger.info("token_acquired", path="interactive")
        return token
