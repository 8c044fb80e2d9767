"""OAuth client for the Microsoft identity platform."""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

import structlog

from onedrivemgr.errors import AuthError, InvalidArgumentError
from onedrivemgr.util.time import as_utc

from .account_store import AccountStore
from .auth_info import AuthInfo
from .token import AccessToken, Account

logger = structlog.get_logger()

# Needed for the token endpoint to issue a refresh token.
OFFLINE_ACCESS = "offline_access"
RELAX_TOKEN_SCOPE_VAR = "OAUTHLIB_RELAX_TOKEN_SCOPE"


class OAuthClient:
    """
    Acquire access tokens for an app registration.

    Interactive acquisition runs the authorization-code flow through a local
    loopback server (google-auth-oauthlib). Silent acquisition reuses the
    account's access token while valid and otherwise redeems its refresh
    token (google-auth).

    While the sign-in flow runs, OAUTHLIB_RELAX_TOKEN_SCOPE is set in the
    process environment and restored afterwards.
    """

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        account_store: Optional[AccountStore] = None,
        redirect_port: int = 0,
    ) -> None:
        if auth_info.kind != "oauth":
            raise InvalidArgumentError("OAuthClient requires AuthInfo(kind='oauth')")
        self._auth_info = auth_info
        self._store = account_store or AccountStore(auth_info.token_file)
        self._redirect_port = redirect_port

    @property
    def account_store(self) -> AccountStore:
        return self._store

    def get_accounts(self) -> list[Account]:
        return self._store.accounts()

    def remove_account(self, account: Account) -> None:
        self._store.remove(account)

    def acquire_token_silent(self, scopes: Sequence[str], account: Optional[Account]) -> AccessToken:
        """
        Return a token for `account` without user interaction.

        Raises:
            AuthError: no account, or the refresh grant was rejected/failed.
        """
        _validate_scopes(scopes)
        if account is None:
            raise AuthError("No cached account for silent token acquisition")

        creds = account.credentials
        if creds.valid and creds.token:
            return _to_access_token(creds)

        if not creds.refresh_token:
            raise AuthError(
                "Cached account has no refresh token",
                details={"account_id": account.account_id},
            )

        logger.debug("refreshing_access_token", account_id=account.account_id)
        try:
            from google.auth.transport.requests import Request

            creds.refresh(Request())
        except Exception as exc:
            raise AuthError(
                "Failed to refresh OAuth credentials",
                details={"account_id": account.account_id},
                cause=exc,
            ) from exc

        self._store.persist(account)
        return _to_access_token(creds)

    def acquire_token_interactive(self, scopes: Sequence[str]) -> AccessToken:
        """
        Run the browser sign-in flow and register the resulting account.

        Raises:
            AuthError: on flow failures.
            InvalidArgumentError: if scopes is invalid.
        """
        _validate_scopes(scopes)

        try:
            from google_auth_oauthlib.flow import InstalledAppFlow
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth-oauthlib"},
                cause=exc,
            ) from exc

        request_scopes = list(scopes)
        if OFFLINE_ACCESS not in request_scopes:
            request_scopes.append(OFFLINE_ACCESS)

        logger.info("authorization_flow_started", authority=self._auth_info.authority)
        try:
            flow = InstalledAppFlow.from_client_config(
                self._auth_info.client_config(),
                scopes=request_scopes,
            )
            with _relaxed_token_scope():
                creds = flow.run_local_server(port=self._redirect_port)
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={"authority": self._auth_info.authority},
                cause=exc,
            ) from exc

        if not creds.token:
            raise AuthError("OAuth authorization flow returned no access token")

        self._store.add(creds)
        return _to_access_token(creds)


def _validate_scopes(scopes: Sequence[str]) -> None:
    if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
        raise InvalidArgumentError("scopes must be a non-empty sequence of strings")


def _to_access_token(creds) -> AccessToken:
    # google-auth keeps expiry as naive UTC.
    if creds.expiry is None:
        raise AuthError("Token response did not include an expiry")
    return AccessToken(value=creds.token, expires_on=as_utc(creds.expiry))


@contextmanager
def _relaxed_token_scope() -> Iterator[None]:
    # Graph echoes granted scopes in a different form than requested, which
    # oauthlib otherwise reports as a scope change.
    previous = os.environ.get(RELAX_TOKEN_SCOPE_VAR)
    os.environ[RELAX_TOKEN_SCOPE_VAR] = "1"
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop(RELAX_TOKEN_SCOPE_VAR, None)
        else:
            os.environ[RELAX_TOKEN_SCOPE_VAR] = previous
