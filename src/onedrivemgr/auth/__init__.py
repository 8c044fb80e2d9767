"""Public auth exports for onedrivemgr."""

from __future__ import annotations

from .account_store import AccountStore
from .auth_info import AuthInfo
from .oauth_client import OAuthClient
from .token import AccessToken, Account
from .token_provider import DEFAULT_SCOPES, FRESHNESS_WINDOW, TokenProvider

__all__ = [
    "AuthInfo",
    "OAuthClient",
    "AccountStore",
    "Account",
    "AccessToken",
    "TokenProvider",
    "DEFAULT_SCOPES",
    "FRESHNESS_WINDOW",
]
