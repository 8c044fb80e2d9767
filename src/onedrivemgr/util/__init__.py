from .ids import new_account_id, new_uuid
from .time import (
    as_utc,
    expires_within,
    normalize_dt,
    now_utc,
    parse_rfc3339,
    to_rfc3339,
)

__all__ = [
    "new_uuid",
    "new_account_id",
    "now_utc",
    "parse_rfc3339",
    "to_rfc3339",
    "normalize_dt",
    "as_utc",
    "expires_within",
]
