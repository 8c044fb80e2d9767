from __future__ import annotations

import uuid


def new_uuid() -> str:
    """Generate a UUID4 string."""
    return str(uuid.uuid4())


def new_account_id() -> str:
    """Generate a local key for an account added to the store."""
    return new_uuid()
