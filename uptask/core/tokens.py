"""One-Time Tokens — 6-digit codes for account confirmation and password reset.

Invariants:
    - Tokens are 6-digit numeric strings in [100000, 999999]
    - A token expires ttl minutes after creation
    - Naive timestamps (SQLite round-trips) are treated as UTC

Design Decisions:
    - Random source injected: generate_token is deterministic under test
"""

import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

TOKEN_MIN = 100_000
TOKEN_MAX = 999_999


def generate_token(randbelow: Callable[[int], int] = secrets.randbelow) -> str:
    """Return a 6-digit numeric code."""
    return str(TOKEN_MIN + randbelow(TOKEN_MAX - TOKEN_MIN + 1))


def compute_expiry(created_at: datetime, ttl_minutes: int) -> datetime:
    return created_at + timedelta(minutes=ttl_minutes)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_expired(expires_at: datetime, now: datetime) -> bool:
    return _as_utc(now) >= _as_utc(expires_at)
