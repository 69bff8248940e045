"""One-Time Tokens — code format and expiry arithmetic."""

from datetime import datetime, timedelta, timezone

from uptask.core.tokens import (
    TOKEN_MAX, TOKEN_MIN, compute_expiry, generate_token, is_expired,
)


def test_generate_token_is_six_digits():
    for _ in range(50):
        token = generate_token()
        assert len(token) == 6
        assert token.isdigit()


def test_generate_token_bounds():
    assert generate_token(lambda n: 0) == str(TOKEN_MIN)
    assert generate_token(lambda n: n - 1) == str(TOKEN_MAX)


def test_compute_expiry_adds_ttl():
    created = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert compute_expiry(created, 10) == created + timedelta(minutes=10)


def test_is_expired_boundaries():
    expires = datetime(2026, 1, 1, 12, 10, tzinfo=timezone.utc)
    assert not is_expired(expires, expires - timedelta(seconds=1))
    assert is_expired(expires, expires)
    assert is_expired(expires, expires + timedelta(minutes=1))


def test_is_expired_treats_naive_as_utc():
    expires_naive = datetime(2026, 1, 1, 12, 10)
    now = datetime(2026, 1, 1, 12, 11, tzinfo=timezone.utc)
    assert is_expired(expires_naive, now)
    assert not is_expired(expires_naive, now - timedelta(minutes=5))
