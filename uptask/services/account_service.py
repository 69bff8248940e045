"""Account Service — registration, confirmation, login and password recovery.

Invariants:
    - A user can log in only once confirmed; each failed unconfirmed login issues a fresh token
    - Tokens are single-use: confirm-account and update-password delete them
    - validate_token only checks a reset token; it never consumes it
    - Expired tokens are purged when looked up and reported as invalid
    - Mail is sent after the commit, so a rolled-back flow never mails a dead token
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.config import get_settings
from uptask.core.errors import (
    AuthenticationError, ConflictError, NotAuthorizedError, ResourceNotFoundError,
)
from uptask.core.tokens import compute_expiry, generate_token, is_expired
from uptask.infrastructure.mailer import AuthMailer
from uptask.infrastructure.security import (
    create_access_token, hash_password, verify_password,
)
from uptask.models.token import Token
from uptask.models.user import User
from uptask.schemas.auth import AccountCreate

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccountService:
    """Account lifecycle flows backed by the users and tokens tables."""

    def __init__(
        self,
        db: AsyncSession,
        mailer: AuthMailer,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.db = db
        self.mailer = mailer
        self.clock = clock

    # ─── Registration & confirmation ─────────────────────────────

    async def create_account(self, data: AccountCreate) -> User:
        if await self._find_user_by_email(data.email):
            raise ConflictError(
                "A user with that e-mail is already registered",
                code="EMAIL_TAKEN",
            )
        user = User(
            name=data.name,
            email=data.email,
            password=hash_password(data.password),
            confirmed=False,
        )
        self.db.add(user)
        try:
            await self.db.flush()
            token = await self._issue_token(user)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(
                "A user with that e-mail is already registered",
                code="EMAIL_TAKEN",
            )

        logger.info("Account created", extra={"user_id": user.id})
        await self.mailer.send_confirmation_email(user.email, user.name, token.token)
        return user

    async def confirm_account(self, token_value: str) -> None:
        token = await self._get_valid_token(token_value)
        user = await self.db.get(User, token.user_id)
        if user is None:
            raise ResourceNotFoundError("Invalid token")
        user.confirmed = True
        await self.db.delete(token)
        await self.db.commit()
        logger.info("Account confirmed", extra={"user_id": user.id})

    async def request_confirmation_code(self, email: str) -> None:
        user = await self._get_user_by_email(email)
        if user.confirmed:
            raise NotAuthorizedError("This account is already confirmed")
        token = await self._issue_token(user)
        await self.db.commit()
        await self.mailer.send_confirmation_email(user.email, user.name, token.token)

    # ─── Login ───────────────────────────────────────────────────

    async def login(self, email: str, password: str) -> str:
        """Return a signed access token for valid, confirmed credentials."""
        user = await self._get_user_by_email(email)

        if not user.confirmed:
            token = await self._issue_token(user)
            await self.db.commit()
            await self.mailer.send_confirmation_email(
                user.email, user.name, token.token,
            )
            raise AuthenticationError(
                "This account is not confirmed yet; "
                "a new confirmation e-mail has been sent",
            )

        if not verify_password(password, user.password):
            logger.info("Login rejected: wrong password", extra={"user_id": user.id})
            raise AuthenticationError("Incorrect password")

        return create_access_token(user.id)

    # ─── Password recovery ───────────────────────────────────────

    async def forgot_password(self, email: str) -> None:
        user = await self._get_user_by_email(email)
        token = await self._issue_token(user)
        await self.db.commit()
        await self.mailer.send_password_reset_token(user.email, user.name, token.token)

    async def validate_token(self, token_value: str) -> None:
        await self._get_valid_token(token_value)

    async def update_password_with_token(self, token_value: str, password: str) -> None:
        token = await self._get_valid_token(token_value)
        user = await self.db.get(User, token.user_id)
        if user is None:
            raise ResourceNotFoundError("Invalid token")
        user.password = hash_password(password)
        await self.db.delete(token)
        await self.db.commit()
        logger.info("Password reset with token", extra={"user_id": user.id})

    # ─── Authenticated profile ───────────────────────────────────

    async def update_profile(self, user: User, name: str, email: str) -> None:
        existing = await self._find_user_by_email(email)
        if existing is not None and existing.id != user.id:
            raise ConflictError(
                "That e-mail is already registered", code="EMAIL_TAKEN",
            )
        user.name = name
        user.email = email
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(
                "A user with that e-mail is already registered",
                code="EMAIL_TAKEN",
            )

    async def update_current_password(
        self, user: User, current_password: str, new_password: str,
    ) -> None:
        if not verify_password(current_password, user.password):
            raise AuthenticationError("The current password is incorrect")
        user.password = hash_password(new_password)
        await self.db.commit()

    def check_password(self, user: User, password: str) -> None:
        if not verify_password(password, user.password):
            raise AuthenticationError("The password is incorrect")

    # ─── Helpers ─────────────────────────────────────────────────

    async def _find_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def _get_user_by_email(self, email: str) -> User:
        user = await self._find_user_by_email(email)
        if user is None:
            raise ResourceNotFoundError("User not found")
        return user

    async def _issue_token(self, user: User) -> Token:
        """Create a token whose code does not collide with a live one."""
        now = self.clock()
        value = generate_token()
        while await self._find_token(value) is not None:
            value = generate_token()
        token = Token(
            token=value,
            user_id=user.id,
            created_at=now,
            expires_at=compute_expiry(now, get_settings().token_ttl_minutes),
        )
        self.db.add(token)
        return token

    async def _find_token(self, value: str) -> Token | None:
        result = await self.db.execute(
            select(Token).where(Token.token == value).limit(1),
        )
        return result.scalar_one_or_none()

    async def _get_valid_token(self, value: str) -> Token:
        token = await self._find_token(value)
        if token is None:
            raise ResourceNotFoundError("Invalid token")
        if is_expired(token.expires_at, self.clock()):
            await self.db.execute(delete(Token).where(Token.id == token.id))
            await self.db.commit()
            raise ResourceNotFoundError("Invalid token")
        return token
