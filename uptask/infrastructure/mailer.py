"""Auth Mailer — outgoing account confirmation and password reset messages.

Invariants:
    - Each message carries the recipient, a subject, the one-time token and a
      link into the frontend that consumes it

Design Decisions:
    - Delivery transport is out of scope; LoggingAuthMailer writes the rendered
      message to the log so local setups can read tokens from the console
    - get_mailer is a FastAPI dependency so tests swap in a recording mailer
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from uptask.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthEmail:
    """Rendered outgoing message."""
    to: str
    name: str
    subject: str
    token: str
    link: str
    sender: str


class AuthMailer(Protocol):
    async def send_confirmation_email(self, email: str, name: str, token: str) -> None: ...
    async def send_password_reset_token(self, email: str, name: str, token: str) -> None: ...


def build_confirmation_email(email: str, name: str, token: str) -> AuthEmail:
    settings = get_settings()
    return AuthEmail(
        to=email,
        name=name,
        subject="UpTask - Confirm your account",
        token=token,
        link=f"{settings.frontend_url}/auth/confirm-account",
        sender=settings.mail_from,
    )


def build_password_reset_email(email: str, name: str, token: str) -> AuthEmail:
    settings = get_settings()
    return AuthEmail(
        to=email,
        name=name,
        subject="UpTask - Reset your password",
        token=token,
        link=f"{settings.frontend_url}/auth/new-password",
        sender=settings.mail_from,
    )


class LoggingAuthMailer:
    """Writes outgoing auth messages to the application log."""

    async def send_confirmation_email(self, email: str, name: str, token: str) -> None:
        self._deliver(build_confirmation_email(email, name, token))

    async def send_password_reset_token(self, email: str, name: str, token: str) -> None:
        self._deliver(build_password_reset_email(email, name, token))

    def _deliver(self, message: AuthEmail) -> None:
        logger.info(
            f"{message.subject}: hello {message.name}, visit {message.link} "
            f"and enter code {message.token}",
            extra={"email": message.to},
        )


_mailer = LoggingAuthMailer()


def get_mailer() -> AuthMailer:
    """FastAPI dependency for the auth mailer."""
    return _mailer
