"""Account Routes — registration, confirmation, login, password recovery and profile.

Invariants:
    - Public endpoints: create-account, confirm-account, login, request-code,
      forgot-password, validate-token, update-password/{token}
    - Authenticated endpoints: user, profile, update-password, check-password
    - Success answers are plain text; login answers with the bare JWT
"""

import logging

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from uptask.api.deps import get_current_user
from uptask.infrastructure.database import get_db
from uptask.infrastructure.mailer import AuthMailer, get_mailer
from uptask.models.user import User
from uptask.schemas.auth import (
    AccountCreate, CurrentPasswordUpdate, EmailRequest, LoginRequest,
    NewPasswordRequest, PasswordCheck, ProfileUpdate, TOKEN_PATTERN,
    TokenPayload, UserSummary,
)
from uptask.services.account_service import AccountService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def get_account_service(
    db: AsyncSession = Depends(get_db),
    mailer: AuthMailer = Depends(get_mailer),
) -> AccountService:
    return AccountService(db, mailer)


@router.post(
    "/create-account",
    response_class=PlainTextResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_account(
    body: AccountCreate,
    service: AccountService = Depends(get_account_service),
):
    await service.create_account(body)
    return "Account created, check your e-mail to confirm it"


@router.post("/confirm-account", response_class=PlainTextResponse)
async def confirm_account(
    body: TokenPayload,
    service: AccountService = Depends(get_account_service),
):
    await service.confirm_account(body.token)
    return "Account confirmed successfully"


@router.post("/login", response_class=PlainTextResponse)
async def login(
    body: LoginRequest,
    service: AccountService = Depends(get_account_service),
):
    return await service.login(body.email, body.password)


@router.post("/request-code", response_class=PlainTextResponse)
async def request_confirmation_code(
    body: EmailRequest,
    service: AccountService = Depends(get_account_service),
):
    await service.request_confirmation_code(body.email)
    return "A new token was sent to your e-mail"


@router.post("/forgot-password", response_class=PlainTextResponse)
async def forgot_password(
    body: EmailRequest,
    service: AccountService = Depends(get_account_service),
):
    await service.forgot_password(body.email)
    return "Check your e-mail for instructions"


@router.post("/validate-token", response_class=PlainTextResponse)
async def validate_token(
    body: TokenPayload,
    service: AccountService = Depends(get_account_service),
):
    await service.validate_token(body.token)
    return "Valid token, set your new password"


@router.post("/update-password/{token}", response_class=PlainTextResponse)
async def update_password_with_token(
    body: NewPasswordRequest,
    token: str = Path(pattern=TOKEN_PATTERN),
    service: AccountService = Depends(get_account_service),
):
    await service.update_password_with_token(token, body.password)
    return "Password updated successfully"


@router.get("/user", response_model=UserSummary)
async def current_user(user: User = Depends(get_current_user)):
    return user


@router.put("/profile", response_class=PlainTextResponse)
async def update_profile(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    await service.update_profile(user, body.name, body.email)
    return "Profile updated successfully"


@router.post("/update-password", response_class=PlainTextResponse)
async def update_current_user_password(
    body: CurrentPasswordUpdate,
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    await service.update_current_password(
        user, body.current_password, body.password,
    )
    return "Password updated successfully"


@router.post("/check-password", response_class=PlainTextResponse)
async def check_password(
    body: PasswordCheck,
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    service.check_password(user, body.password)
    return "Password is correct"
