"""Account Schemas — registration, login, token and password payloads.

Invariants:
    - Emails are validated and lower-cased before reaching handlers
    - New passwords are at least 8 characters and must match their confirmation
    - Tokens are 6-digit numeric strings
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

MIN_PASSWORD_LENGTH = 8
TOKEN_PATTERN = r"^\d{6}$"


def _normalize_email(v: str) -> str:
    return v.strip().lower()


def _require_text(v: str, field_name: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    return v


class _NewPasswordMixin(BaseModel):
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)
    password_confirmation: str

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirmation:
            raise ValueError("passwords do not match")
        return self


class AccountCreate(_NewPasswordMixin):
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _require_text(v, "name")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class TokenPayload(BaseModel):
    token: str = Field(pattern=TOKEN_PATTERN)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class EmailRequest(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class NewPasswordRequest(_NewPasswordMixin):
    pass


class CurrentPasswordUpdate(_NewPasswordMixin):
    current_password: str = Field(min_length=1)


class PasswordCheck(BaseModel):
    password: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: EmailStr

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _require_text(v, "name")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class UserSummary(BaseModel):
    """Public view of a user; never includes the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
