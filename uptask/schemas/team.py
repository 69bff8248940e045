"""Team Schemas — member lookup and add payloads."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, field_validator


class MemberLookup(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class MemberAdd(BaseModel):
    id: UUID
