from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.validation import is_valid_email
from .common import OptionalText, RequestShape
from .pagination import PaginatedEnvelope

DEFAULT_SUBJECT = "General"


class ContactPayload(RequestShape):
    name: str = Field(..., min_length=1, max_length=160)
    email: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=5000)
    subject: OptionalText = Field(default=None, max_length=200)
    turnstile_token: OptionalText = None

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: str) -> str:
        if value and not is_valid_email(value):
            raise ValueError("Invalid email address")
        return value


class ContactMessageCreate(BaseModel):
    name: str
    email: str
    subject: str = DEFAULT_SUBJECT
    message: str


class ContactMessage(ContactMessageCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime


class ContactListResponse(PaginatedEnvelope):
    contacts: list[ContactMessage]
