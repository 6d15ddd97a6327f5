from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..services.validation import is_valid_email
from .common import OptionalText, RequestShape
from .pagination import PaginatedEnvelope


class ReportStatus(str, Enum):
    """Triage lifecycle of a moderation report."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


ALLOWED_REPORT_STATUSES = ", ".join(status.value for status in ReportStatus)


class ReportPayload(RequestShape):
    name: str = Field(..., min_length=1, max_length=160)
    email: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=5000)
    song_slug: OptionalText = Field(default=None, max_length=300)
    song_title: OptionalText = Field(default=None, max_length=300)
    song_artist: OptionalText = Field(default=None, max_length=200)
    turnstile_token: OptionalText = None

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: str) -> str:
        if value and not is_valid_email(value):
            raise ValueError("Invalid email address")
        return value


class ReportSnapshot(BaseModel):
    """Song details copied into the report at submission time."""

    song_id: Optional[int] = None
    song_slug: Optional[str] = None
    song_title: Optional[str] = None
    song_artist: Optional[str] = None


class ReportCreate(ReportSnapshot):
    reporter_name: str
    reporter_email: str
    message: str


class Report(ReportCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: ReportStatus = ReportStatus.PENDING
    created_at: datetime


class ReportListResponse(PaginatedEnvelope):
    reports: list[Report]


class ReportStatusUpdate(RequestShape):
    status: str = Field(..., min_length=1)

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        try:
            return ReportStatus(value.lower()).value
        except ValueError:
            raise ValueError(f"Invalid status. Allowed: {ALLOWED_REPORT_STATUSES}") from None
