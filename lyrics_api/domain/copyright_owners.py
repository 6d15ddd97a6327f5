from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import OptionalText, RequestShape
from .pagination import PaginatedEnvelope
from .songs import SongSummary


class CopyrightOwnerPayload(RequestShape):
    name: str = Field(..., min_length=1, max_length=200)
    slug: OptionalText = Field(default=None, max_length=200)
    legal_name: OptionalText = Field(default=None, max_length=300)
    organization: OptionalText = Field(default=None, max_length=300)
    territory: OptionalText = Field(default=None, max_length=200)
    email: OptionalText = Field(default=None, max_length=255)
    website: OptionalText = Field(default=None, max_length=1000)
    address: OptionalText = None
    registration_id: OptionalText = Field(default=None, max_length=120)
    ipi_number: OptionalText = Field(default=None, max_length=64)
    affiliation: OptionalText = Field(default=None, max_length=200)
    notes: OptionalText = None


class CopyrightOwner(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    legal_name: Optional[str] = None
    organization: Optional[str] = None
    territory: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    registration_id: Optional[str] = None
    ipi_number: Optional[str] = None
    affiliation: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime


class CopyrightOwnerDetail(CopyrightOwner):
    songs: list[SongSummary] = Field(default_factory=list)


class CopyrightOwnerListResponse(PaginatedEnvelope):
    copyright_owners: list[CopyrightOwner]
