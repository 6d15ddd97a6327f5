"""Shapes for artists and composers, which share one column set."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import OptionalText, RequestShape
from .pagination import PaginatedEnvelope
from .songs import SongSummary


class PersonPayload(RequestShape):
    name: str = Field(..., min_length=1, max_length=200)
    slug: OptionalText = Field(default=None, max_length=200)
    bio: OptionalText = None
    image_url: OptionalText = Field(default=None, max_length=1000)
    social_links: Optional[list[str]] = None

    @field_validator("social_links")
    @classmethod
    def _drop_blank_links(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return None
        links = [link.strip() for link in value if link and link.strip()]
        return links or None


class Person(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    bio: OptionalText = None
    image_url: Optional[str] = None
    social_links: Optional[list[str]] = None
    created_at: datetime


class PersonDetail(Person):
    songs: list[SongSummary] = Field(default_factory=list)


class ArtistListResponse(PaginatedEnvelope):
    artists: list[Person]


class ComposerListResponse(PaginatedEnvelope):
    composers: list[Person]
