from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import MAX_ROW_ID, OptionalText, RequestShape
from .pagination import PaginatedEnvelope


class SongPayload(RequestShape):
    """Body of admin song create/update; every editable field is replaced."""

    title: str = Field(..., min_length=1, max_length=300)
    lyrics: str = Field(..., min_length=1)
    slug: OptionalText = Field(default=None, max_length=300)
    category: OptionalText = Field(default=None, max_length=120)
    artist_id: Optional[int] = Field(default=None, ge=1, le=MAX_ROW_ID)
    composer_id: Optional[int] = Field(default=None, ge=1, le=MAX_ROW_ID)
    copyright_owner_id: Optional[int] = Field(default=None, ge=1, le=MAX_ROW_ID)


class SongSummary(BaseModel):
    """Row shape shared by list, search, popular and per-credit song queries."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    category: Optional[str] = None
    views: int = 0
    created_at: datetime
    artist_id: Optional[int] = None
    composer_id: Optional[int] = None
    copyright_owner_id: Optional[int] = None
    artist_name: Optional[str] = None
    artist_slug: Optional[str] = None
    composer_name: Optional[str] = None
    composer_slug: Optional[str] = None
    copyright_owner_name: Optional[str] = None
    copyright_owner_slug: Optional[str] = None


class SongDetail(SongSummary):
    lyrics: str


class SongListResponse(PaginatedEnvelope):
    songs: list[SongSummary]


class SearchResponse(BaseModel):
    query: str
    results: list[SongSummary]
    count: int


class CategoriesResponse(BaseModel):
    categories: list[str]


class PopularResponse(BaseModel):
    songs: list[SongSummary]


class ViewResponse(BaseModel):
    success: bool = True
    slug: str
