from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageParams(BaseModel):
    """Already-clamped page number and page size."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PageResult(BaseModel, Generic[T]):
    """One page of rows plus the totals needed to render pagination controls."""

    items: list[T]
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    total_pages: int = Field(ge=0)


class PaginatedEnvelope(BaseModel):
    """Common fields of every list response; subclasses add the entity list."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    page: int
    total_pages: int = Field(alias="totalPages")
