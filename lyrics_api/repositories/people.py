from __future__ import annotations

from typing import Protocol

from ..domain.pagination import PageParams, PageResult
from ..domain.people import Person, PersonPayload
from ..models.people import ArtistModel, ComposerModel
from .base import SluggedRepository


class PeopleRepository(Protocol):
    async def list_page(self, params: PageParams, query: str | None = None) -> PageResult[Person]: ...

    async def get_by_id(self, entity_id: int) -> Person | None: ...

    async def get_by_slug(self, slug: str) -> Person | None: ...

    async def search(self, query: str, limit: int) -> list[Person]: ...

    async def exists(self, entity_id: int) -> bool: ...

    async def slug_exists(self, slug: str, *, exclude_id: int | None = None) -> bool: ...

    async def create(self, payload: PersonPayload, *, slug: str) -> int: ...

    async def update(self, entity_id: int, payload: PersonPayload, *, slug: str) -> bool: ...

    async def delete(self, entity_id: int) -> bool: ...


class SqlAlchemyPeopleRepository(SluggedRepository[Person]):
    """Artists and composers share a column set, so they share statements."""

    row_type = Person

    async def create(self, payload: PersonPayload, *, slug: str) -> int:
        return await self._insert(payload.model_dump(exclude={"slug"}) | {"slug": slug})

    async def update(self, entity_id: int, payload: PersonPayload, *, slug: str) -> bool:
        return await self._update(entity_id, payload.model_dump(exclude={"slug"}) | {"slug": slug})


class SqlAlchemyArtistsRepository(SqlAlchemyPeopleRepository):
    model = ArtistModel


class SqlAlchemyComposersRepository(SqlAlchemyPeopleRepository):
    model = ComposerModel
