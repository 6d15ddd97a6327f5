from __future__ import annotations

from typing import Protocol

from ..domain.copyright_owners import CopyrightOwner, CopyrightOwnerPayload
from ..domain.pagination import PageParams, PageResult
from ..models.copyright_owner import CopyrightOwnerModel
from .base import SluggedRepository


class CopyrightOwnersRepository(Protocol):
    async def list_page(
        self, params: PageParams, query: str | None = None
    ) -> PageResult[CopyrightOwner]: ...

    async def get_by_id(self, entity_id: int) -> CopyrightOwner | None: ...

    async def get_by_slug(self, slug: str) -> CopyrightOwner | None: ...

    async def search(self, query: str, limit: int) -> list[CopyrightOwner]: ...

    async def exists(self, entity_id: int) -> bool: ...

    async def slug_exists(self, slug: str, *, exclude_id: int | None = None) -> bool: ...

    async def create(self, payload: CopyrightOwnerPayload, *, slug: str) -> int: ...

    async def update(self, entity_id: int, payload: CopyrightOwnerPayload, *, slug: str) -> bool: ...

    async def delete(self, entity_id: int) -> bool: ...


class SqlAlchemyCopyrightOwnersRepository(SluggedRepository[CopyrightOwner]):
    """Copyright owners backed by the ``copyright_owners`` table."""

    model = CopyrightOwnerModel
    row_type = CopyrightOwner

    async def create(self, payload: CopyrightOwnerPayload, *, slug: str) -> int:
        return await self._insert(payload.model_dump(exclude={"slug"}) | {"slug": slug})

    async def update(self, entity_id: int, payload: CopyrightOwnerPayload, *, slug: str) -> bool:
        return await self._update(entity_id, payload.model_dump(exclude={"slug"}) | {"slug": slug})
