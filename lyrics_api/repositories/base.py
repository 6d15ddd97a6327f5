"""Shared statement helpers for tables keyed by id and addressed by slug."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.pagination import PageParams, PageResult
from ..services.pagination import build_page

RowT = TypeVar("RowT", bound=BaseModel)


class DuplicateSlugError(ValueError):
    """Raised when the store rejects a slug another row already holds."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"slug already exists: {slug}")
        self.slug = slug


def like_pattern(term: str) -> str:
    """Substring pattern with LIKE wildcards in ``term`` matched literally."""

    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SluggedRepository(Generic[RowT]):
    """Single-statement CRUD for one table with ``id``, ``name`` and ``slug`` columns.

    Subclasses set ``model`` (the ORM class) and ``row_type`` (the domain shape
    rows are validated into). Lookups return ``None``/``False``/``[]`` when
    nothing matches; driver and constraint errors propagate to the caller.
    """

    model: Any
    row_type: type[RowT]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _to_row(self, model: Any) -> RowT:
        return self.row_type.model_validate(model)

    def _select(self):
        # Bulk UPDATEs skip the identity map; always reload attributes from the row.
        return select(self.model).execution_options(populate_existing=True)

    async def list_page(self, params: PageParams, query: str | None = None) -> PageResult[RowT]:
        count_stmt = select(func.count()).select_from(self.model)
        page_stmt = self._select()
        if query:
            condition = self.model.name.ilike(like_pattern(query), escape="\\")
            count_stmt = count_stmt.where(condition)
            page_stmt = page_stmt.where(condition)
        page_stmt = (
            page_stmt.order_by(self.model.name.asc(), self.model.id.asc())
            .limit(params.limit)
            .offset(params.offset)
        )
        total = (await self._session.execute(count_stmt)).scalar_one()
        result = await self._session.execute(page_stmt)
        items = [self._to_row(row) for row in result.scalars().all()]
        return build_page(items, total, params)

    async def get_by_id(self, entity_id: int) -> RowT | None:
        result = await self._session.execute(self._select().where(self.model.id == entity_id))
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_row(model)

    async def get_by_slug(self, slug: str) -> RowT | None:
        result = await self._session.execute(self._select().where(self.model.slug == slug))
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return self._to_row(model)

    async def search(self, query: str, limit: int) -> list[RowT]:
        result = await self._session.execute(
            self._select()
            .where(self.model.name.ilike(like_pattern(query), escape="\\"))
            .order_by(self.model.name.asc(), self.model.id.asc())
            .limit(limit)
        )
        return [self._to_row(row) for row in result.scalars().all()]

    async def exists(self, entity_id: int) -> bool:
        result = await self._session.execute(
            select(self.model.id).where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none() is not None

    async def slug_exists(self, slug: str, *, exclude_id: int | None = None) -> bool:
        stmt = select(self.model.id).where(self.model.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def _insert(self, values: dict[str, Any]) -> int:
        try:
            result = await self._session.execute(
                insert(self.model).values(**values).returning(self.model.id)
            )
            new_id = result.scalar_one()
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            await self._raise_if_duplicate(values.get("slug"))
            raise
        return new_id

    async def _update(self, entity_id: int, values: dict[str, Any]) -> bool:
        try:
            result = await self._session.execute(
                update(self.model)
                .where(self.model.id == entity_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            await self._session.commit()
        except IntegrityError:
            await self._session.rollback()
            await self._raise_if_duplicate(values.get("slug"), exclude_id=entity_id)
            raise
        return result.rowcount > 0

    async def _raise_if_duplicate(self, slug: str | None, *, exclude_id: int | None = None) -> None:
        if slug and await self.slug_exists(slug, exclude_id=exclude_id):
            raise DuplicateSlugError(slug)

    async def delete(self, entity_id: int) -> bool:
        result = await self._session.execute(
            delete(self.model)
            .where(self.model.id == entity_id)
            .execution_options(synchronize_session=False)
        )
        await self._session.commit()
        return result.rowcount > 0
