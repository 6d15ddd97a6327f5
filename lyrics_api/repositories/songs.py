from __future__ import annotations

from typing import Any, Protocol

from sqlalchemy import Select, func, or_, select, update

from ..domain.pagination import PageParams, PageResult
from ..domain.songs import SongDetail, SongPayload, SongSummary
from ..models.copyright_owner import CopyrightOwnerModel
from ..models.people import ArtistModel, ComposerModel
from ..models.song import SongModel
from ..services.pagination import build_page
from .base import SluggedRepository, like_pattern


class SongsRepository(Protocol):
    async def list_page(
        self, params: PageParams, category: str | None = None
    ) -> PageResult[SongSummary]: ...

    async def get_by_slug(self, slug: str) -> SongDetail | None: ...

    async def get_by_id(self, entity_id: int) -> SongDetail | None: ...

    async def search(self, query: str, limit: int) -> list[SongSummary]: ...

    async def popular(self, limit: int) -> list[SongSummary]: ...

    async def categories(self) -> list[str]: ...

    async def list_by_artist(self, artist_id: int) -> list[SongSummary]: ...

    async def list_by_composer(self, composer_id: int) -> list[SongSummary]: ...

    async def list_by_copyright_owner(self, owner_id: int) -> list[SongSummary]: ...

    async def exists(self, entity_id: int) -> bool: ...

    async def slug_exists(self, slug: str, *, exclude_id: int | None = None) -> bool: ...

    async def create(self, payload: SongPayload, *, slug: str) -> int: ...

    async def update(self, entity_id: int, payload: SongPayload, *, slug: str) -> bool: ...

    async def delete(self, entity_id: int) -> bool: ...

    async def increment_views(self, slug: str) -> bool: ...


_SUMMARY_COLUMNS = (
    SongModel.id,
    SongModel.title,
    SongModel.slug,
    SongModel.category,
    SongModel.views,
    SongModel.created_at,
    SongModel.artist_id,
    SongModel.composer_id,
    SongModel.copyright_owner_id,
    ArtistModel.name.label("artist_name"),
    ArtistModel.slug.label("artist_slug"),
    ComposerModel.name.label("composer_name"),
    ComposerModel.slug.label("composer_slug"),
    CopyrightOwnerModel.name.label("copyright_owner_name"),
    CopyrightOwnerModel.slug.label("copyright_owner_slug"),
)


def _with_credits(*extra_columns: Any) -> Select:
    """SELECT of the song projection joined to its credited names and slugs."""

    return (
        select(*_SUMMARY_COLUMNS, *extra_columns)
        .select_from(SongModel)
        .outerjoin(ArtistModel, SongModel.artist_id == ArtistModel.id)
        .outerjoin(ComposerModel, SongModel.composer_id == ComposerModel.id)
        .outerjoin(CopyrightOwnerModel, SongModel.copyright_owner_id == CopyrightOwnerModel.id)
    )


def _newest_first(stmt: Select) -> Select:
    return stmt.order_by(SongModel.created_at.desc(), SongModel.id.desc())


def _most_viewed_first(stmt: Select) -> Select:
    return stmt.order_by(SongModel.views.desc(), SongModel.id.asc())


class SqlAlchemySongsRepository(SluggedRepository[SongDetail]):
    """Songs backed by the ``songs`` table.

    Every read projects the same denormalized column set, so callers get
    artist/composer/copyright-owner display names without a second query.
    """

    model = SongModel
    row_type = SongDetail

    async def _summaries(self, stmt: Select) -> list[SongSummary]:
        result = await self._session.execute(stmt)
        return [SongSummary.model_validate(dict(row._mapping)) for row in result.all()]

    async def _detail(self, stmt: Select) -> SongDetail | None:
        row = (await self._session.execute(stmt)).first()
        if row is None:
            return None
        return SongDetail.model_validate(dict(row._mapping))

    async def list_page(
        self, params: PageParams, category: str | None = None
    ) -> PageResult[SongSummary]:
        count_stmt = select(func.count()).select_from(SongModel)
        page_stmt = _with_credits()
        if category:
            count_stmt = count_stmt.where(SongModel.category == category)
            page_stmt = page_stmt.where(SongModel.category == category)
        page_stmt = _newest_first(page_stmt).limit(params.limit).offset(params.offset)

        total = (await self._session.execute(count_stmt)).scalar_one()
        items = await self._summaries(page_stmt)
        return build_page(items, total, params)

    async def get_by_slug(self, slug: str) -> SongDetail | None:
        return await self._detail(_with_credits(SongModel.lyrics).where(SongModel.slug == slug))

    async def get_by_id(self, entity_id: int) -> SongDetail | None:
        return await self._detail(_with_credits(SongModel.lyrics).where(SongModel.id == entity_id))

    async def search(self, query: str, limit: int) -> list[SongSummary]:
        pattern = like_pattern(query)
        stmt = _with_credits().where(
            or_(
                SongModel.title.ilike(pattern, escape="\\"),
                ArtistModel.name.ilike(pattern, escape="\\"),
            )
        )
        return await self._summaries(_most_viewed_first(stmt).limit(limit))

    async def popular(self, limit: int) -> list[SongSummary]:
        return await self._summaries(_most_viewed_first(_with_credits()).limit(limit))

    async def categories(self) -> list[str]:
        result = await self._session.execute(
            select(SongModel.category)
            .where(SongModel.category.is_not(None))
            .distinct()
            .order_by(SongModel.category)
        )
        return [category for category in result.scalars().all()]

    async def list_by_artist(self, artist_id: int) -> list[SongSummary]:
        return await self._summaries(_newest_first(_with_credits().where(SongModel.artist_id == artist_id)))

    async def list_by_composer(self, composer_id: int) -> list[SongSummary]:
        return await self._summaries(
            _newest_first(_with_credits().where(SongModel.composer_id == composer_id))
        )

    async def list_by_copyright_owner(self, owner_id: int) -> list[SongSummary]:
        return await self._summaries(
            _newest_first(_with_credits().where(SongModel.copyright_owner_id == owner_id))
        )

    async def create(self, payload: SongPayload, *, slug: str) -> int:
        return await self._insert(payload.model_dump(exclude={"slug"}) | {"slug": slug})

    async def update(self, entity_id: int, payload: SongPayload, *, slug: str) -> bool:
        # views and created_at are not editable; only the increment touches views.
        return await self._update(entity_id, payload.model_dump(exclude={"slug"}) | {"slug": slug})

    async def increment_views(self, slug: str) -> bool:
        result = await self._session.execute(
            update(SongModel)
            .where(SongModel.slug == slug)
            .values(views=SongModel.views + 1)
            .execution_options(synchronize_session=False)
        )
        await self._session.commit()
        return result.rowcount > 0
