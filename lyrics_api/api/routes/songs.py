from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...core.config import get_settings
from ...domain.common import MutationResponse
from ...domain.pagination import PageParams
from ...domain.songs import (
    CategoriesResponse,
    PopularResponse,
    SearchResponse,
    SongDetail,
    SongListResponse,
    SongPayload,
    ViewResponse,
)
from ...repositories.base import DuplicateSlugError
from ...repositories.copyright_owners import CopyrightOwnersRepository
from ...repositories.people import PeopleRepository
from ...repositories.rate_limits import RateGate
from ...repositories.songs import SongsRepository
from ...services.pagination import clamp, parse_int
from ...services.validation import sanitize_query
from ..dependencies import (
    categories_cache,
    detail_cache,
    get_artists_repository,
    get_client_id,
    get_composers_repository,
    get_copyright_owners_repository,
    get_page_params,
    get_songs_repository,
    get_view_rate_gate,
    no_store,
    public_cache,
)
from ..guards import (
    duplicate_to_conflict,
    ensure_reference,
    ensure_slug_available,
    not_found,
    reject_unaddressable_ids,
    require_path_slug,
    require_slug,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["songs"], dependencies=[Depends(public_cache)])
admin_router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(no_store), Depends(reject_unaddressable_ids)],
)


def _listing(result) -> SongListResponse:
    return SongListResponse(
        songs=result.items,
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.get("/songs", response_model=SongListResponse)
async def list_songs(
    category: str | None = Query(default=None),
    pagination: PageParams = Depends(get_page_params),
    repo: SongsRepository = Depends(get_songs_repository),
) -> SongListResponse:
    result = await repo.list_page(pagination, category=sanitize_query(category) or None)
    return _listing(result)


@router.get(
    "/song/{slug:path}",
    response_model=SongDetail,
    dependencies=[Depends(detail_cache)],
)
async def get_song(
    slug: str,
    repo: SongsRepository = Depends(get_songs_repository),
) -> SongDetail:
    song = await repo.get_by_slug(require_path_slug(slug))
    if song is None:
        raise not_found("Song")
    return song


@router.get("/search", response_model=SearchResponse)
async def search_songs(
    q: str | None = Query(default=None, description="Title or artist substring"),
    repo: SongsRepository = Depends(get_songs_repository),
) -> SearchResponse:
    query = sanitize_query(q)
    if not query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Search query is required")
    results = await repo.search(query, get_settings().search_limit)
    return SearchResponse(query=query, results=results, count=len(results))


@router.get(
    "/categories",
    response_model=CategoriesResponse,
    dependencies=[Depends(categories_cache)],
)
async def list_categories(
    repo: SongsRepository = Depends(get_songs_repository),
) -> CategoriesResponse:
    return CategoriesResponse(categories=await repo.categories())


@router.get("/popular", response_model=PopularResponse)
async def popular_songs(
    limit: str | None = Query(default=None),
    repo: SongsRepository = Depends(get_songs_repository),
) -> PopularResponse:
    settings = get_settings()
    size = clamp(parse_int(limit, settings.popular_default_limit), 1, settings.popular_max_limit)
    return PopularResponse(songs=await repo.popular(size))


@router.post(
    "/view/{slug:path}",
    response_model=ViewResponse,
    dependencies=[Depends(no_store)],
)
async def record_view(
    slug: str,
    client_id: str = Depends(get_client_id),
    gate: RateGate = Depends(get_view_rate_gate),
    repo: SongsRepository = Depends(get_songs_repository),
) -> ViewResponse:
    slug = require_path_slug(slug)
    if not gate.check_and_record(slug, client_id):
        logger.warning("view.rate_limited", slug=slug, client_id=client_id)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="View already counted recently",
        )
    if not await repo.increment_views(slug):
        raise not_found("Song")
    return ViewResponse(slug=slug)


async def _check_credits(
    payload: SongPayload,
    artists: PeopleRepository,
    composers: PeopleRepository,
    owners: CopyrightOwnersRepository,
) -> None:
    await ensure_reference(artists, payload.artist_id, "artist_id")
    await ensure_reference(composers, payload.composer_id, "composer_id")
    await ensure_reference(owners, payload.copyright_owner_id, "copyright_owner_id")


@admin_router.get("/songs", response_model=SongListResponse)
async def admin_list_songs(
    category: str | None = Query(default=None),
    pagination: PageParams = Depends(get_page_params),
    repo: SongsRepository = Depends(get_songs_repository),
) -> SongListResponse:
    result = await repo.list_page(pagination, category=sanitize_query(category) or None)
    return _listing(result)


@admin_router.post(
    "/songs",
    response_model=MutationResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_song(
    payload: SongPayload,
    repo: SongsRepository = Depends(get_songs_repository),
    artists: PeopleRepository = Depends(get_artists_repository),
    composers: PeopleRepository = Depends(get_composers_repository),
    owners: CopyrightOwnersRepository = Depends(get_copyright_owners_repository),
) -> MutationResponse:
    slug = require_slug(payload.slug, payload.title)
    await _check_credits(payload, artists, composers, owners)
    await ensure_slug_available(repo, slug, "song")
    try:
        song_id = await repo.create(payload, slug=slug)
    except DuplicateSlugError as exc:
        raise duplicate_to_conflict(exc, "song") from exc
    logger.info("song.created", song_id=song_id, slug=slug)
    return MutationResponse(id=song_id, slug=slug)


@admin_router.get("/song/{song_id:int}", response_model=SongDetail)
async def admin_get_song(
    song_id: int,
    repo: SongsRepository = Depends(get_songs_repository),
) -> SongDetail:
    song = await repo.get_by_id(song_id)
    if song is None:
        raise not_found("Song")
    return song


@admin_router.put(
    "/song/{song_id:int}",
    response_model=MutationResponse,
    response_model_exclude_none=True,
)
async def update_song(
    song_id: int,
    payload: SongPayload,
    repo: SongsRepository = Depends(get_songs_repository),
    artists: PeopleRepository = Depends(get_artists_repository),
    composers: PeopleRepository = Depends(get_composers_repository),
    owners: CopyrightOwnersRepository = Depends(get_copyright_owners_repository),
) -> MutationResponse:
    if not await repo.exists(song_id):
        raise not_found("Song")
    slug = require_slug(payload.slug, payload.title)
    await _check_credits(payload, artists, composers, owners)
    await ensure_slug_available(repo, slug, "song", exclude_id=song_id)
    try:
        updated = await repo.update(song_id, payload, slug=slug)
    except DuplicateSlugError as exc:
        raise duplicate_to_conflict(exc, "song", updating=True) from exc
    if not updated:
        raise not_found("Song")
    logger.info("song.updated", song_id=song_id, slug=slug)
    return MutationResponse(id=song_id, slug=slug)


@admin_router.delete(
    "/song/{song_id:int}",
    response_model=MutationResponse,
    response_model_exclude_none=True,
)
async def delete_song(
    song_id: int,
    repo: SongsRepository = Depends(get_songs_repository),
) -> MutationResponse:
    if not await repo.delete(song_id):
        raise not_found("Song")
    logger.info("song.deleted", song_id=song_id)
    return MutationResponse()
