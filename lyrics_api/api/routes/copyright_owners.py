from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Query, status

from ...domain.common import MutationResponse
from ...domain.copyright_owners import (
    CopyrightOwner,
    CopyrightOwnerDetail,
    CopyrightOwnerListResponse,
    CopyrightOwnerPayload,
)
from ...domain.pagination import PageParams
from ...repositories.base import DuplicateSlugError
from ...repositories.copyright_owners import CopyrightOwnersRepository
from ...repositories.songs import SongsRepository
from ...services.validation import sanitize_query
from ..dependencies import (
    detail_cache,
    get_copyright_owners_repository,
    get_page_params,
    get_songs_repository,
    no_store,
    public_cache,
)
from ..guards import (
    duplicate_to_conflict,
    ensure_slug_available,
    not_found,
    reject_unaddressable_ids,
    require_path_slug,
    require_slug,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["copyright-owners"], dependencies=[Depends(public_cache)])
admin_router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(no_store), Depends(reject_unaddressable_ids)],
)

LABEL = "copyright owner"


async def _list(
    repo: CopyrightOwnersRepository, pagination: PageParams, q: str | None
) -> CopyrightOwnerListResponse:
    result = await repo.list_page(pagination, query=sanitize_query(q) or None)
    return CopyrightOwnerListResponse(
        copyright_owners=result.items,
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@router.get("/copyright-owners", response_model=CopyrightOwnerListResponse)
async def list_copyright_owners(
    q: str | None = Query(default=None, description="Name substring"),
    pagination: PageParams = Depends(get_page_params),
    repo: CopyrightOwnersRepository = Depends(get_copyright_owners_repository),
) -> CopyrightOwnerListResponse:
    return await _list(repo, pagination, q)


@router.get(
    "/copyright-owner/{slug:path}",
    response_model=CopyrightOwnerDetail,
    dependencies=[Depends(detail_cache)],
)
async def get_copyright_owner(
    slug: str,
    repo: CopyrightOwnersRepository = Depends(get_copyright_owners_repository),
    songs: SongsRepository = Depends(get_songs_repository),
) -> CopyrightOwnerDetail:
    owner = await repo.get_by_slug(require_path_slug(slug))
    if owner is None:
        raise not_found("Copyright owner")
    return CopyrightOwnerDetail(
        **owner.model_dump(),
        songs=await songs.list_by_copyright_owner(owner.id),
    )


@admin_router.get("/copyright-owners", response_model=CopyrightOwnerListResponse)
async def admin_list_copyright_owners(
    q: str | None = Query(default=None),
    pagination: PageParams = Depends(get_page_params),
    repo: CopyrightOwnersRepository = Depends(get_copyright_owners_repository),
) -> CopyrightOwnerListResponse:
    return await _list(repo, pagination, q)


@admin_router.post(
    "/copyright-owners",
    response_model=MutationResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_copyright_owner(
    payload: CopyrightOwnerPayload,
    repo: CopyrightOwnersRepository = Depends(get_copyright_owners_repository),
) -> MutationResponse:
    slug = require_slug(payload.slug, payload.name)
    await ensure_slug_available(repo, slug, LABEL)
    try:
        owner_id = await repo.create(payload, slug=slug)
    except DuplicateSlugError as exc:
        raise duplicate_to_conflict(exc, LABEL) from exc
    logger.info("copyright_owner.created", owner_id=owner_id, slug=slug)
    return MutationResponse(id=owner_id, slug=slug)


@admin_router.get("/copyright-owner/{owner_id:int}", response_model=CopyrightOwner)
async def admin_get_copyright_owner(
    owner_id: int,
    repo: CopyrightOwnersRepository = Depends(get_copyright_owners_repository),
) -> CopyrightOwner:
    owner = await repo.get_by_id(owner_id)
    if owner is None:
        raise not_found("Copyright owner")
    return owner


@admin_router.put(
    "/copyright-owner/{owner_id:int}",
    response_model=MutationResponse,
    response_model_exclude_none=True,
)
async def update_copyright_owner(
    owner_id: int,
    payload: CopyrightOwnerPayload,
    repo: CopyrightOwnersRepository = Depends(get_copyright_owners_repository),
) -> MutationResponse:
    if not await repo.exists(owner_id):
        raise not_found("Copyright owner")
    slug = require_slug(payload.slug, payload.name)
    await ensure_slug_available(repo, slug, LABEL, exclude_id=owner_id)
    try:
        updated = await repo.update(owner_id, payload, slug=slug)
    except DuplicateSlugError as exc:
        raise duplicate_to_conflict(exc, LABEL, updating=True) from exc
    if not updated:
        raise not_found("Copyright owner")
    logger.info("copyright_owner.updated", owner_id=owner_id, slug=slug)
    return MutationResponse(id=owner_id, slug=slug)


@admin_router.delete(
    "/copyright-owner/{owner_id:int}",
    response_model=MutationResponse,
    response_model_exclude_none=True,
)
async def delete_copyright_owner(
    owner_id: int,
    repo: CopyrightOwnersRepository = Depends(get_copyright_owners_repository),
) -> MutationResponse:
    if not await repo.delete(owner_id):
        raise not_found("Copyright owner")
    logger.info("copyright_owner.deleted", owner_id=owner_id)
    return MutationResponse()
