"""Artist and composer routes.

Both entity types share a column set and route layout, so one factory builds
the public and admin routers for each.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import structlog
from fastapi import APIRouter, Depends, Query, status

from ...domain.common import MutationResponse
from ...domain.pagination import PageParams, PaginatedEnvelope
from ...domain.people import (
    ArtistListResponse,
    ComposerListResponse,
    Person,
    PersonDetail,
    PersonPayload,
)
from ...repositories.base import DuplicateSlugError
from ...repositories.people import PeopleRepository
from ...repositories.songs import SongsRepository
from ...services.validation import sanitize_query
from ..dependencies import (
    detail_cache,
    get_artists_repository,
    get_composers_repository,
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


@dataclass(frozen=True)
class PeopleResource:
    singular: str
    plural: str
    label: str
    list_response: type[PaginatedEnvelope]
    repository: Callable[..., Any]
    songs_for: Callable[[SongsRepository, int], Any]


ARTISTS = PeopleResource(
    singular="artist",
    plural="artists",
    label="Artist",
    list_response=ArtistListResponse,
    repository=get_artists_repository,
    songs_for=lambda songs, person_id: songs.list_by_artist(person_id),
)

COMPOSERS = PeopleResource(
    singular="composer",
    plural="composers",
    label="Composer",
    list_response=ComposerListResponse,
    repository=get_composers_repository,
    songs_for=lambda songs, person_id: songs.list_by_composer(person_id),
)


def build_people_routers(resource: PeopleResource) -> tuple[APIRouter, APIRouter]:
    """Return ``(public_router, admin_router)`` for one people resource."""

    router = APIRouter(tags=[resource.plural], dependencies=[Depends(public_cache)])
    admin_router = APIRouter(
        prefix="/admin",
        tags=["admin"],
        dependencies=[Depends(no_store), Depends(reject_unaddressable_ids)],
    )
    kind = resource.singular

    async def _list(repo: PeopleRepository, pagination: PageParams, q: str | None):
        result = await repo.list_page(pagination, query=sanitize_query(q) or None)
        return resource.list_response(
            **{resource.plural: result.items},
            total=result.total,
            page=result.page,
            total_pages=result.total_pages,
        )

    @router.get(f"/{resource.plural}", response_model=resource.list_response)
    async def list_people(
        q: str | None = Query(default=None, description="Name substring"),
        pagination: PageParams = Depends(get_page_params),
        repo: PeopleRepository = Depends(resource.repository),
    ):
        return await _list(repo, pagination, q)

    @router.get(
        f"/{kind}/{{slug:path}}",
        response_model=PersonDetail,
        dependencies=[Depends(detail_cache)],
    )
    async def get_person(
        slug: str,
        repo: PeopleRepository = Depends(resource.repository),
        songs: SongsRepository = Depends(get_songs_repository),
    ) -> PersonDetail:
        person = await repo.get_by_slug(require_path_slug(slug))
        if person is None:
            raise not_found(resource.label)
        return PersonDetail(**person.model_dump(), songs=await resource.songs_for(songs, person.id))

    @admin_router.get(f"/{resource.plural}", response_model=resource.list_response)
    async def admin_list_people(
        q: str | None = Query(default=None),
        pagination: PageParams = Depends(get_page_params),
        repo: PeopleRepository = Depends(resource.repository),
    ):
        return await _list(repo, pagination, q)

    @admin_router.post(
        f"/{resource.plural}",
        response_model=MutationResponse,
        response_model_exclude_none=True,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_person(
        payload: PersonPayload,
        repo: PeopleRepository = Depends(resource.repository),
    ) -> MutationResponse:
        slug = require_slug(payload.slug, payload.name)
        await ensure_slug_available(repo, slug, kind)
        try:
            person_id = await repo.create(payload, slug=slug)
        except DuplicateSlugError as exc:
            raise duplicate_to_conflict(exc, kind) from exc
        logger.info(f"{kind}.created", person_id=person_id, slug=slug)
        return MutationResponse(id=person_id, slug=slug)

    @admin_router.get(f"/{kind}/{{person_id:int}}", response_model=Person)
    async def admin_get_person(
        person_id: int,
        repo: PeopleRepository = Depends(resource.repository),
    ) -> Person:
        person = await repo.get_by_id(person_id)
        if person is None:
            raise not_found(resource.label)
        return person

    @admin_router.put(
        f"/{kind}/{{person_id:int}}",
        response_model=MutationResponse,
        response_model_exclude_none=True,
    )
    async def update_person(
        person_id: int,
        payload: PersonPayload,
        repo: PeopleRepository = Depends(resource.repository),
    ) -> MutationResponse:
        if not await repo.exists(person_id):
            raise not_found(resource.label)
        slug = require_slug(payload.slug, payload.name)
        await ensure_slug_available(repo, slug, kind, exclude_id=person_id)
        try:
            updated = await repo.update(person_id, payload, slug=slug)
        except DuplicateSlugError as exc:
            raise duplicate_to_conflict(exc, kind, updating=True) from exc
        if not updated:
            raise not_found(resource.label)
        logger.info(f"{kind}.updated", person_id=person_id, slug=slug)
        return MutationResponse(id=person_id, slug=slug)

    @admin_router.delete(
        f"/{kind}/{{person_id:int}}",
        response_model=MutationResponse,
        response_model_exclude_none=True,
    )
    async def delete_person(
        person_id: int,
        repo: PeopleRepository = Depends(resource.repository),
    ) -> MutationResponse:
        # Songs crediting this person keep existing with the reference cleared.
        if not await repo.delete(person_id):
            raise not_found(resource.label)
        logger.info(f"{kind}.deleted", person_id=person_id)
        return MutationResponse()

    return router, admin_router


artists_router, artists_admin_router = build_people_routers(ARTISTS)
composers_router, composers_admin_router = build_people_routers(COMPOSERS)
