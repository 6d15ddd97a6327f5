"""Checks shared by the mutating handlers, raising ``HTTPException`` on failure."""

from __future__ import annotations

from typing import Protocol

import structlog
from fastapi import HTTPException, Request, status

from ..domain.common import MAX_ROW_ID
from ..repositories.base import DuplicateSlugError
from ..services.challenge import ChallengeServiceError, ChallengeVerifier
from ..services.slug import slug_service

logger = structlog.get_logger(__name__)


class SlugProbe(Protocol):
    async def slug_exists(self, slug: str, *, exclude_id: int | None = None) -> bool: ...


class ExistenceProbe(Protocol):
    async def exists(self, entity_id: int) -> bool: ...


def require_slug(explicit: str | None, fallback_text: str) -> str:
    slug = slug_service.resolve_slug(explicit, fallback_text)
    if not slug:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not derive a slug; provide one explicitly",
        )
    return slug


def require_path_slug(raw: str) -> str:
    slug = raw.strip().strip("/")
    if not slug:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Slug is required")
    return slug


def slug_conflict(label: str, *, updating: bool = False) -> HTTPException:
    if updating:
        qualifier = "A different"
    else:
        qualifier = "An" if label[:1].lower() in "aeiou" else "A"
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"{qualifier} {label} with this slug already exists",
    )


async def ensure_slug_available(
    repo: SlugProbe,
    slug: str,
    label: str,
    *,
    exclude_id: int | None = None,
) -> None:
    if await repo.slug_exists(slug, exclude_id=exclude_id):
        raise slug_conflict(label, updating=exclude_id is not None)


async def ensure_reference(repo: ExistenceProbe, entity_id: int | None, field: str) -> None:
    """Reject ids that would leave a dangling foreign key."""

    if entity_id is not None and not await repo.exists(entity_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown {field}")


def duplicate_to_conflict(exc: DuplicateSlugError, label: str, *, updating: bool = False) -> HTTPException:
    # Lost the race between the probe and the write.
    logger.info("slug.conflict_on_write", slug=exc.slug, entity=label)
    return slug_conflict(label, updating=updating)


def not_found(label: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")


def reject_unaddressable_ids(request: Request) -> None:
    """404 for numeric path ids no row can have, before any query binds them."""

    for value in request.path_params.values():
        if isinstance(value, int) and value > MAX_ROW_ID:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")


async def require_human(
    token: str | None,
    verifier: ChallengeVerifier | None,
    client_id: str,
) -> None:
    """Verify a bot-challenge token or raise the matching client/server error."""

    if not token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Bot verification token is required",
        )
    if verifier is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Bot verification is not configured",
        )
    try:
        passed = await verifier.verify(token, client_id)
    except ChallengeServiceError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Verification service unavailable",
        ) from exc
    if not passed:
        logger.warning("challenge.rejected", client_id=client_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Bot verification failed")
