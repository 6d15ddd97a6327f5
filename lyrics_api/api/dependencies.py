from __future__ import annotations

import structlog
from fastapi import Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import get_settings
from ..db import get_session
from ..domain.pagination import PageParams
from ..repositories.contacts import ContactsRepository, SqlAlchemyContactsRepository
from ..repositories.copyright_owners import (
    CopyrightOwnersRepository,
    SqlAlchemyCopyrightOwnersRepository,
)
from ..repositories.people import (
    PeopleRepository,
    SqlAlchemyArtistsRepository,
    SqlAlchemyComposersRepository,
)
from ..repositories.rate_limits import InMemoryRateGate, RateGate
from ..repositories.reports import ReportsRepository, SqlAlchemyReportsRepository
from ..repositories.songs import SongsRepository, SqlAlchemySongsRepository
from ..services.assets import StaticAssetStore
from ..services.challenge import (
    ChallengeConfigError,
    ChallengeVerifier,
    build_verifier_from_settings,
)
from ..services.pagination import build_page_params
from .responses import NO_STORE

logger = structlog.get_logger(__name__)

_view_rate_gate: RateGate | None = None
_challenge_verifier: ChallengeVerifier | None = None
_asset_store: StaticAssetStore | None = None


async def get_songs_repository(
    session: AsyncSession = Depends(get_session),
) -> SongsRepository:
    return SqlAlchemySongsRepository(session)


async def get_artists_repository(
    session: AsyncSession = Depends(get_session),
) -> PeopleRepository:
    return SqlAlchemyArtistsRepository(session)


async def get_composers_repository(
    session: AsyncSession = Depends(get_session),
) -> PeopleRepository:
    return SqlAlchemyComposersRepository(session)


async def get_copyright_owners_repository(
    session: AsyncSession = Depends(get_session),
) -> CopyrightOwnersRepository:
    return SqlAlchemyCopyrightOwnersRepository(session)


async def get_reports_repository(
    session: AsyncSession = Depends(get_session),
) -> ReportsRepository:
    return SqlAlchemyReportsRepository(session)


async def get_contacts_repository(
    session: AsyncSession = Depends(get_session),
) -> ContactsRepository:
    return SqlAlchemyContactsRepository(session)


def get_page_params(
    page: str | None = Query(default=None, description="1-based page number"),
    limit: str | None = Query(default=None, description="Rows per page"),
) -> PageParams:
    """Out-of-range or non-numeric values are clamped rather than rejected."""

    settings = get_settings()
    return build_page_params(
        page,
        limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )


def get_view_rate_gate() -> RateGate:
    global _view_rate_gate
    if _view_rate_gate is None:
        settings = get_settings()
        _view_rate_gate = InMemoryRateGate(
            window_seconds=settings.view_rate_window_seconds,
            max_entries=settings.view_rate_max_entries,
        )
    return _view_rate_gate


def get_challenge_verifier() -> ChallengeVerifier | None:
    """Return the shared verifier, or ``None`` when no secret is configured."""

    global _challenge_verifier
    if _challenge_verifier is None:
        try:
            _challenge_verifier = build_verifier_from_settings()
        except ChallengeConfigError:
            logger.error("challenge.not_configured")
            return None
    return _challenge_verifier


def get_client_id(request: Request) -> str:
    """Client identity as reported by the trusted proxy header."""

    header = get_settings().client_ip_header
    return request.headers.get(header, "").strip() or "unknown"


def public_cache(response: Response) -> None:
    response.headers["Cache-Control"] = f"public, max-age={get_settings().cache_default_max_age}"


def detail_cache(response: Response) -> None:
    response.headers["Cache-Control"] = f"public, max-age={get_settings().cache_detail_max_age}"


def categories_cache(response: Response) -> None:
    response.headers["Cache-Control"] = f"public, max-age={get_settings().cache_categories_max_age}"


def no_store(response: Response) -> None:
    response.headers["Cache-Control"] = NO_STORE


def get_asset_store() -> StaticAssetStore:
    global _asset_store
    if _asset_store is None:
        settings = get_settings()
        _asset_store = StaticAssetStore(
            settings.static_root,
            not_found_page=settings.static_not_found_page,
            cache_max_age=settings.static_cache_max_age,
        )
    return _asset_store
