from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...domain.common import MutationResponse
from ...domain.pagination import PageParams
from ...domain.reports import (
    ALLOWED_REPORT_STATUSES,
    Report,
    ReportCreate,
    ReportListResponse,
    ReportPayload,
    ReportSnapshot,
    ReportStatus,
    ReportStatusUpdate,
)
from ...repositories.reports import ReportsRepository
from ...repositories.songs import SongsRepository
from ...services.challenge import ChallengeVerifier
from ..dependencies import (
    get_challenge_verifier,
    get_client_id,
    get_page_params,
    get_reports_repository,
    get_songs_repository,
    no_store,
)
from ..guards import not_found, reject_unaddressable_ids, require_human

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["reports"], dependencies=[Depends(no_store)])
admin_router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(no_store), Depends(reject_unaddressable_ids)],
)


async def _snapshot(payload: ReportPayload, songs: SongsRepository) -> ReportSnapshot:
    """Song details as they stand now, or the client's copy if the slug is unknown."""

    if payload.song_slug:
        song = await songs.get_by_slug(payload.song_slug)
        if song is not None:
            return ReportSnapshot(
                song_id=song.id,
                song_slug=song.slug,
                song_title=song.title,
                song_artist=song.artist_name,
            )
    return ReportSnapshot(
        song_slug=payload.song_slug,
        song_title=payload.song_title,
        song_artist=payload.song_artist,
    )


@router.post(
    "/report",
    response_model=MutationResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def submit_report(
    payload: ReportPayload,
    client_id: str = Depends(get_client_id),
    verifier: ChallengeVerifier | None = Depends(get_challenge_verifier),
    reports: ReportsRepository = Depends(get_reports_repository),
    songs: SongsRepository = Depends(get_songs_repository),
) -> MutationResponse:
    await require_human(payload.turnstile_token, verifier, client_id)
    snapshot = await _snapshot(payload, songs)
    report_id = await reports.create(
        ReportCreate(
            **snapshot.model_dump(),
            reporter_name=payload.name,
            reporter_email=payload.email,
            message=payload.message,
        )
    )
    logger.info("report.submitted", report_id=report_id, song_id=snapshot.song_id)
    return MutationResponse(id=report_id)


@admin_router.get("/reports", response_model=ReportListResponse)
async def list_reports(
    status_filter: str | None = Query(default=None, alias="status"),
    pagination: PageParams = Depends(get_page_params),
    reports: ReportsRepository = Depends(get_reports_repository),
) -> ReportListResponse:
    report_status: ReportStatus | None = None
    if status_filter and status_filter.strip():
        try:
            report_status = ReportStatus(status_filter.strip().lower())
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid status. Allowed: {ALLOWED_REPORT_STATUSES}",
            ) from None
    result = await reports.list_page(pagination, status=report_status)
    return ReportListResponse(
        reports=result.items,
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@admin_router.get("/report/{report_id:int}", response_model=Report)
async def get_report(
    report_id: int,
    reports: ReportsRepository = Depends(get_reports_repository),
) -> Report:
    report = await reports.get(report_id)
    if report is None:
        raise not_found("Report")
    return report


@admin_router.put(
    "/report/{report_id:int}",
    response_model=MutationResponse,
    response_model_exclude_none=True,
)
async def update_report_status(
    report_id: int,
    payload: ReportStatusUpdate,
    reports: ReportsRepository = Depends(get_reports_repository),
) -> MutationResponse:
    if not await reports.update_status(report_id, ReportStatus(payload.status)):
        raise not_found("Report")
    logger.info("report.status_changed", report_id=report_id, status=payload.status)
    return MutationResponse(id=report_id)


@admin_router.delete(
    "/report/{report_id:int}",
    response_model=MutationResponse,
    response_model_exclude_none=True,
)
async def delete_report(
    report_id: int,
    reports: ReportsRepository = Depends(get_reports_repository),
) -> MutationResponse:
    if not await reports.delete(report_id):
        raise not_found("Report")
    logger.info("report.deleted", report_id=report_id)
    return MutationResponse()
