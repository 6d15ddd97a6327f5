from __future__ import annotations

from typing import Protocol

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.pagination import PageParams, PageResult
from ..domain.reports import Report, ReportCreate, ReportStatus
from ..models.report import ReportModel
from ..services.pagination import build_page


class ReportsRepository(Protocol):
    async def create(self, payload: ReportCreate) -> int: ...

    async def list_page(
        self, params: PageParams, status: ReportStatus | None = None
    ) -> PageResult[Report]: ...

    async def get(self, report_id: int) -> Report | None: ...

    async def update_status(self, report_id: int, status: ReportStatus) -> bool: ...

    async def delete(self, report_id: int) -> bool: ...


class SqlAlchemyReportsRepository:
    """Moderation reports, newest first."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, payload: ReportCreate) -> int:
        result = await self._session.execute(
            insert(ReportModel)
            .values(**payload.model_dump(), status=ReportStatus.PENDING.value)
            .returning(ReportModel.id)
        )
        report_id = result.scalar_one()
        await self._session.commit()
        return report_id

    async def list_page(
        self, params: PageParams, status: ReportStatus | None = None
    ) -> PageResult[Report]:
        count_stmt = select(func.count()).select_from(ReportModel)
        page_stmt = select(ReportModel).execution_options(populate_existing=True)
        if status is not None:
            count_stmt = count_stmt.where(ReportModel.status == status.value)
            page_stmt = page_stmt.where(ReportModel.status == status.value)
        page_stmt = (
            page_stmt.order_by(ReportModel.created_at.desc(), ReportModel.id.desc())
            .limit(params.limit)
            .offset(params.offset)
        )
        total = (await self._session.execute(count_stmt)).scalar_one()
        result = await self._session.execute(page_stmt)
        items = [Report.model_validate(row) for row in result.scalars().all()]
        return build_page(items, total, params)

    async def get(self, report_id: int) -> Report | None:
        result = await self._session.execute(
            select(ReportModel)
            .where(ReportModel.id == report_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        if not model:
            return None
        return Report.model_validate(model)

    async def update_status(self, report_id: int, status: ReportStatus) -> bool:
        result = await self._session.execute(
            update(ReportModel)
            .where(ReportModel.id == report_id)
            .values(status=status.value)
            .execution_options(synchronize_session=False)
        )
        await self._session.commit()
        return result.rowcount > 0

    async def delete(self, report_id: int) -> bool:
        result = await self._session.execute(
            delete(ReportModel)
            .where(ReportModel.id == report_id)
            .execution_options(synchronize_session=False)
        )
        await self._session.commit()
        return result.rowcount > 0
