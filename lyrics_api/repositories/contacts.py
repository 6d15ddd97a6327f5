from __future__ import annotations

from typing import Protocol

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.contacts import ContactMessage, ContactMessageCreate
from ..domain.pagination import PageParams, PageResult
from ..models.contact import ContactMessageModel
from ..services.pagination import build_page


class ContactsRepository(Protocol):
    async def create(self, payload: ContactMessageCreate) -> int: ...

    async def list_page(self, params: PageParams) -> PageResult[ContactMessage]: ...

    async def get(self, message_id: int) -> ContactMessage | None: ...

    async def delete(self, message_id: int) -> bool: ...


class SqlAlchemyContactsRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, payload: ContactMessageCreate) -> int:
        result = await self._session.execute(
            insert(ContactMessageModel).values(**payload.model_dump()).returning(ContactMessageModel.id)
        )
        message_id = result.scalar_one()
        await self._session.commit()
        return message_id

    async def list_page(self, params: PageParams) -> PageResult[ContactMessage]:
        total = (
            await self._session.execute(select(func.count()).select_from(ContactMessageModel))
        ).scalar_one()
        result = await self._session.execute(
            select(ContactMessageModel)
            .order_by(ContactMessageModel.created_at.desc(), ContactMessageModel.id.desc())
            .limit(params.limit)
            .offset(params.offset)
        )
        items = [ContactMessage.model_validate(row) for row in result.scalars().all()]
        return build_page(items, total, params)

    async def get(self, message_id: int) -> ContactMessage | None:
        result = await self._session.execute(
            select(ContactMessageModel).where(ContactMessageModel.id == message_id)
        )
        model = result.scalar_one_or_none()
        if not model:
            return None
        return ContactMessage.model_validate(model)

    async def delete(self, message_id: int) -> bool:
        result = await self._session.execute(
            delete(ContactMessageModel)
            .where(ContactMessageModel.id == message_id)
            .execution_options(synchronize_session=False)
        )
        await self._session.commit()
        return result.rowcount > 0
