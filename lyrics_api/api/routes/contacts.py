from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, status

from ...domain.common import MutationResponse
from ...domain.contacts import (
    DEFAULT_SUBJECT,
    ContactListResponse,
    ContactMessage,
    ContactMessageCreate,
    ContactPayload,
)
from ...domain.pagination import PageParams
from ...repositories.contacts import ContactsRepository
from ...services.challenge import ChallengeVerifier
from ..dependencies import (
    get_challenge_verifier,
    get_client_id,
    get_contacts_repository,
    get_page_params,
    no_store,
)
from ..guards import not_found, reject_unaddressable_ids, require_human

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["contacts"], dependencies=[Depends(no_store)])
admin_router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(no_store), Depends(reject_unaddressable_ids)],
)


@router.post(
    "/contact",
    response_model=MutationResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def submit_contact(
    payload: ContactPayload,
    client_id: str = Depends(get_client_id),
    verifier: ChallengeVerifier | None = Depends(get_challenge_verifier),
    contacts: ContactsRepository = Depends(get_contacts_repository),
) -> MutationResponse:
    await require_human(payload.turnstile_token, verifier, client_id)
    message_id = await contacts.create(
        ContactMessageCreate(
            name=payload.name,
            email=payload.email,
            subject=payload.subject or DEFAULT_SUBJECT,
            message=payload.message,
        )
    )
    logger.info("contact.submitted", message_id=message_id)
    return MutationResponse(id=message_id)


@admin_router.get("/contacts", response_model=ContactListResponse)
async def list_contacts(
    pagination: PageParams = Depends(get_page_params),
    contacts: ContactsRepository = Depends(get_contacts_repository),
) -> ContactListResponse:
    result = await contacts.list_page(pagination)
    return ContactListResponse(
        contacts=result.items,
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )


@admin_router.get("/contact/{message_id:int}", response_model=ContactMessage)
async def get_contact(
    message_id: int,
    contacts: ContactsRepository = Depends(get_contacts_repository),
) -> ContactMessage:
    message = await contacts.get(message_id)
    if message is None:
        raise not_found("Message")
    return message


@admin_router.delete(
    "/contact/{message_id:int}",
    response_model=MutationResponse,
    response_model_exclude_none=True,
)
async def delete_contact(
    message_id: int,
    contacts: ContactsRepository = Depends(get_contacts_repository),
) -> MutationResponse:
    if not await contacts.delete(message_id):
        raise not_found("Message")
    logger.info("contact.deleted", message_id=message_id)
    return MutationResponse()
