from __future__ import annotations

from fastapi import APIRouter, Query, Request

from mycircle.errors import not_found
from mycircle.models import Contact
from mycircle.schemas import ContactCreate, ContactUpdate

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


def _services(request: Request):
    return request.app.state.services


@router.get("")
async def list_contacts(
    request: Request,
    archived: bool | None = None,
    tag_id: int | None = Query(None, gt=0),
    limit: int | None = Query(None, gt=0),
    offset: int | None = Query(None, gt=0),
) -> list[Contact]:
    return _services(request).contacts.list_contacts(
        archived=archived, tag_id=tag_id, limit=limit, offset=offset
    )


@router.post("", status_code=201)
async def create_contact(request: Request, body: ContactCreate) -> Contact:
    return _services(request).contacts.create_contact(
        body.name, body.birthday, body.profile_note, body.tag_ids
    )


@router.get("/{contact_id}")
async def get_contact(request: Request, contact_id: int) -> Contact:
    contact = _services(request).contacts.get_contact(contact_id)
    if contact is None:
        raise not_found("Contact", contact_id)
    return contact


@router.patch("/{contact_id}")
async def update_contact(request: Request, contact_id: int, body: ContactUpdate) -> Contact:
    return _services(request).contacts.update_contact(
        contact_id, body.model_dump(exclude_unset=True)
    )


@router.delete("/{contact_id}")
async def archive_contact(request: Request, contact_id: int) -> Contact:
    return _services(request).contacts.archive_contact(contact_id)


@router.post("/{contact_id}/unarchive")
async def unarchive_contact(request: Request, contact_id: int) -> Contact:
    return _services(request).contacts.unarchive_contact(contact_id)


@router.post("/{contact_id}/tags/{tag_id}")
async def assign_tag(request: Request, contact_id: int, tag_id: int) -> Contact:
    return _services(request).contacts.assign_tag(contact_id, tag_id)


@router.delete("/{contact_id}/tags/{tag_id}")
async def remove_tag(request: Request, contact_id: int, tag_id: int) -> Contact:
    return _services(request).contacts.remove_tag(contact_id, tag_id)
