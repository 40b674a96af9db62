from __future__ import annotations

from fastapi import APIRouter, Request, Response

from mycircle.models import Tag
from mycircle.schemas import TagCreate, TagUpdate

router = APIRouter(prefix="/api/tags", tags=["tags"])


def _services(request: Request):
    return request.app.state.services


@router.get("")
async def list_tags(request: Request) -> list[Tag]:
    return _services(request).tags.list_tags()


@router.post("", status_code=201)
async def create_tag(request: Request, body: TagCreate) -> Tag:
    return _services(request).tags.create_tag(
        body.name, body.min_interval_days, body.max_interval_days, body.priority
    )


@router.patch("/{tag_id}")
async def update_tag(request: Request, tag_id: int, body: TagUpdate) -> Tag:
    return _services(request).tags.update_tag(tag_id, body.model_dump(exclude_unset=True))


@router.delete("/{tag_id}", status_code=204)
async def delete_tag(request: Request, tag_id: int) -> Response:
    _services(request).tags.delete_tag(tag_id)
    return Response(status_code=204)
