from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Query, Request, Response

from mycircle.errors import not_found
from mycircle.models import Interaction
from mycircle.schemas import InteractionCreate, InteractionUpdate

router = APIRouter(prefix="/api/interactions", tags=["interactions"])


def _services(request: Request):
    return request.app.state.services


@router.get("")
async def list_interactions(
    request: Request,
    contact_id: int | None = Query(None, gt=0),
    order_by: Literal["timestamp", "created_at"] = "timestamp",
    order: Literal["asc", "desc"] = "desc",
    limit: int | None = Query(None, gt=0),
    offset: int | None = Query(None, gt=0),
) -> list[Interaction]:
    return _services(request).interactions.list_interactions(
        contact_id=contact_id, order_by=order_by, order=order, limit=limit, offset=offset
    )


@router.post("", status_code=201)
async def log_interaction(request: Request, body: InteractionCreate) -> Interaction:
    return _services(request).interactions.log_interaction(
        body.contact_id, body.type, body.timestamp, body.notes
    )


@router.get("/{interaction_id}")
async def get_interaction(request: Request, interaction_id: int) -> Interaction:
    interaction = _services(request).interactions.get_interaction(interaction_id)
    if interaction is None:
        raise not_found("Interaction", interaction_id)
    return interaction


@router.patch("/{interaction_id}")
async def update_interaction(
    request: Request, interaction_id: int, body: InteractionUpdate
) -> Interaction:
    return _services(request).interactions.update_interaction(
        interaction_id, body.model_dump(exclude_unset=True)
    )


@router.delete("/{interaction_id}", status_code=204)
async def delete_interaction(request: Request, interaction_id: int) -> Response:
    _services(request).interactions.delete_interaction(interaction_id)
    return Response(status_code=204)
