from __future__ import annotations

from fastapi import APIRouter, Query, Request

from mycircle.models import HealthScore, Recommendation
from mycircle.schemas import RefreshRequest

router = APIRouter(prefix="/api", tags=["recommendations"])


def _services(request: Request):
    return request.app.state.services


@router.get("/health/{contact_id}", tags=["health"])
async def contact_health(request: Request, contact_id: int) -> HealthScore:
    return _services(request).health.health(contact_id)


@router.get("/recommendations")
async def list_recommendations(
    request: Request,
    limit: int | None = Query(None, gt=0),
    exclude: list[int] = Query([]),
) -> list[Recommendation]:
    if limit is None:
        limit = request.app.state.settings.recommendation_limit
    return _services(request).recommendations.recommend(limit=limit, exclude_contact_ids=exclude)


@router.post("/recommendations/refresh")
async def refresh_recommendations(request: Request, body: RefreshRequest) -> list[Recommendation]:
    return _services(request).recommendations.refresh(body.exclude_contact_ids)
