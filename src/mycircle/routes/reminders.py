from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Query, Request

from mycircle.models import Reminder, Snooze
from mycircle.schemas import ReminderCreate, SnoozeCreate

router = APIRouter(prefix="/api", tags=["reminders"])


def _services(request: Request):
    return request.app.state.services


@router.get("/reminders")
async def list_reminders(
    request: Request,
    contact_id: int | None = Query(None, gt=0),
    status: Literal["pending", "done"] | None = None,
    due_before: int | None = Query(None, gt=0),
    include_past: bool = False,
) -> list[Reminder]:
    return _services(request).reminders.list_reminders(
        contact_id=contact_id, status=status, due_before=due_before, include_past=include_past
    )


@router.post("/reminders", status_code=201)
async def create_reminder(request: Request, body: ReminderCreate) -> Reminder:
    return _services(request).reminders.create_reminder(body.contact_id, body.due_date, body.note)


@router.post("/reminders/{reminder_id}/done")
async def mark_reminder_done(request: Request, reminder_id: int) -> Reminder:
    return _services(request).reminders.mark_done(reminder_id)


@router.get("/snoozes", tags=["snoozes"])
async def list_snoozes(request: Request) -> list[Snooze]:
    return _services(request).snoozes.active_snoozes()


@router.post("/snoozes", status_code=201, tags=["snoozes"])
async def snooze_contact(request: Request, body: SnoozeCreate) -> Snooze:
    return _services(request).snoozes.snooze(body.contact_id, body.days)
