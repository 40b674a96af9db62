"""Request bodies for the JSON API.

Only shape and basic types are checked here; length limits and business rules
are enforced by the services so the CLI gets the same checks.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

InteractionType = Literal["text", "call", "hangout"]


class ContactCreate(BaseModel):
    name: str
    birthday: str | None = None
    profile_note: str | None = None
    tag_ids: list[int] = Field(default_factory=list)


class ContactUpdate(BaseModel):
    name: str | None = None
    birthday: str | None = None
    profile_note: str | None = None


class TagCreate(BaseModel):
    name: str
    min_interval_days: int
    max_interval_days: int
    priority: int


class TagUpdate(BaseModel):
    name: str | None = None
    min_interval_days: int | None = None
    max_interval_days: int | None = None
    priority: int | None = None


class InteractionCreate(BaseModel):
    contact_id: int = Field(gt=0)
    type: InteractionType
    timestamp: int
    notes: str | None = None


class InteractionUpdate(BaseModel):
    type: InteractionType | None = None
    timestamp: int | None = None
    notes: str | None = None


class ReminderCreate(BaseModel):
    contact_id: int = Field(gt=0)
    due_date: int
    note: str | None = None


class SnoozeCreate(BaseModel):
    contact_id: int = Field(gt=0)
    days: int = Field(gt=0)


class RefreshRequest(BaseModel):
    exclude_contact_ids: list[int] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
