from __future__ import annotations

from dataclasses import dataclass, field

INTERACTION_WEIGHTS = {"text": 1, "call": 3, "hangout": 6}


@dataclass
class Tag:
    id: int = 0
    name: str = ""
    min_interval_days: int = 0
    max_interval_days: int = 0
    priority: int = 0
    is_default: bool = False
    created_at: int = 0


@dataclass
class Contact:
    id: int = 0
    name: str = ""
    birthday: str | None = None  # YYYY-MM-DD
    profile_note: str | None = None
    archived: bool = False
    created_at: int = 0
    updated_at: int = 0
    tags: list[Tag] = field(default_factory=list)


@dataclass
class Interaction:
    id: int = 0
    contact_id: int = 0
    type: str = ""  # "text", "call" or "hangout"
    weight: int = 0
    timestamp: int = 0
    notes: str | None = None
    created_at: int = 0
    updated_at: int = 0


@dataclass
class Reminder:
    id: int = 0
    contact_id: int = 0
    due_date: int = 0
    status: str = "pending"  # "pending" or "done"
    note: str | None = None
    created_at: int = 0
    updated_at: int = 0


@dataclass
class Snooze:
    id: int = 0
    contact_id: int = 0
    snoozed_until: int = 0
    created_at: int = 0


@dataclass
class HealthScore:
    contact_id: int = 0
    score: float = 0.0
    status: str = "red"  # "green", "yellow" or "red"
    last_interaction_timestamp: int | None = None
    expected_interval_days: int = 0


@dataclass
class Recommendation:
    contact_id: int = 0
    contact: Contact = field(default_factory=Contact)
    reason: str = ""
    # only meaningful relative to other entries from the same call
    priority: float = 0
    health_status: str = "red"
    is_reminder: bool = False
