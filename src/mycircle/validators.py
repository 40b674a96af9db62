from __future__ import annotations

import re

from mycircle.errors import validation_error
from mycircle.models import INTERACTION_WEIGHTS

_BIRTHDAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

NAME_MAX = 200
PROFILE_NOTE_MAX = 5000
TAG_NAME_MAX = 100
INTERACTION_NOTES_MAX = 2000
REMINDER_NOTE_MAX = 1000


def validate_name(name: str | None) -> None:
    if not name or not name.strip():
        raise validation_error("Name is required")
    if len(name) > NAME_MAX:
        raise validation_error(f"Name must be {NAME_MAX} characters or less")


def validate_birthday(birthday: str | None) -> None:
    if birthday and not _BIRTHDAY_RE.match(birthday):
        raise validation_error("Birthday must be in YYYY-MM-DD format")


def validate_profile_note(note: str | None) -> None:
    if note and len(note) > PROFILE_NOTE_MAX:
        raise validation_error(f"Profile note must be {PROFILE_NOTE_MAX} characters or less")


def validate_tag_name(name: str | None) -> None:
    if not name or not name.strip():
        raise validation_error("Tag name is required")
    if len(name) > TAG_NAME_MAX:
        raise validation_error(f"Tag name must be {TAG_NAME_MAX} characters or less")


def validate_interval_days(min_days: int, max_days: int) -> None:
    if min_days < 1:
        raise validation_error("Minimum interval days must be at least 1")
    if max_days < min_days:
        raise validation_error(
            "Maximum interval days must be greater than or equal to minimum"
        )


def validate_priority(priority: int) -> None:
    if priority < 1:
        raise validation_error("Priority must be at least 1")


def validate_interaction_type(type_: str) -> None:
    if type_ not in INTERACTION_WEIGHTS:
        raise validation_error("Interaction type must be text, call, or hangout")


def validate_notes(notes: str | None, max_length: int) -> None:
    if notes and len(notes) > max_length:
        raise validation_error(f"Notes must be {max_length} characters or less")


def interaction_weight(type_: str) -> int:
    """Weight of an interaction type: text=1, call=3, hangout=6."""
    try:
        return INTERACTION_WEIGHTS[type_]
    except KeyError:
        raise validation_error("Invalid interaction type") from None
