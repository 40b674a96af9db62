"""Rank who to contact next.

Overdue reminders come first, then contacts whose health has faded to yellow
or red. The ranker never touches storage: callers pass in the contacts,
the overdue reminders and lookups for snooze state and health.
"""

from __future__ import annotations

import logging
from typing import Callable, Collection, Iterable

from mycircle.health import STATUS_ORDER, days_between
from mycircle.models import Contact, HealthScore, Recommendation, Reminder

logger = logging.getLogger(__name__)

REMINDER_PRIORITY_BASE = 1000
UNTAGGED_GRACE_DAYS = 365
REFRESH_LIMIT = 3


def _reminder_reason(contact: Contact, days_overdue: int) -> str:
    if days_overdue > 0:
        unit = "day" if days_overdue == 1 else "days"
        return (
            f"You have a reminder to reach out to {contact.name} "
            f"that's {days_overdue} {unit} overdue."
        )
    return f"You have a reminder to reach out to {contact.name} today."


def _health_reason(contact: Contact, status: str) -> str:
    if status == "red":
        if not contact.tags:
            return (
                f"It's been a while since you added {contact.name}. "
                "Consider reaching out with a quick message!"
            )
        return (
            f"It's been a while since you last connected with {contact.name}. "
            "They'd love to hear from you!"
        )
    if status == "yellow":
        return f"{contact.name} could use some attention soon. A quick check-in would be great!"
    return f"Keep in touch with {contact.name}."


def generate_recommendations(
    contacts: Iterable[Contact],
    reminders: Iterable[Reminder],
    is_snoozed: Callable[[int], bool],
    health_of: Callable[[int], HealthScore],
    now: int,
    limit: int = 3,
    exclude_contact_ids: Collection[int] = (),
) -> list[Recommendation]:
    """Build at most ``limit`` recommendations, most urgent first.

    ``contacts`` are the active contacts. ``reminders`` are the pending
    reminders due at or before ``now``; reminders for contacts outside
    ``contacts`` are ignored. A contact is recommended at most once, by its
    most overdue reminder if it has one.
    """
    excluded = set(exclude_contact_ids)
    contacts = list(contacts)
    by_id = {c.id: c for c in contacts}
    reminders = [r for r in reminders if r.status == "pending" and r.due_date <= now]
    reminder_contact_ids = {r.contact_id for r in reminders}

    recommendations: list[Recommendation] = []
    covered: set[int] = set()

    for reminder in sorted(reminders, key=lambda r: (r.due_date, r.id)):
        cid = reminder.contact_id
        if cid in excluded or cid in covered:
            continue
        contact = by_id.get(cid)
        if contact is None:
            continue
        if is_snoozed(cid):
            continue

        health = health_of(cid)
        recommendations.append(
            Recommendation(
                contact_id=cid,
                contact=contact,
                reason=_reminder_reason(contact, days_between(reminder.due_date, now)),
                # >= base; grows with how long the reminder has been due
                priority=REMINDER_PRIORITY_BASE + (now - reminder.due_date),
                health_status=health.status,
                is_reminder=True,
            )
        )
        covered.add(cid)

    candidates: list[tuple[Contact, HealthScore]] = []
    for contact in contacts:
        cid = contact.id
        if contact.archived or cid in excluded or cid in covered:
            continue
        if is_snoozed(cid):
            continue
        if not contact.tags and days_between(contact.created_at, now) < UNTAGGED_GRACE_DAYS:
            continue

        health = health_of(cid)
        if health.status == "green" and cid not in reminder_contact_ids:
            continue
        candidates.append((contact, health))

    candidates.sort(key=lambda item: (-STATUS_ORDER[item[1].status], item[1].score))

    for contact, health in candidates:
        if len(recommendations) >= limit:
            break
        recommendations.append(
            Recommendation(
                contact_id=contact.id,
                contact=contact,
                reason=_health_reason(contact, health.status),
                priority=STATUS_ORDER[health.status] * 100 - health.score * 100,
                health_status=health.status,
                is_reminder=False,
            )
        )

    recommendations.sort(key=lambda r: r.priority, reverse=True)
    result = recommendations[:limit]
    logger.debug(
        "Ranked %d recommendation(s) from %d candidate(s), limit %d",
        len(result),
        len(candidates) + len(covered),
        limit,
    )
    return result


def refresh_recommendations(
    contacts: Iterable[Contact],
    reminders: Iterable[Reminder],
    is_snoozed: Callable[[int], bool],
    health_of: Callable[[int], HealthScore],
    now: int,
    exclude_contact_ids: Collection[int] = (),
) -> list[Recommendation]:
    """A fresh ranking of three, skipping contacts the caller has already seen."""
    return generate_recommendations(
        contacts,
        reminders,
        is_snoozed,
        health_of,
        now,
        limit=REFRESH_LIMIT,
        exclude_contact_ids=exclude_contact_ids,
    )
