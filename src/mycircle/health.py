"""Relationship health: exponential decay of the last interaction's weight.

A fresh hangout starts at 6, a call at 3, a text at 1. The score then decays
with a rate of ``1 / (expected_interval_days * DECAY_FACTOR)`` per elapsed
whole day, so relationships with a longer expected interval fade more slowly.
"""

from __future__ import annotations

import math
from typing import Iterable

from mycircle.models import HealthScore, Tag

SECONDS_PER_DAY = 86400
DECAY_FACTOR = 2.0
DEFAULT_INTERVAL_DAYS = 365

GREEN_THRESHOLD = 0.5
YELLOW_THRESHOLD = 0.2

STATUS_ORDER = {"red": 3, "yellow": 2, "green": 1}


def days_between(earlier: int, later: int) -> int:
    return math.floor((later - earlier) / SECONDS_PER_DAY)


def status_for_score(score: float) -> str:
    if score >= GREEN_THRESHOLD:
        return "green"
    if score >= YELLOW_THRESHOLD:
        return "yellow"
    return "red"


def expected_interval_days(tags: Iterable[Tag]) -> int:
    """Max interval of the highest-priority tag; lowest tag id wins a tie."""
    best: Tag | None = None
    for tag in tags:
        if best is None or (tag.priority, -tag.id) > (best.priority, -best.id):
            best = tag
    if best is None:
        return DEFAULT_INTERVAL_DAYS
    return best.max_interval_days


def compute_health(
    last_interaction_timestamp: int | None,
    last_interaction_weight: int | None,
    expected_interval_days: int,
    now: int,
    contact_id: int = 0,
) -> HealthScore:
    if last_interaction_timestamp is None or last_interaction_weight is None:
        return HealthScore(
            contact_id=contact_id,
            score=0.0,
            status="red",
            last_interaction_timestamp=None,
            expected_interval_days=expected_interval_days,
        )

    days_elapsed = days_between(last_interaction_timestamp, now)
    decay_rate = 1.0 / (expected_interval_days * DECAY_FACTOR)
    score = last_interaction_weight * math.exp(-decay_rate * days_elapsed)

    return HealthScore(
        contact_id=contact_id,
        score=score,
        status=status_for_score(score),
        last_interaction_timestamp=last_interaction_timestamp,
        expected_interval_days=expected_interval_days,
    )
