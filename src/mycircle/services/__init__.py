from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mycircle.services.base import Clock, system_clock
from mycircle.services.contacts import ContactService
from mycircle.services.health import HealthService
from mycircle.services.interactions import InteractionService
from mycircle.services.recommendations import RecommendationService
from mycircle.services.reminders import ReminderService
from mycircle.services.snoozes import SnoozeService
from mycircle.services.tags import TagService


@dataclass
class Services:
    contacts: ContactService
    tags: TagService
    interactions: InteractionService
    reminders: ReminderService
    snoozes: SnoozeService
    health: HealthService
    recommendations: RecommendationService


def build_services(db_path: Path | None = None, clock: Clock = system_clock) -> Services:
    """Wire every service against one database and one clock."""
    common = {"db_path": db_path, "clock": clock}
    contacts = ContactService(**common)
    interactions = InteractionService(**common)
    reminders = ReminderService(**common)
    snoozes = SnoozeService(**common)
    health = HealthService(contacts, interactions, **common)
    return Services(
        contacts=contacts,
        tags=TagService(**common),
        interactions=interactions,
        reminders=reminders,
        snoozes=snoozes,
        health=health,
        recommendations=RecommendationService(contacts, reminders, snoozes, health, **common),
    )
