from __future__ import annotations

from typing import Collection

from mycircle.models import Recommendation
from mycircle.recommend import generate_recommendations, refresh_recommendations
from mycircle.services.base import Store
from mycircle.services.contacts import ContactService
from mycircle.services.health import HealthService
from mycircle.services.reminders import ReminderService
from mycircle.services.snoozes import SnoozeService


class RecommendationService(Store):
    """Loads a snapshot from the stores and hands it to the ranker."""

    def __init__(
        self,
        contacts: ContactService,
        reminders: ReminderService,
        snoozes: SnoozeService,
        health: HealthService,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.contacts = contacts
        self.reminders = reminders
        self.snoozes = snoozes
        self.health = health

    def _snapshot(self) -> dict:
        now = self.clock()
        contacts = self.contacts.list_contacts(archived=False)
        by_id = {c.id: c for c in contacts}
        return {
            "contacts": contacts,
            "reminders": self.reminders.overdue_reminders(now),
            "is_snoozed": self.snoozes.is_snoozed,
            "health_of": lambda contact_id: self.health.health_for(by_id[contact_id], now),
            "now": now,
        }

    def recommend(
        self, limit: int = 3, exclude_contact_ids: Collection[int] = ()
    ) -> list[Recommendation]:
        return generate_recommendations(
            **self._snapshot(), limit=limit, exclude_contact_ids=exclude_contact_ids
        )

    def refresh(self, exclude_contact_ids: Collection[int] = ()) -> list[Recommendation]:
        return refresh_recommendations(**self._snapshot(), exclude_contact_ids=exclude_contact_ids)
