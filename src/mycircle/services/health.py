from __future__ import annotations

import logging
from typing import Iterable

from mycircle.errors import CRMError, ErrorKind
from mycircle.health import compute_health, expected_interval_days
from mycircle.models import Contact, HealthScore
from mycircle.services.base import Store
from mycircle.services.contacts import ContactService
from mycircle.services.interactions import InteractionService

logger = logging.getLogger(__name__)


class HealthService(Store):
    def __init__(self, contacts: ContactService, interactions: InteractionService, **kwargs) -> None:
        super().__init__(**kwargs)
        self.contacts = contacts
        self.interactions = interactions

    def health_for(self, contact: Contact, now: int | None = None) -> HealthScore:
        latest = self.interactions.latest_interaction(contact.id)
        return compute_health(
            latest.timestamp if latest else None,
            latest.weight if latest else None,
            expected_interval_days(contact.tags),
            self.clock() if now is None else now,
            contact_id=contact.id,
        )

    def health(self, contact_id: int, now: int | None = None) -> HealthScore:
        return self.health_for(self.contacts.require_contact(contact_id), now)

    def health_scores(self, contact_ids: Iterable[int]) -> dict[int, HealthScore]:
        """Health for each id; ids with no matching contact are left out."""
        scores: dict[int, HealthScore] = {}
        for contact_id in contact_ids:
            try:
                scores[contact_id] = self.health(contact_id)
            except CRMError as exc:
                if exc.kind is not ErrorKind.NOT_FOUND:
                    raise
                logger.debug("Skipping health for missing contact %s", contact_id)
        return scores
