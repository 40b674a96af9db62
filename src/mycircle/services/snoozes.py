from __future__ import annotations

import logging

from mycircle.errors import not_found, validation_error
from mycircle.health import SECONDS_PER_DAY
from mycircle.models import Snooze
from mycircle.services.base import Store

logger = logging.getLogger(__name__)


class SnoozeService(Store):
    def snooze(self, contact_id: int, days: int) -> Snooze:
        """Hide a contact from recommendations for ``days`` days, replacing any earlier snooze."""
        if days <= 0:
            raise validation_error("Days must be positive")
        now = self.clock()
        until = now + days * SECONDS_PER_DAY

        with self._db() as db:
            if not db.execute("SELECT id FROM contacts WHERE id = ?", (contact_id,)).fetchone():
                raise not_found("Contact", contact_id)
            db.execute(
                """INSERT INTO snoozes (contact_id, snoozed_until, created_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(contact_id) DO UPDATE SET snoozed_until = excluded.snoozed_until""",
                (contact_id, until, now),
            )
            row = db.execute("SELECT * FROM snoozes WHERE contact_id = ?", (contact_id,)).fetchone()
        logger.info("Snoozed contact %s for %d day(s)", contact_id, days)
        return Snooze(
            id=row["id"],
            contact_id=row["contact_id"],
            snoozed_until=row["snoozed_until"],
            created_at=row["created_at"],
        )

    def is_snoozed(self, contact_id: int) -> bool:
        with self._db() as db:
            row = db.execute(
                "SELECT 1 FROM snoozes WHERE contact_id = ? AND snoozed_until > ?",
                (contact_id, self.clock()),
            ).fetchone()
        return row is not None

    def active_snoozes(self) -> list[Snooze]:
        with self._db() as db:
            rows = db.execute(
                "SELECT * FROM snoozes WHERE snoozed_until > ? ORDER BY snoozed_until ASC",
                (self.clock(),),
            ).fetchall()
        return [
            Snooze(
                id=r["id"],
                contact_id=r["contact_id"],
                snoozed_until=r["snoozed_until"],
                created_at=r["created_at"],
            )
            for r in rows
        ]
