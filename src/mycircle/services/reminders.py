from __future__ import annotations

import logging
import sqlite3

from mycircle.errors import not_found
from mycircle.models import Reminder
from mycircle.services.base import Store
from mycircle.validators import REMINDER_NOTE_MAX, validate_notes

logger = logging.getLogger(__name__)


def _row_to_reminder(row: sqlite3.Row) -> Reminder:
    return Reminder(
        id=row["id"],
        contact_id=row["contact_id"],
        due_date=row["due_date"],
        status=row["status"],
        note=row["note"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class ReminderService(Store):
    def create_reminder(self, contact_id: int, due_date: int, note: str | None = None) -> Reminder:
        validate_notes(note, REMINDER_NOTE_MAX)
        now = self.clock()
        with self._db() as db:
            if not db.execute("SELECT id FROM contacts WHERE id = ?", (contact_id,)).fetchone():
                raise not_found("Contact", contact_id)
            cur = db.execute(
                """INSERT INTO reminders (contact_id, due_date, status, note, created_at, updated_at)
                   VALUES (?, ?, 'pending', ?, ?, ?)""",
                (contact_id, due_date, note or None, now, now),
            )
            reminder_id = cur.lastrowid
        logger.info("Created reminder %s for contact %s", reminder_id, contact_id)
        return self.get_reminder(reminder_id)

    def get_reminder(self, reminder_id: int) -> Reminder | None:
        with self._db() as db:
            row = db.execute("SELECT * FROM reminders WHERE id = ?", (reminder_id,)).fetchone()
        return _row_to_reminder(row) if row else None

    def list_reminders(
        self,
        contact_id: int | None = None,
        status: str | None = None,
        due_before: int | None = None,
        include_past: bool = False,
    ) -> list[Reminder]:
        """Reminders ordered by due date; past-due ones only with ``include_past``."""
        query = "SELECT * FROM reminders WHERE 1=1"
        params: list = []
        if contact_id:
            query += " AND contact_id = ?"
            params.append(contact_id)
        if status:
            query += " AND status = ?"
            params.append(status)
        if due_before is not None:
            query += " AND due_date <= ?"
            params.append(due_before)
        if not include_past:
            query += " AND due_date >= ?"
            params.append(self.clock())
        query += " ORDER BY due_date ASC, id ASC"

        with self._db() as db:
            rows = db.execute(query, params).fetchall()
        return [_row_to_reminder(r) for r in rows]

    def overdue_reminders(self, now: int | None = None) -> list[Reminder]:
        """Pending reminders due at or before ``now``."""
        return self.list_reminders(
            status="pending",
            due_before=self.clock() if now is None else now,
            include_past=True,
        )

    def mark_done(self, reminder_id: int) -> Reminder:
        if self.get_reminder(reminder_id) is None:
            raise not_found("Reminder", reminder_id)
        with self._db() as db:
            db.execute(
                "UPDATE reminders SET status = 'done', updated_at = ? WHERE id = ?",
                (self.clock(), reminder_id),
            )
        logger.info("Marked reminder %s done", reminder_id)
        return self.get_reminder(reminder_id)
