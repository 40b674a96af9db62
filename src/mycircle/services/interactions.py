from __future__ import annotations

import logging
import sqlite3

from mycircle.errors import not_found
from mycircle.models import Interaction
from mycircle.services.base import Store
from mycircle.validators import (
    INTERACTION_NOTES_MAX,
    interaction_weight,
    validate_interaction_type,
    validate_notes,
)

logger = logging.getLogger(__name__)

_ORDER_COLUMNS = {"timestamp", "created_at"}
_ORDER_DIRECTIONS = {"asc", "desc"}


def _row_to_interaction(row: sqlite3.Row) -> Interaction:
    return Interaction(
        id=row["id"],
        contact_id=row["contact_id"],
        type=row["type"],
        weight=row["weight"],
        timestamp=row["timestamp"],
        notes=row["notes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class InteractionService(Store):
    def log_interaction(
        self, contact_id: int, type: str, timestamp: int, notes: str | None = None
    ) -> Interaction:
        validate_interaction_type(type)
        validate_notes(notes, INTERACTION_NOTES_MAX)
        weight = interaction_weight(type)
        now = self.clock()

        with self._db() as db:
            if not db.execute("SELECT id FROM contacts WHERE id = ?", (contact_id,)).fetchone():
                raise not_found("Contact", contact_id)
            cur = db.execute(
                """INSERT INTO interactions
                   (contact_id, type, timestamp, notes, weight, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (contact_id, type, timestamp, notes or None, weight, now, now),
            )
            interaction_id = cur.lastrowid
        logger.info("Logged %s with contact %s", type, contact_id)
        return self.get_interaction(interaction_id)

    def get_interaction(self, interaction_id: int) -> Interaction | None:
        with self._db() as db:
            row = db.execute(
                "SELECT * FROM interactions WHERE id = ?", (interaction_id,)
            ).fetchone()
        return _row_to_interaction(row) if row else None

    def list_interactions(
        self,
        contact_id: int | None = None,
        order_by: str = "timestamp",
        order: str = "desc",
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Interaction]:
        # Column and direction are interpolated, so only whitelisted values pass
        if order_by not in _ORDER_COLUMNS:
            order_by = "timestamp"
        order = order.lower() if order.lower() in _ORDER_DIRECTIONS else "desc"

        query = "SELECT * FROM interactions WHERE 1=1"
        params: list = []
        if contact_id:
            query += " AND contact_id = ?"
            params.append(contact_id)
        query += f" ORDER BY {order_by} {order.upper()}, id {order.upper()}"
        if limit or offset:
            query += " LIMIT ? OFFSET ?"
            params.extend([limit or -1, offset or 0])

        with self._db() as db:
            rows = db.execute(query, params).fetchall()
        return [_row_to_interaction(r) for r in rows]

    def latest_interaction(self, contact_id: int) -> Interaction | None:
        with self._db() as db:
            row = db.execute(
                """SELECT * FROM interactions WHERE contact_id = ?
                   ORDER BY timestamp DESC, id DESC LIMIT 1""",
                (contact_id,),
            ).fetchone()
        return _row_to_interaction(row) if row else None

    def update_interaction(self, interaction_id: int, changes: dict) -> Interaction:
        if self.get_interaction(interaction_id) is None:
            raise not_found("Interaction", interaction_id)
        updates: list[str] = []
        values: list = []

        if changes.get("type") is not None:
            validate_interaction_type(changes["type"])
            updates.extend(["type = ?", "weight = ?"])
            values.extend([changes["type"], interaction_weight(changes["type"])])
        if changes.get("timestamp") is not None:
            updates.append("timestamp = ?")
            values.append(changes["timestamp"])
        if "notes" in changes:
            validate_notes(changes["notes"], INTERACTION_NOTES_MAX)
            updates.append("notes = ?")
            values.append(changes["notes"])

        if updates:
            updates.append("updated_at = ?")
            values.append(self.clock())
            with self._db() as db:
                db.execute(
                    f"UPDATE interactions SET {', '.join(updates)} WHERE id = ?",
                    (*values, interaction_id),
                )
            logger.info("Updated interaction %s", interaction_id)
        return self.get_interaction(interaction_id)

    def delete_interaction(self, interaction_id: int) -> None:
        if self.get_interaction(interaction_id) is None:
            raise not_found("Interaction", interaction_id)
        with self._db() as db:
            db.execute("DELETE FROM interactions WHERE id = ?", (interaction_id,))
        logger.info("Deleted interaction %s", interaction_id)
