from __future__ import annotations

import logging
import sqlite3

from mycircle.errors import conflict, not_found
from mycircle.models import Tag
from mycircle.services.base import Store
from mycircle.validators import validate_interval_days, validate_priority, validate_tag_name

logger = logging.getLogger(__name__)


def row_to_tag(row: sqlite3.Row) -> Tag:
    return Tag(
        id=row["id"],
        name=row["name"],
        min_interval_days=row["min_interval_days"],
        max_interval_days=row["max_interval_days"],
        priority=row["priority"],
        is_default=bool(row["is_default"]),
        created_at=row["created_at"],
    )


class TagService(Store):
    def create_tag(
        self, name: str, min_interval_days: int, max_interval_days: int, priority: int
    ) -> Tag:
        validate_tag_name(name)
        validate_interval_days(min_interval_days, max_interval_days)
        validate_priority(priority)
        name = name.strip()

        with self._db() as db:
            if db.execute("SELECT id FROM tags WHERE name = ?", (name,)).fetchone():
                raise conflict(f'Tag with name "{name}" already exists')
            cur = db.execute(
                """INSERT INTO tags
                   (name, min_interval_days, max_interval_days, priority, is_default, created_at)
                   VALUES (?, ?, ?, ?, 0, ?)""",
                (name, min_interval_days, max_interval_days, priority, self.clock()),
            )
            tag_id = cur.lastrowid
        logger.info("Created tag %s (%r)", tag_id, name)
        return self.get_tag(tag_id)

    def get_tag(self, tag_id: int) -> Tag | None:
        with self._db() as db:
            row = db.execute("SELECT * FROM tags WHERE id = ?", (tag_id,)).fetchone()
        return row_to_tag(row) if row else None

    def list_tags(self) -> list[Tag]:
        with self._db() as db:
            rows = db.execute("SELECT * FROM tags ORDER BY priority DESC, name ASC").fetchall()
        return [row_to_tag(r) for r in rows]

    def _require_custom(self, tag_id: int, action: str) -> Tag:
        tag = self.get_tag(tag_id)
        if tag is None:
            raise not_found("Tag", tag_id)
        if tag.is_default:
            raise conflict(f"Default tags cannot be {action}")
        return tag

    def update_tag(self, tag_id: int, changes: dict) -> Tag:
        """Apply a partial update; keys absent from ``changes`` are left alone."""
        tag = self._require_custom(tag_id, "modified")
        updates: list[str] = []
        values: list = []

        if changes.get("name") is not None:
            name = changes["name"]
            validate_tag_name(name)
            with self._db() as db:
                clash = db.execute(
                    "SELECT id FROM tags WHERE name = ? AND id != ?", (name.strip(), tag_id)
                ).fetchone()
            if clash:
                raise conflict(f'Tag with name "{name.strip()}" already exists')
            updates.append("name = ?")
            values.append(name.strip())

        new_min = changes.get("min_interval_days")
        new_max = changes.get("max_interval_days")
        if new_min is not None or new_max is not None:
            validate_interval_days(
                new_min if new_min is not None else tag.min_interval_days,
                new_max if new_max is not None else tag.max_interval_days,
            )
            if new_min is not None:
                updates.append("min_interval_days = ?")
                values.append(new_min)
            if new_max is not None:
                updates.append("max_interval_days = ?")
                values.append(new_max)

        if changes.get("priority") is not None:
            validate_priority(changes["priority"])
            updates.append("priority = ?")
            values.append(changes["priority"])

        if updates:
            with self._db() as db:
                db.execute(f"UPDATE tags SET {', '.join(updates)} WHERE id = ?", (*values, tag_id))
            logger.info("Updated tag %s", tag_id)
        return self.get_tag(tag_id)

    def delete_tag(self, tag_id: int) -> None:
        self._require_custom(tag_id, "deleted")
        with self._db() as db:
            db.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
        logger.info("Deleted tag %s", tag_id)
