from __future__ import annotations

import logging
import sqlite3
from typing import Iterable

from mycircle.errors import CRMError, ErrorKind, conflict, not_found
from mycircle.models import Contact
from mycircle.services.base import Store
from mycircle.services.tags import row_to_tag
from mycircle.validators import validate_birthday, validate_name, validate_profile_note

logger = logging.getLogger(__name__)


def _load_tags(db: sqlite3.Connection, contact_id: int):
    rows = db.execute(
        """SELECT t.* FROM tags t
           JOIN contact_tags ct ON t.id = ct.tag_id
           WHERE ct.contact_id = ?
           ORDER BY t.priority DESC, t.id""",
        (contact_id,),
    ).fetchall()
    return [row_to_tag(r) for r in rows]


def _row_to_contact(db: sqlite3.Connection, row: sqlite3.Row) -> Contact:
    return Contact(
        id=row["id"],
        name=row["name"],
        birthday=row["birthday"],
        profile_note=row["profile_note"],
        archived=bool(row["archived"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        tags=_load_tags(db, row["id"]),
    )


class ContactService(Store):
    def create_contact(
        self,
        name: str,
        birthday: str | None = None,
        profile_note: str | None = None,
        tag_ids: Iterable[int] = (),
    ) -> Contact:
        validate_name(name)
        validate_birthday(birthday)
        validate_profile_note(profile_note)
        now = self.clock()

        with self._db() as db:
            cur = db.execute(
                """INSERT INTO contacts (name, birthday, profile_note, archived, created_at, updated_at)
                   VALUES (?, ?, ?, 0, ?, ?)""",
                (name.strip(), birthday or None, profile_note or None, now, now),
            )
            contact_id = cur.lastrowid
            # Any missing tag rolls back the whole insert
            for tag_id in tag_ids:
                if not db.execute("SELECT id FROM tags WHERE id = ?", (tag_id,)).fetchone():
                    raise not_found("Tag", tag_id)
                db.execute(
                    """INSERT OR IGNORE INTO contact_tags (contact_id, tag_id, created_at)
                       VALUES (?, ?, ?)""",
                    (contact_id, tag_id, now),
                )
        logger.info("Created contact %s", contact_id)
        return self.get_contact(contact_id)

    def get_contact(self, contact_id: int) -> Contact | None:
        with self._db() as db:
            row = db.execute("SELECT * FROM contacts WHERE id = ?", (contact_id,)).fetchone()
            return _row_to_contact(db, row) if row else None

    def require_contact(self, contact_id: int) -> Contact:
        contact = self.get_contact(contact_id)
        if contact is None:
            raise not_found("Contact", contact_id)
        return contact

    def list_contacts(
        self,
        archived: bool | None = None,
        tag_id: int | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Contact]:
        query = "SELECT * FROM contacts WHERE 1=1"
        params: list = []
        if archived is not None:
            query += " AND archived = ?"
            params.append(1 if archived else 0)
        if tag_id:
            query += " AND id IN (SELECT contact_id FROM contact_tags WHERE tag_id = ?)"
            params.append(tag_id)
        query += " ORDER BY created_at DESC, id DESC"
        if limit:
            query += " LIMIT ?"
            params.append(limit)
            if offset:
                query += " OFFSET ?"
                params.append(offset)
        elif offset:
            query += " LIMIT -1 OFFSET ?"
            params.append(offset)

        with self._db() as db:
            rows = db.execute(query, params).fetchall()
            return [_row_to_contact(db, r) for r in rows]

    def update_contact(self, contact_id: int, changes: dict) -> Contact:
        """Apply a partial update. ``None`` clears birthday or profile note."""
        self.require_contact(contact_id)
        updates: list[str] = []
        values: list = []

        if "name" in changes:
            validate_name(changes["name"])
            updates.append("name = ?")
            values.append(changes["name"].strip())
        if "birthday" in changes:
            validate_birthday(changes["birthday"])
            updates.append("birthday = ?")
            values.append(changes["birthday"])
        if "profile_note" in changes:
            validate_profile_note(changes["profile_note"])
            updates.append("profile_note = ?")
            values.append(changes["profile_note"])

        if updates:
            updates.append("updated_at = ?")
            values.append(self.clock())
            with self._db() as db:
                db.execute(
                    f"UPDATE contacts SET {', '.join(updates)} WHERE id = ?",
                    (*values, contact_id),
                )
            logger.info("Updated contact %s", contact_id)
        return self.get_contact(contact_id)

    def _set_archived(self, contact_id: int, archived: bool) -> Contact:
        self.require_contact(contact_id)
        with self._db() as db:
            db.execute(
                "UPDATE contacts SET archived = ?, updated_at = ? WHERE id = ?",
                (1 if archived else 0, self.clock(), contact_id),
            )
        logger.info("%s contact %s", "Archived" if archived else "Unarchived", contact_id)
        return self.get_contact(contact_id)

    def archive_contact(self, contact_id: int) -> Contact:
        return self._set_archived(contact_id, True)

    def unarchive_contact(self, contact_id: int) -> Contact:
        return self._set_archived(contact_id, False)

    def assign_tag(self, contact_id: int, tag_id: int) -> Contact:
        self.require_contact(contact_id)
        with self._db() as db:
            if not db.execute("SELECT id FROM tags WHERE id = ?", (tag_id,)).fetchone():
                raise not_found("Tag", tag_id)
            try:
                db.execute(
                    "INSERT INTO contact_tags (contact_id, tag_id, created_at) VALUES (?, ?, ?)",
                    (contact_id, tag_id, self.clock()),
                )
            except sqlite3.IntegrityError:
                raise conflict(
                    f"Tag {tag_id} is already assigned to contact {contact_id}"
                ) from None
        return self.get_contact(contact_id)

    def remove_tag(self, contact_id: int, tag_id: int) -> Contact:
        self.require_contact(contact_id)
        with self._db() as db:
            removed = db.execute(
                "DELETE FROM contact_tags WHERE contact_id = ? AND tag_id = ?",
                (contact_id, tag_id),
            ).rowcount
        if removed == 0:
            raise CRMError(
                ErrorKind.NOT_FOUND, f"Tag {tag_id} is not assigned to contact {contact_id}"
            )
        return self.get_contact(contact_id)
