from typing import List, Optional
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import select, delete

from tracker.models import Note, RichNote


class NoteRepository:
    """The single plain-text note of each user."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[Note]:
        return self.db.get(Note, user_id)

    def upsert(self, user_id: str, body: str) -> Note:
        note = self.get(user_id)
        if note is None:
            note = Note(user_id=user_id, body=body)
            self.db.add(note)
        else:
            note.body = body
        self.db.flush()
        return note


class RichNoteRepository:
    """One formatted document per (user, section)."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def make_id(user_id: str, section: str) -> str:
        return f"{user_id}_{section}"

    def get(self, user_id: str, section: str) -> Optional[RichNote]:
        return self.db.execute(
            select(RichNote).where(RichNote.user_id == user_id, RichNote.section == section)
        ).scalar_one_or_none()

    def upsert(self, user_id: str, section: str, markdown: str) -> RichNote:
        now = datetime.now(timezone.utc)
        note = self.get(user_id, section)
        if note is None:
            note = RichNote(
                id=self.make_id(user_id, section),
                user_id=user_id,
                section=section,
                markdown=markdown,
                created_at=now,
                updated_at=now
            )
            self.db.add(note)
        else:
            note.markdown = markdown
            note.updated_at = now
        self.db.flush()
        return note

    def list_sections(self, user_id: str) -> List[str]:
        """Sections holding a document, most recently updated first."""
        return self.db.execute(
            select(RichNote.section)
            .where(RichNote.user_id == user_id)
            .order_by(RichNote.updated_at.desc())
        ).scalars().all()

    def delete(self, user_id: str, section: str) -> int:
        result = self.db.execute(
            delete(RichNote).where(RichNote.user_id == user_id, RichNote.section == section)
        )
        self.db.flush()
        return result.rowcount or 0
