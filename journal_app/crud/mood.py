from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from journal_app import models
from journal_app.models.journal_entry_mood import MoodRole


class CRUDMood:
    # ====================================================
    # MOOD CATALOG
    # ====================================================

    def get(self, db: Session, *, mood_id: int) -> Optional[models.Mood]:
        return db.query(models.Mood).filter(models.Mood.id == mood_id).first()

    def get_all(self, db: Session) -> List[models.Mood]:
        return db.query(models.Mood).order_by(models.Mood.id).all()

    def get_many(self, db: Session, *, mood_ids: Sequence[int]) -> List[models.Mood]:
        if not mood_ids:
            return []
        return (
            db.query(models.Mood)
            .filter(models.Mood.id.in_(list(mood_ids)))
            .order_by(models.Mood.id)
            .all()
        )

    def count(self, db: Session) -> int:
        return db.query(models.Mood).count()

    def create(self, db: Session, *, db_obj: models.Mood) -> models.Mood:
        db.add(db_obj)
        db.flush()
        return db_obj

    def delete(self, db: Session, *, db_obj: models.Mood) -> None:
        db.delete(db_obj)
        db.flush()

    def is_referenced(self, db: Session, *, mood_id: int) -> bool:
        """True if any entry still points at this mood"""
        return (
            db.query(models.JournalEntryMood.id)
            .filter(models.JournalEntryMood.mood_id == mood_id)
            .first()
            is not None
        )

    # ====================================================
    # ENTRY <-> MOOD JUNCTION
    # ====================================================

    def get_links(
        self, db: Session, *, entry_id: int, role: Optional[MoodRole] = None
    ) -> List[models.JournalEntryMood]:
        """Junction rows for an entry, in insertion order"""
        query = db.query(models.JournalEntryMood).filter(
            models.JournalEntryMood.entry_id == entry_id
        )
        if role is not None:
            query = query.filter(models.JournalEntryMood.mood_type == role.value)
        return query.order_by(models.JournalEntryMood.id).all()

    def get_for_entry(
        self, db: Session, *, entry_id: int, role: Optional[MoodRole] = None
    ) -> List[models.Mood]:
        """Resolve junction rows to moods; rows pointing at a missing mood are skipped."""
        links = self.get_links(db, entry_id=entry_id, role=role)
        moods = {m.id: m for m in self.get_many(db, mood_ids=[link.mood_id for link in links])}
        return [moods[link.mood_id] for link in links if link.mood_id in moods]

    def add_link(
        self, db: Session, *, entry_id: int, mood_id: int, role: MoodRole
    ) -> models.JournalEntryMood:
        link = models.JournalEntryMood(
            entry_id=entry_id, mood_id=mood_id, mood_type=role.value
        )
        db.add(link)
        return link

    def delete_links(self, db: Session, *, entry_id: int) -> int:
        """Remove every mood row for an entry; returns rows deleted"""
        deleted = (
            db.query(models.JournalEntryMood)
            .filter(models.JournalEntryMood.entry_id == entry_id)
            .delete(synchronize_session=False)
        )
        db.flush()
        return deleted


# Instantiate a reusable object
crud_mood = CRUDMood()
