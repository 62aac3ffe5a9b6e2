from datetime import date, timedelta
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from journal_app import models


class CRUDJournalEntry:
    # ====================================================
    # READ
    # ====================================================

    def get_by_id(self, db: Session, *, entry_id: int) -> Optional[models.JournalEntry]:
        """Get entry by ID"""
        return (
            db.query(models.JournalEntry)
            .filter(models.JournalEntry.id == entry_id)
            .first()
        )

    def get_by_user_and_date(
        self, db: Session, *, user_id: int, day: date
    ) -> Optional[models.JournalEntry]:
        """Get the entry a user wrote on a calendar day"""
        start_of_day = day
        end_of_day = start_of_day + timedelta(days=1)
        return (
            db.query(models.JournalEntry)
            .filter(models.JournalEntry.user_id == user_id)
            .filter(models.JournalEntry.entry_date >= start_of_day)
            .filter(models.JournalEntry.entry_date < end_of_day)
            .first()
        )

    def get_all(self, db: Session) -> List[models.JournalEntry]:
        """All entries, most recent first"""
        return (
            db.query(models.JournalEntry)
            .order_by(models.JournalEntry.entry_date.desc(), models.JournalEntry.id.desc())
            .all()
        )

    def get_by_date_range(
        self, db: Session, *, start_date: date, end_date: date
    ) -> List[models.JournalEntry]:
        """Entries with start_date <= date <= end_date, most recent first"""
        return (
            db.query(models.JournalEntry)
            .filter(models.JournalEntry.entry_date >= start_date)
            .filter(models.JournalEntry.entry_date <= end_date)
            .order_by(models.JournalEntry.entry_date.desc(), models.JournalEntry.id.desc())
            .all()
        )

    def search(self, db: Session, *, term: str) -> List[models.JournalEntry]:
        """Case-insensitive substring match on title or content."""
        # SQLite's LOWER() only folds ASCII, so match in Python
        needle = term.casefold()
        return [
            entry
            for entry in self.get_all(db)
            if needle in (entry.title or "").casefold()
            or needle in (entry.content or "").casefold()
        ]

    def filter(
        self,
        db: Session,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        mood_ids: Optional[Sequence[int]] = None,
        tag_ids: Optional[Sequence[int]] = None,
    ) -> List[models.JournalEntry]:
        """Date range, then any-of moods, then any-of tags. Empty means no constraint."""
        query = db.query(models.JournalEntry)

        if start_date is not None:
            query = query.filter(models.JournalEntry.entry_date >= start_date)
        if end_date is not None:
            query = query.filter(models.JournalEntry.entry_date <= end_date)

        if mood_ids:
            with_moods = db.query(models.JournalEntryMood.entry_id).filter(
                models.JournalEntryMood.mood_id.in_(list(mood_ids))
            )
            query = query.filter(models.JournalEntry.id.in_(with_moods))

        if tag_ids:
            with_tags = db.query(models.JournalEntryTag.entry_id).filter(
                models.JournalEntryTag.tag_id.in_(list(tag_ids))
            )
            query = query.filter(models.JournalEntry.id.in_(with_tags))

        return query.order_by(
            models.JournalEntry.entry_date.desc(), models.JournalEntry.id.desc()
        ).all()

    def get_entry_days(self, db: Session) -> List[date]:
        """Distinct calendar days that have an entry, most recent first"""
        rows = (
            db.query(models.JournalEntry.entry_date)
            .distinct()
            .order_by(models.JournalEntry.entry_date.desc())
            .all()
        )
        return [row[0] for row in rows]

    def count(self, db: Session) -> int:
        return db.query(models.JournalEntry).count()

    # ====================================================
    # WRITE
    # ====================================================

    def create(self, db: Session, *, db_obj: models.JournalEntry) -> models.JournalEntry:
        """Insert a new entry and assign its ID"""
        db.add(db_obj)
        db.flush()
        return db_obj

    def update(
        self, db: Session, *, db_obj: models.JournalEntry, fields: dict
    ) -> models.JournalEntry:
        """Overwrite the given columns"""
        for field, value in fields.items():
            setattr(db_obj, field, value)
        db.flush()
        return db_obj

    def delete(self, db: Session, *, db_obj: models.JournalEntry) -> None:
        db.delete(db_obj)
        db.flush()


# Instantiate a reusable object
crud_journal_entry = CRUDJournalEntry()
