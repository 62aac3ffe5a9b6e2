from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from journal_app import models


class CRUDTag:
    # ====================================================
    # TAG CATALOG
    # ====================================================

    def get(self, db: Session, *, tag_id: int) -> Optional[models.Tag]:
        return db.query(models.Tag).filter(models.Tag.id == tag_id).first()

    def get_all(self, db: Session) -> List[models.Tag]:
        return db.query(models.Tag).order_by(models.Tag.id).all()

    def get_many(self, db: Session, *, tag_ids: Sequence[int]) -> List[models.Tag]:
        if not tag_ids:
            return []
        return (
            db.query(models.Tag)
            .filter(models.Tag.id.in_(list(tag_ids)))
            .order_by(models.Tag.id)
            .all()
        )

    def count(self, db: Session) -> int:
        return db.query(models.Tag).count()

    def create(self, db: Session, *, db_obj: models.Tag) -> models.Tag:
        db.add(db_obj)
        db.flush()
        return db_obj

    def delete(self, db: Session, *, db_obj: models.Tag) -> None:
        db.delete(db_obj)
        db.flush()

    def is_referenced(self, db: Session, *, tag_id: int) -> bool:
        return (
            db.query(models.JournalEntryTag.id)
            .filter(models.JournalEntryTag.tag_id == tag_id)
            .first()
            is not None
        )

    # ====================================================
    # ENTRY <-> TAG JUNCTION
    # ====================================================

    def get_for_entry(self, db: Session, *, entry_id: int) -> List[models.Tag]:
        """Tags attached to an entry, one per junction row, in insertion order"""
        links = (
            db.query(models.JournalEntryTag)
            .filter(models.JournalEntryTag.entry_id == entry_id)
            .order_by(models.JournalEntryTag.id)
            .all()
        )
        tags = {t.id: t for t in self.get_many(db, tag_ids=[link.tag_id for link in links])}
        return [tags[link.tag_id] for link in links if link.tag_id in tags]

    def add_link(self, db: Session, *, entry_id: int, tag_id: int) -> models.JournalEntryTag:
        link = models.JournalEntryTag(entry_id=entry_id, tag_id=tag_id)
        db.add(link)
        return link

    def delete_links(self, db: Session, *, entry_id: int) -> int:
        deleted = (
            db.query(models.JournalEntryTag)
            .filter(models.JournalEntryTag.entry_id == entry_id)
            .delete(synchronize_session=False)
        )
        db.flush()
        return deleted


# Instantiate a reusable object
crud_tag = CRUDTag()
