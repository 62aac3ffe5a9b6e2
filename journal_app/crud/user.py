from typing import Optional

from sqlalchemy.orm import Session

from journal_app import models


class CRUDUser:
    def get(self, db: Session, *, user_id: int) -> Optional[models.User]:
        return db.query(models.User).filter(models.User.id == user_id).first()

    def get_first(self, db: Session) -> Optional[models.User]:
        """The local journal owner (single-tenant in practice)"""
        return db.query(models.User).order_by(models.User.id).first()

    def count(self, db: Session) -> int:
        return db.query(models.User).count()

    def create(self, db: Session, *, db_obj: models.User) -> models.User:
        db.add(db_obj)
        db.flush()
        return db_obj

    def update(self, db: Session, *, db_obj: models.User, fields: dict) -> models.User:
        for field, value in fields.items():
            setattr(db_obj, field, value)
        db.flush()
        return db_obj


crud_user = CRUDUser()
