# models/user.py

from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime
from journal_app.core.config import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    user_name = Column(String(100), nullable=False)
    email = Column(String(200), nullable=True)
    theme_preference = Column(String(20), nullable=False, default="light")  # light | dark

    created_at = Column(DateTime, nullable=False, default=datetime.now)
