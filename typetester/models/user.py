"""User model: login identity. password_hash is nullable for future non-password auth."""
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from typetester.db.session import Base
from typetester.db.types import UTCDateTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(191), unique=True, nullable=False, index=True)
    username = Column(String(20), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)
    created_at = Column(UTCDateTime(), nullable=False, default=_utcnow)
    updated_at = Column(UTCDateTime(), nullable=False, default=_utcnow, onupdate=_utcnow)

    # results outlive their user; see services.accounts.delete_user
    results = relationship("TestResult", back_populates="user", passive_deletes=True)
