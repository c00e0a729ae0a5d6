from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
import secrets
import uuid

from moodlog.db.database import Base


def _new_access_token() -> str:
    return secrets.token_urlsafe(32)


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Entries are bucketed into calendar days in this timezone
    timezone = Column(String, nullable=False, default="America/New_York")  # IANA timezone

    # Opaque bearer token issued at sign-up
    access_token = Column(String, unique=True, nullable=False, default=_new_access_token)

    # Relationships
    entries = relationship("Entry", back_populates="user", cascade="all, delete-orphan")
