from sqlalchemy import (
    Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
import uuid

from moodlog.db.database import Base


class ActivityCategory(str, enum.Enum):
    """Closed set of physical activity labels, in display order."""
    WALKING = "WALKING"
    RUNNING = "RUNNING"
    CYCLING = "CYCLING"
    SWIMMING = "SWIMMING"
    HIKING = "HIKING"
    GYM_WORKOUT = "GYM_WORKOUT"
    YOGA = "YOGA"
    PILATES = "PILATES"
    DANCING = "DANCING"
    MARTIAL_ARTS = "MARTIAL_ARTS"
    TEAM_SPORTS = "TEAM_SPORTS"
    RACQUET_SPORTS = "RACQUET_SPORTS"
    WATER_SPORTS = "WATER_SPORTS"
    WINTER_SPORTS = "WINTER_SPORTS"
    HOME_WORKOUT = "HOME_WORKOUT"
    CALISTHENICS = "CALISTHENICS"
    WEIGHTLIFTING = "WEIGHTLIFTING"
    CROSSFIT = "CROSSFIT"
    BOXING = "BOXING"
    CLIMBING = "CLIMBING"
    SKATEBOARDING = "SKATEBOARDING"
    ROWING = "ROWING"
    OTHER = "OTHER"
    NONE = "NONE"


class Entry(Base):
    """One user's daily mental-health log record."""
    __tablename__ = "entries"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_entries_user_day"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(DateTime, nullable=False)  # local midnight of the logged day
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Ratings (1-10 scale)
    mood_rating = Column(Integer, nullable=False)  # 1=very low, 10=great
    anxiety_level = Column(Integer, nullable=False)  # 1=calm, 10=severe
    sleep_quality = Column(Integer, nullable=False)
    stress_level = Column(Integer, nullable=False)
    social_interaction = Column(Integer, nullable=False)

    sleep_hours = Column(Float, nullable=False)  # 0-24

    # Activity
    physical_activity = Column(String, nullable=False, default=ActivityCategory.NONE.value)
    activity_duration = Column(Integer, nullable=False, default=0)  # minutes

    # Symptoms (severity 0-10, only meaningful when the flag is set)
    depression_symptoms = Column(Boolean, nullable=False, default=False)
    depression_symptom_severity = Column(Integer, nullable=False, default=0)
    anxiety_symptoms = Column(Boolean, nullable=False, default=False)
    anxiety_symptom_severity = Column(Integer, nullable=False, default=0)

    notes = Column(Text, nullable=True)
    recommendation = Column(Text, nullable=True)  # AI-generated or manually entered

    # Relationships
    user = relationship("User", back_populates="entries")
