from typing import List, Optional
from datetime import date, datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pydantic import BaseModel, ConfigDict, Field, model_validator

from moodlog.api.dependencies import get_advice_generator, get_current_user
from moodlog.db import get_db
from moodlog.engine.advice import AdviceGenerator
from moodlog.engine.formatter import format_recommendation
from moodlog.models import ActivityCategory, User
from moodlog.services import entries as entry_service

router = APIRouter()


class EntryPayload(BaseModel):
    """Fields submitted from the daily tracker form."""
    date: datetime  # any moment of the day being logged
    mood_rating: int = Field(ge=1, le=10)
    anxiety_level: int = Field(ge=1, le=10)
    sleep_hours: float = Field(ge=0, le=24)
    sleep_quality: int = Field(ge=1, le=10)
    stress_level: int = Field(ge=1, le=10)
    physical_activity: ActivityCategory = ActivityCategory.NONE
    activity_duration: int = Field(default=0, ge=0)  # minutes
    social_interaction: int = Field(ge=1, le=10)
    depression_symptoms: bool = False
    depression_symptom_severity: int = Field(default=0, ge=0, le=10)
    anxiety_symptoms: bool = False
    anxiety_symptom_severity: int = Field(default=0, ge=0, le=10)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_activity_duration(self):
        if self.physical_activity == ActivityCategory.NONE and self.activity_duration != 0:
            raise ValueError("activity_duration must be 0 when physical_activity is NONE")
        return self


class EntryUpdate(EntryPayload):
    # Manually edited advice; left untouched when omitted
    recommendation: Optional[str] = None


class EntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: datetime
    mood_rating: int
    anxiety_level: int
    sleep_hours: float
    sleep_quality: int
    stress_level: int
    physical_activity: str
    activity_duration: int
    social_interaction: int
    depression_symptoms: bool
    depression_symptom_severity: int
    anxiety_symptoms: bool
    anxiety_symptom_severity: int
    notes: Optional[str]
    recommendation: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


@router.get("", response_model=List[EntryResponse])
def list_entries(
    order: str = Query("desc", pattern="^(asc|desc)$"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """All of the user's entries, newest first by default."""
    return entry_service.list_entries(db, user, newest_first=order == "desc")


@router.get("/activity-categories")
def list_activity_categories():
    return {"categories": [category.value for category in ActivityCategory]}


@router.get("/days")
def list_entry_days(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Days that already have an entry, so the tracker can disable them."""
    days = entry_service.list_entry_days(db, user)
    return {"days": [day.date().isoformat() for day in days]}


@router.get("/day/{day}", response_model=Optional[EntryResponse])
def get_entry_for_day(
    day: date,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return entry_service.get_entry_for_day(db, user, day)


@router.post("", response_model=EntryResponse, status_code=201)
async def create_entry(
    payload: EntryPayload,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    advisor: AdviceGenerator = Depends(get_advice_generator)
):
    """
    Log the day's entry. Only one entry per calendar day is allowed;
    a second one for the same day is rejected with 409.
    """
    return await entry_service.create_entry(db, user, payload, advisor)


@router.get("/{entry_id}", response_model=EntryResponse)
def get_entry(
    entry_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return entry_service.get_entry(db, user, entry_id)


@router.put("/{entry_id}", response_model=EntryResponse)
def update_entry(
    entry_id: str,
    payload: EntryUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return entry_service.update_entry(db, user, entry_id, payload)


@router.delete("/{entry_id}")
def delete_entry(
    entry_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    entry_service.delete_entry(db, user, entry_id)
    return {"status": "deleted"}


@router.get("/{entry_id}/recommendation")
def get_formatted_recommendation(
    entry_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """The entry's recommendation split into display sections."""
    entry = entry_service.get_entry(db, user, entry_id)
    return {
        "entry_id": entry.id,
        "date": entry.date.date().isoformat(),
        "recommendation": entry.recommendation,
        "formatted": format_recommendation(entry.recommendation).to_dict()
    }
