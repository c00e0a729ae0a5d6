from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import pytz

from moodlog.api.dependencies import get_current_user
from moodlog.db import get_db
from moodlog.engine.statistics import summarize_entries
from moodlog.models import User
from moodlog.services import entries as entry_service

router = APIRouter()


@router.get("")
def get_statistics(
    period: str = Query("week", pattern="^(week|month|year)$"),
    today: Optional[date] = Query(None, description="Defaults to today in the user's timezone"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Averages, symptom rates and a chart series for the selected period."""
    if today is None:
        today = datetime.now(pytz.timezone(user.timezone)).date()

    entries = entry_service.list_entries(db, user, newest_first=False)
    return summarize_entries(entries, period, today)
