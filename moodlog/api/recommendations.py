from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from moodlog.api.dependencies import get_current_user
from moodlog.config import get_settings
from moodlog.db import get_db
from moodlog.engine.formatter import format_recommendation
from moodlog.models import User
from moodlog.services import entries as entry_service

router = APIRouter()


@router.get("")
def list_recommendations(
    scope: str = Query("all", pattern="^(all|recent)$"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Entries that carry a recommendation, newest first.

    scope=recent keeps only the latest few (recent_recommendations_limit).
    """
    limit = get_settings().recent_recommendations_limit if scope == "recent" else None
    entries = entry_service.list_recommendations(db, user, limit=limit)

    return {
        "scope": scope,
        "count": len(entries),
        "recommendations": [
            {
                "entry_id": entry.id,
                "date": entry.date.date().isoformat(),
                "recommendation": entry.recommendation,
                "formatted": format_recommendation(entry.recommendation).to_dict()
            }
            for entry in entries
        ]
    }
