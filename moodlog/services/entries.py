"""
Entry service - reads and writes of daily entries, scoped to their owner.

Each owner gets at most one entry per calendar day. Creates check the day's
window first so the caller gets a friendly error; the unique constraint on
(user_id, date) catches whatever slips past that check under concurrency.
"""
from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from moodlog.engine.advice import AdviceGenerator
from moodlog.engine.day_window import day_window, normalize_day
from moodlog.models import Entry, User

logger = logging.getLogger(__name__)


class DuplicateEntryError(Exception):
    """The owner already has an entry on this calendar day."""

    def __init__(self, day: datetime):
        self.day = day
        super().__init__(
            f"You already have an entry for {day.date().isoformat()}. "
            "Please edit the existing entry instead."
        )


class EntryNotFoundError(Exception):
    """Raised for both missing entries and entries owned by someone else."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__("Entry not found or you don't have permission to access it")


def find_entry_for_day(
    db: Session,
    user_id: str,
    day: datetime,
    exclude_id: Optional[str] = None
) -> Optional[Entry]:
    """Find the owner's entry whose date falls in the day's [start, end) window."""
    start, end = day_window(day)
    query = db.query(Entry).filter(
        Entry.user_id == user_id,
        Entry.date >= start,
        Entry.date < end
    )
    if exclude_id is not None:
        query = query.filter(Entry.id != exclude_id)
    return query.first()


def list_entries(db: Session, user: User, newest_first: bool = True) -> List[Entry]:
    order = Entry.date.desc() if newest_first else Entry.date.asc()
    return db.query(Entry).filter(Entry.user_id == user.id).order_by(order).all()


def get_entry(db: Session, user: User, entry_id: str) -> Entry:
    entry = db.query(Entry).filter(
        Entry.id == entry_id,
        Entry.user_id == user.id
    ).first()
    if not entry:
        raise EntryNotFoundError(entry_id)
    return entry


def get_entry_for_day(db: Session, user: User, day) -> Optional[Entry]:
    return find_entry_for_day(db, user.id, normalize_day(day, user.timezone))


def list_entry_days(db: Session, user: User) -> List[datetime]:
    """Days that already have an entry, newest first."""
    rows = db.query(Entry.date).filter(
        Entry.user_id == user.id
    ).order_by(Entry.date.desc()).all()
    return [row[0] for row in rows]


def list_recommendations(db: Session, user: User, limit: Optional[int] = None) -> List[Entry]:
    """Entries carrying a non-blank recommendation, newest first."""
    entries = [
        e for e in list_entries(db, user)
        if e.recommendation and e.recommendation.strip()
    ]
    if limit is not None:
        entries = entries[:limit]
    return entries


def _commit_or_duplicate(db: Session, day: datetime):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEntryError(day)


async def create_entry(
    db: Session,
    user: User,
    payload,
    advisor: AdviceGenerator
) -> Entry:
    """
    Create the owner's entry for a day and attach generated advice.

    Raises DuplicateEntryError if the day already has an entry. Advice
    failures never block the write.
    """
    day = normalize_day(payload.date, user.timezone)

    if find_entry_for_day(db, user.id, day):
        logger.info(f"Rejected duplicate entry for user {user.id} on {day.date()}")
        raise DuplicateEntryError(day)

    fields = payload.model_dump(mode="json", exclude={"date"})
    recommendation = await advisor.generate({"date": day.date().isoformat(), **fields})

    entry = Entry(user_id=user.id, date=day, recommendation=recommendation, **fields)
    db.add(entry)
    _commit_or_duplicate(db, day)
    db.refresh(entry)

    logger.info(f"Created entry {entry.id} for user {user.id} on {day.date()}")
    return entry


def update_entry(db: Session, user: User, entry_id: str, payload) -> Entry:
    """
    Overwrite all mutable fields of an owned entry.

    The stored day is recomputed from the submitted date. Moving the entry
    onto a day that already has another entry raises DuplicateEntryError.
    """
    entry = get_entry(db, user, entry_id)
    day = normalize_day(payload.date, user.timezone)

    if day != entry.date and find_entry_for_day(db, user.id, day, exclude_id=entry.id):
        logger.info(f"Rejected move of entry {entry.id} onto taken day {day.date()}")
        raise DuplicateEntryError(day)

    fields = payload.model_dump(mode="json", exclude={"date", "recommendation"})
    for field, value in fields.items():
        setattr(entry, field, value)
    if getattr(payload, "recommendation", None) is not None:
        entry.recommendation = payload.recommendation
    entry.date = day

    _commit_or_duplicate(db, day)
    db.refresh(entry)

    logger.info(f"Updated entry {entry.id} for user {user.id}")
    return entry


def delete_entry(db: Session, user: User, entry_id: str):
    entry = get_entry(db, user, entry_id)
    db.delete(entry)
    db.commit()
    logger.info(f"Deleted entry {entry_id} for user {user.id}")
