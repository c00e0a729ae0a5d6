from typing import Optional
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field

from moodlog.api.dependencies import get_current_user
from moodlog.config import get_settings
from moodlog.db import get_db
from moodlog.engine.day_window import is_valid_timezone
from moodlog.models import User

router = APIRouter()


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    timezone: Optional[str] = None  # IANA name, e.g. "Europe/Paris"


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    timezone: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    timezone: str
    created_at: Optional[datetime]
    entry_count: int


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserSignIn(BaseModel):
    email: EmailStr


def _check_timezone(timezone: str):
    if not is_valid_timezone(timezone):
        raise HTTPException(status_code=400, detail=f"Unknown timezone: {timezone}")


@router.post("", response_model=SessionResponse, status_code=201)
def create_user(user_data: UserCreate, db: Session = Depends(get_db)):
    """Create a new user and issue their access token."""
    existing = db.query(User).filter(User.email == user_data.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    timezone = user_data.timezone or get_settings().default_timezone
    _check_timezone(timezone)

    user = User(
        name=user_data.name,
        email=user_data.email,
        timezone=timezone
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    return _session_response(user)


@router.post("/signin", response_model=SessionResponse)
def sign_in(signin_data: UserSignIn, db: Session = Depends(get_db)):
    """Sign in with an existing email."""
    user = db.query(User).filter(User.email == signin_data.email).first()
    if not user:
        raise HTTPException(status_code=404, detail="No account found with this email")

    return _session_response(user)


@router.get("/me", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    return _user_to_response(user)


@router.patch("/me", response_model=UserResponse)
def update_me(
    user_data: UserUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the signed-in user's profile."""
    if user_data.name is not None:
        user.name = user_data.name
    if user_data.timezone is not None:
        _check_timezone(user_data.timezone)
        user.timezone = user_data.timezone

    db.commit()
    db.refresh(user)

    return _user_to_response(user)


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        timezone=user.timezone,
        created_at=user.created_at,
        entry_count=len(user.entries)
    )


def _session_response(user: User) -> SessionResponse:
    return SessionResponse(access_token=user.access_token, user=_user_to_response(user))
