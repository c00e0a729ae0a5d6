import logging

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from moodlog.db import get_db
from moodlog.engine.advice import AdviceGenerator
from moodlog.models import User

logger = logging.getLogger(__name__)


def get_current_user(
    authorization: str = Header(None),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to its user, refusing the request otherwise."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing or invalid authorization token")

    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing or invalid authorization token")

    user = db.query(User).filter(User.access_token == token).first()
    if not user:
        logger.warning("Rejected unknown access token")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return user


def get_advice_generator(request: Request) -> AdviceGenerator:
    """The advice generator built once at startup (see main.lifespan)."""
    return request.app.state.advice_generator
