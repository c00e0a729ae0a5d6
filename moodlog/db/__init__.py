from .database import Base, SessionLocal, engine


def get_db():
    """Yield a database session for the duration of one request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
