"""
Pytest configuration and fixtures for the Mental Health Tracker tests.

The app runs against an in-memory SQLite database and a stub advice generator,
so no test touches the network or the filesystem.
"""
import os

import pytest
from fastapi.testclient import TestClient

# Set environment variables before importing the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from moodlog.api.dependencies import get_advice_generator
from moodlog.db.database import Base, SessionLocal, engine
from moodlog.main import app

ADVICE_TEXT = (
    "You had a steady day.\n"
    "1. 🚶 Walk: Take a short walk after lunch\n"
    "2. **Sleep**: Keep the same bedtime\n"
    "Here's your tip for the day: \"Drink water\""
)


class StubAdvisor:
    """Records payloads and returns canned advice."""

    def __init__(self, text=ADVICE_TEXT):
        self.text = text
        self.payloads = []

    async def generate(self, payload: dict) -> str:
        self.payloads.append(payload)
        return self.text


@pytest.fixture(autouse=True)
def database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def advisor():
    return StubAdvisor()


@pytest.fixture
def client(advisor):
    app.dependency_overrides.clear()
    app.dependency_overrides[get_advice_generator] = lambda: advisor

    test_client = TestClient(app)
    yield test_client

    app.dependency_overrides.clear()


def make_entry_payload(**overrides) -> dict:
    payload = {
        "date": "2024-03-05T09:30:00",
        "mood_rating": 7,
        "anxiety_level": 3,
        "sleep_hours": 7.5,
        "sleep_quality": 6,
        "stress_level": 4,
        "physical_activity": "WALKING",
        "activity_duration": 30,
        "social_interaction": 5,
        "depression_symptoms": False,
        "depression_symptom_severity": 0,
        "anxiety_symptoms": True,
        "anxiety_symptom_severity": 4,
        "notes": "Quiet day",
    }
    payload.update(overrides)
    return payload


def sign_up(client, email="alex@example.com", name="Alex", timezone="UTC") -> dict:
    """Create a user and return Authorization headers for them."""
    response = client.post("/users", json={"name": name, "email": email, "timezone": timezone})
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    return sign_up(client)
