import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.main import app
from app.database.engine import get_db
from app.crud.history import history_crud
from app.crud.volunteer import volunteer_crud
from app.schemas.history import HistoryEntryCreate, HistoryCompletion
from app.schemas.volunteer import VolunteerCreate

# Test database setup
@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session

@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_db] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

@pytest.fixture(name="entry_payload")
def entry_payload_fixture():
    return {
        "volunteerId": 1,
        "eventId": 2,
        "eventName": "Food Drive",
        "eventDate": "2024-01-01",
        "eventLocation": "Hall"
    }

@pytest.fixture(name="volunteer_payload")
def volunteer_payload_fixture():
    return {
        "fullName": "Ada Lovelace",
        "address1": "1 Main St",
        "city": "Houston",
        "state": "TX",
        "zipCode": "77001",
        "skills": ["First Aid", "Cooking"],
        "preferences": "Weekend mornings",
        "availability": ["2024-02-01", "2024-02-08"]
    }

@pytest.fixture(name="make_entry")
def make_entry_fixture(session: Session):
    """Factory that stores a history entry, optionally completing it."""
    def _make_entry(
        volunteer_id=1,
        event_id=1,
        event_date="2024-01-01",
        hours=None,
        rating=None,
        skills=None,
        status="scheduled"
    ):
        entry = history_crud.create_history_entry(session, HistoryEntryCreate(
            volunteer_id=volunteer_id,
            event_id=event_id,
            event_name=f"Event {event_id}",
            event_date=event_date,
            event_location="Community Center",
            status=status
        ))
        if hours is not None:
            entry = history_crud.complete_event(session, entry.id, HistoryCompletion(
                hours_worked=hours,
                rating=rating,
                skills_used=skills or []
            ))
        return entry

    return _make_entry

@pytest.fixture(name="volunteer")
def volunteer_fixture(session: Session, volunteer_payload):
    return volunteer_crud.create_volunteer(session, VolunteerCreate(**volunteer_payload))
