"""Shared pytest fixtures for all test suites."""

import uuid
from collections.abc import Generator
from datetime import datetime, timezone

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from wanderai.db.context import RequestContext
from wanderai.db.models import Base
from wanderai.models.common import BudgetLevel
from wanderai.models.itinerary import Activity, DayItinerary, Itinerary, TravelPreferences


@pytest.fixture
def ctx() -> RequestContext:
    """Request context for a test user."""
    return RequestContext(user_id=uuid.UUID("00000000-0000-0000-0000-000000000002"))


@pytest.fixture
def other_ctx() -> RequestContext:
    """Request context for a second user."""
    return RequestContext(user_id=uuid.UUID("00000000-0000-0000-0000-000000000099"))


@pytest.fixture
def sample_itinerary() -> Itinerary:
    """Two-day Lisbon itinerary with stable activity ids."""
    return Itinerary(
        id="itin-lisbon",
        destination="Lisbon",
        start_date="2025-06-10",
        end_date="2025-06-11",
        preferences=TravelPreferences(
            budget=BudgetLevel.mid_range, interests=["Food", "History", "Art", "Music"]
        ),
        days=[
            DayItinerary(
                day=1,
                date="Tuesday, June 10, 2025",
                total_estimated_cost="$100-150",
                activities=[
                    Activity(
                        id="a-lunch",
                        time="12:30 PM - 2:00 PM",
                        title="Lunch at Time Out Market",
                        location="Cais do Sodré",
                        cost_estimate="$25-38",
                        category="Food",
                    ),
                    Activity(
                        id="a-castle",
                        time="9:00 AM - 11:30 AM",
                        title="São Jorge Castle",
                        location="Alfama",
                        cost_estimate="$15-23",
                        category="Culture",
                    ),
                    Activity(
                        id="a-fado",
                        time="8:00 PM - 10:00 PM",
                        title="Fado night",
                        location="Bairro Alto",
                        cost_estimate="$35-53",
                        category="Culture",
                        selected=False,
                    ),
                ],
            ),
            DayItinerary(
                day=2,
                date="Wednesday, June 11, 2025",
                total_estimated_cost="$100-150",
                activities=[
                    Activity(
                        id="a-belem",
                        time="10:00 AM - 12:00 PM",
                        title="Belém Tower",
                        location="Belém",
                        cost_estimate="$20-30",
                        category="Culture",
                        selected=True,
                    ),
                ],
            ),
        ],
        total_budget="$200-300",
        created_at=datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def sqlite_engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Generator[Session, None, None]:
    """Session bound to the in-memory SQLite engine."""
    with Session(sqlite_engine, expire_on_commit=False) as session:
        yield session
