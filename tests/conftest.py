"""Pytest fixtures for testing"""

import pytest
from datetime import datetime
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from household_ledger.api.main import create_app
from household_ledger.api.dependencies import get_now
from household_ledger.infrastructure.database.models import Base
from household_ledger.infrastructure.database.session import get_db
from household_ledger.domain.models import (
    ALL_CATEGORIES,
    Budget,
    Category,
    CategoryScope,
    Expense,
    Income,
    Period,
)


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed clock for API tests
NOW = datetime(2023, 7, 20, 12, 0, 0)
USER = "user_alice"


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a frozen clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: NOW
    return TestClient(app, headers={"X-User-ID": USER})


@pytest.fixture
def july_expenses() -> list[Expense]:
    """July 2023 household spending across several categories"""
    return [
        Expense("e1", 4250, "Grocery shopping", Category.FOOD, datetime(2023, 7, 15)),
        Expense("e2", 1099, "Movie ticket", Category.ENTERTAINMENT, datetime(2023, 7, 18)),
        Expense("e3", 3500, "Gas", Category.TRANSPORT, datetime(2023, 7, 20)),
        Expense(
            "e4", 120000, "Rent", Category.HOUSING, datetime(2023, 7, 1),
            recurring=True, recurring_frequency=Period.MONTHLY,
        ),
        Expense("e5", 7500, "Electricity bill", Category.UTILITIES, datetime(2023, 7, 10)),
    ]


@pytest.fixture
def july_incomes() -> list[Income]:
    return [
        Income("i1", 300000, "Salary", datetime(2023, 7, 1), recurring=True, recurring_frequency=Period.MONTHLY),
        Income("i2", 20000, "Freelance work", datetime(2023, 7, 15)),
    ]


@pytest.fixture
def food_budget() -> Budget:
    return Budget("b-food", CategoryScope(Category.FOOD), 40000, Period.MONTHLY, datetime(2023, 7, 1))


@pytest.fixture
def total_budget() -> Budget:
    return Budget("b-total", ALL_CATEGORIES, 250000, Period.MONTHLY, datetime(2023, 7, 1))
