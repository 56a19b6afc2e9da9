from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, delete

from revenue_tracker.core.config import settings
from revenue_tracker.main import app
from revenue_tracker.models import RevenueEvent
from revenue_tracker.services.admin_store import AdminStore

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture(scope="session")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite has no schemas; attach a database under the schema name instead.
    @event.listens_for(engine, "connect")
    def _attach_schema(dbapi_connection, _connection_record) -> None:
        dbapi_connection.execute(f"ATTACH DATABASE ':memory:' AS {settings.DB_SCHEMA}")

    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture(scope="function")
def db(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
        session.rollback()
        session.exec(delete(RevenueEvent))
        session.commit()


@pytest.fixture(scope="function")
def admin_store() -> AdminStore:
    return AdminStore()


@pytest.fixture(scope="function")
def client(engine, db, admin_store) -> Generator[TestClient, None, None]:
    # The lifespan keeps an engine it finds on app.state and leaves disposal to us.
    app.state.engine = engine
    app.state.admin_store = admin_store
    with TestClient(app) as c:
        yield c
    app.state.engine = None
    app.state.admin_store = None


@pytest.fixture
def purchase_payload() -> dict[str, Any]:
    return json.loads((TESTDATA / "test_purchase.json").read_text())
