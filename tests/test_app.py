from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from revenue_tracker import backend_pre_start
from revenue_tracker import main as app_main
from revenue_tracker.api import deps
from revenue_tracker.core.config import Settings


def test_cors_preflight_echoes_origin_with_credentials(client):
    r = client.options(
        "/api/v1/revenue/by_date",
        headers={
            "Origin": "https://billing.example.com",
            "Access-Control-Request-Method": "PATCH",
            "Access-Control-Request-Headers": "credentials, Access-Control-Allow-Headers",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "https://billing.example.com"
    assert r.headers["access-control-allow-credentials"] == "true"
    for method in ("OPTIONS", "PATCH", "DELETE"):
        assert method in r.headers["access-control-allow-methods"]


def test_unknown_route_uses_error_envelope(client):
    r = client.get("/api/v1/nope")
    assert r.status_code == 404
    assert r.json() == {"status": "error", "error": "Not Found"}


def test_http_error_handler_keeps_headers():
    exc = HTTPException(status_code=401, detail="Unauthorized", headers={"WWW-Authenticate": "Basic"})
    resp = asyncio.run(app_main.http_error_handler(None, exc))  # type: ignore[arg-type]
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Basic"


def test_describe_validation_error():
    errors = [
        {"loc": ("body", "products", 0, "amount"), "msg": "Field required"},
        {"loc": ("body", "currency"), "msg": "Field required"},
    ]
    assert app_main.describe_validation_error(errors) == "products.0.amount: Field required"
    assert app_main.describe_validation_error([{"loc": ("body",), "msg": "Field required"}]) == "Field required"
    assert app_main.describe_validation_error([]) == "malformed request"


def test_lifespan_creates_and_disposes_engine(engine, monkeypatch):
    disposed = []
    monkeypatch.setattr(app_main, "create_db_engine", lambda: engine)
    monkeypatch.setattr(engine, "dispose", lambda: disposed.append(True))

    app = app_main.create_app()
    with TestClient(app):
        assert app.state.engine is engine
        assert app.state.admin_store is not None
    assert disposed == [True]
    assert app.state.engine is None


def test_get_db_uses_engine_from_app_state(engine):
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(engine=engine)))
    gen = deps.get_db(request)  # type: ignore[arg-type]
    session = next(gen)
    assert isinstance(session, Session)
    assert session.get_bind() is engine
    session.exec(select(1))
    gen.close()


def test_pre_start_init_checks_connection(engine):
    backend_pre_start.init(engine)


def test_settings_compose_database_uri():
    cfg = Settings(POSTGRES_SERVER="db", POSTGRES_USER="rt", POSTGRES_PASSWORD="pw", POSTGRES_DB="revenue")
    assert cfg.SQLALCHEMY_DATABASE_URI == "postgresql+psycopg://rt:pw@db:5432/revenue"

    cfg = Settings(DATABASE_URL="postgresql+psycopg://localhost/revenue_tracker_test")
    assert cfg.SQLALCHEMY_DATABASE_URI == "postgresql+psycopg://localhost/revenue_tracker_test"


def test_settings_parse_comma_separated_lists():
    cfg = Settings(CORS_ALLOW_METHODS="GET, POST")
    assert cfg.CORS_ALLOW_METHODS == ["GET", "POST"]


def test_settings_reject_default_secrets_outside_local():
    with pytest.raises(ValueError):
        Settings(ENVIRONMENT="production", POSTGRES_PASSWORD="changethis")
    with pytest.warns(UserWarning):
        Settings(ENVIRONMENT="local", ADMIN_ACCOUNTS={"foo": "changethis"})
