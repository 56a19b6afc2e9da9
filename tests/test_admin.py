from __future__ import annotations

import base64

from fastapi.security import HTTPBasicCredentials

from revenue_tracker.core import security


def _basic(username: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


def test_admin_stores_value_per_user(client, admin_store):
    r = client.post("/admin", json={"value": "bar"}, headers=_basic("foo", "bar"))
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

    r = client.post("/admin", json={"value": "other"}, headers=_basic("manu", "123"))
    assert r.status_code == 200

    assert admin_store.get("foo") == "bar"
    assert admin_store.get("manu") == "other"


def test_admin_requires_credentials(client, admin_store):
    r = client.post("/admin", json={"value": "bar"})
    assert r.status_code == 401
    assert r.headers["www-authenticate"].startswith("Basic")
    assert r.json()["status"] == "error"
    assert admin_store.get("foo") is None


def test_admin_rejects_wrong_password(client, admin_store):
    r = client.post("/admin", json={"value": "bar"}, headers=_basic("foo", "wrong"))
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == 'Basic realm="Authorization Required"'
    assert admin_store.get("foo") is None


def test_admin_requires_value(client):
    r = client.post("/admin", json={}, headers=_basic("foo", "bar"))
    assert r.status_code == 400
    assert "value" in r.json()["error"]


def test_authenticate():
    accounts = {"foo": "bar"}
    assert security.authenticate(HTTPBasicCredentials(username="foo", password="bar"), accounts) == "foo"
    assert security.authenticate(HTTPBasicCredentials(username="foo", password="baz"), accounts) is None
    assert security.authenticate(HTTPBasicCredentials(username="nobody", password="bar"), accounts) is None
