import pytest
from rtrie.engine import Engine
from rtrie_web.web import app as flask_app
import rtrie_web.web as webmod

@pytest.fixture
def client():
    eng = Engine(); eng.load("memory://")
    webmod._engine = eng
    yield flask_app.test_client()
    eng.shutdown()

@pytest.mark.e2e
def test_add_and_delete_items(client):
    rv = client.post("/api/items", json={"key": "Lisbon", "value": {"c": "PT"}, "id": "lis", "priority": 2})
    assert rv.status_code == 201
    assert rv.get_json() == {"ok": True, "prefixes": 6}
    client.post("/api/items", json={"key": "Lille", "value": {"c": "FR"}, "id": "lil"})

    assert client.get("/api/complete?q=li").get_json() == [{"c": "PT"}, {"c": "FR"}]

    rv = client.delete("/api/items?key=Lisbon&id=lis")
    assert rv.status_code == 200 and rv.get_json() == {"ok": True}
    assert client.get("/api/complete?q=li").get_json() == [{"c": "FR"}]

    rv = client.delete("/api/items", json={"key": "Lille", "id": "lil"})
    assert rv.status_code == 200
    assert client.get("/api/complete?q=li").get_json() == []

@pytest.mark.e2e
def test_missing_fields_are_bad_requests(client):
    rv = client.post("/api/items", json={"key": "Oslo", "value": 1})
    assert rv.status_code == 400
    assert rv.get_json()["ok"] is False

    assert client.delete("/api/items?key=Oslo").status_code == 400
    assert client.post("/api/items", json={"key": "Oslo", "value": 1, "id": "o", "priority": "high"}).status_code == 400
