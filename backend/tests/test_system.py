from fastapi.testclient import TestClient
from scavenger.main import app

client = TestClient(app)

def test_health_ok():
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "request_id" in data

def test_request_id_is_echoed():
    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"
    assert r.json()["request_id"] == "abc-123"

def test_version_ok():
    r = client.get("/version")
    assert r.status_code == 200
    data = r.json()
    assert "version" in data and "git_sha" in data

def test_intro_lists_instructions():
    r = client.get("/api/intro")
    assert r.status_code == 200
    body = r.json()
    assert body["title"]
    assert len(body["instructions"]) > 0


async def _explode():
    raise RuntimeError("kaboom")

if not any(getattr(r, "path", None) == "/_test/explode" for r in app.routes):
    app.add_api_route("/_test/explode", _explode, methods=["GET"])


def test_unhandled_error_is_json_500_with_request_id():
    c = TestClient(app, raise_server_exceptions=False)
    r = c.get("/_test/explode", headers={"X-Request-ID": "rid-42"})
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error"}
    assert r.headers["X-Request-ID"] == "rid-42"
