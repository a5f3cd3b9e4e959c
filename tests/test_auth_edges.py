from fastapi.testclient import TestClient
from liftlog.main import app
from liftlog.security import create_access_token

from conftest import auth_headers, new_user_id

client = TestClient(app)

def test_no_token_is_unauthorized():
    r = client.get("/workouts")
    assert r.status_code == 401
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Unauthorized"
    assert r.headers["WWW-Authenticate"] == "Bearer"

def test_token_expired():
    uid = new_user_id()
    H = auth_headers(uid)
    assert client.post("/workouts", headers=H, json={"started_at": "2025-01-10T08:00:00"}).status_code == 201
    # already-expired token for the same subject
    expired = create_access_token(uid, expires_minutes=-1)
    r = client.get("/workouts", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401

def test_token_signed_with_other_secret():
    from jose import jwt
    forged = jwt.encode({"sub": "u1", "exp": 4102444800}, "not-the-secret", algorithm="HS256")
    r = client.get("/workouts", headers={"Authorization": f"Bearer {forged}"})
    assert r.status_code == 401

def test_unauthorized_wins_over_invalid_body():
    r = client.post("/workouts", json={"name": "x" * 400})
    assert r.status_code == 401
    assert r.json()["code"] == "unauthorized"

def test_expired_token_via_patched_decoder(monkeypatch):
    from jose.exceptions import ExpiredSignatureError
    def fake_decode(_): raise ExpiredSignatureError()

    # deps.auth imports decode_token at import-time
    import liftlog.deps.auth as deps_auth
    monkeypatch.setattr(deps_auth, "decode_token", fake_decode)

    r = client.post("/workouts", headers=auth_headers(), json={"started_at": "2025-01-10T08:00:00"})
    assert r.status_code == 401, r.text

def test_unauthorized_wins_over_malformed_request():
    for method, path, kwargs in (
        ("GET", "/workouts/18446744073709551616", {}),
        ("DELETE", "/sets/abc", {}),
        ("POST", "/workouts", {"json": ["not", "an", "object"]}),
    ):
        r = client.request(method, path, **kwargs)
        assert r.status_code == 401, (path, r.text)
        assert r.json()["code"] == "unauthorized"
        assert r.headers["WWW-Authenticate"] == "Bearer"
