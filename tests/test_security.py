from datetime import timedelta

import jwt
import pytest
from sqlalchemy.exc import OperationalError

from coffeechat.api.routes import messages as messages_routes
from coffeechat.core.config import settings
from coffeechat.core.errors import Unauthorized
from coffeechat.core.security import create_access_token, resolve_principal
from coffeechat.main import app


def test_resolve_principal_reads_subject():
    assert resolve_principal(create_access_token("user-alice")) == "user-alice"


def test_expired_token_is_rejected():
    token = create_access_token("user-alice", expires_delta=timedelta(seconds=-1))
    with pytest.raises(Unauthorized):
        resolve_principal(token)


def test_token_signed_with_another_secret_is_rejected():
    token = jwt.encode({"sub": "user-alice"}, "some-other-secret-that-is-long-enough", algorithm=settings.AUTH_ALGORITHM)
    with pytest.raises(Unauthorized):
        resolve_principal(token)


def test_token_without_subject_is_rejected():
    token = jwt.encode({"scope": "x"}, settings.AUTH_SECRET, algorithm=settings.AUTH_ALGORITHM)
    with pytest.raises(Unauthorized):
        resolve_principal(token)


def test_unknown_user_is_unauthorized(client):
    headers = {"Authorization": f"Bearer {create_access_token('user-ghost')}"}
    resp = client.get("/api/messages/conversations", headers=headers)
    assert resp.status_code == 401


def test_garbage_token_is_unauthorized(client):
    resp = client.get("/api/messages/conversations", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Authentication failed"}


def test_missing_token_is_unauthorized(client):
    resp = client.get("/api/messages/conversations")
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Authentication required"}


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_app_title_comes_from_settings():
    assert app.title == settings.APP_NAME


def test_store_failure_is_rendered_as_internal_error(client, auth, alice, monkeypatch):
    def unavailable(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("database is unavailable"))

    monkeypatch.setattr(messages_routes, "list_conversations", unavailable)

    resp = client.get("/api/messages/conversations", headers=auth(alice))

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}
