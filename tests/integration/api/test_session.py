from datetime import timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.app.services.token_codec import TokenCodec
from src.domain.base import to_timestamp, utcnow
from src.domain.entities import Session

EMPTY = {"None": []}
UNAUTHORIZED = {"error": "Unauthorized", "expires_at": 0, "data": EMPTY}


@pytest.mark.asyncio
async def test_login_then_session(client: AsyncClient, account, login):
    """Token from login opens the protected route and extends the session"""
    login_body = await login()
    token = login_body["data"]["Login"]["session_token"]

    response = await client.get(
        "/api/session", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["error"] == ""
    assert body["expires_at"] >= login_body["expires_at"]
    assert body["data"] == {
        "Session": {"account_name": "alice", "preferred_language": "de"}
    }


@pytest.mark.asyncio
async def test_session_without_authorization_header(client: AsyncClient):
    response = await client.get("/api/session")

    assert response.status_code == 200
    assert response.json() == UNAUTHORIZED


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "header",
    [
        "Basic YWxpY2U6cHc=",
        "Bearer",
        "bearer abc",
        "Bearer not-a-real-token",
        "Bearer abc+def/ghi=",
    ],
)
async def test_session_with_bad_authorization_header(client: AsyncClient, header):
    response = await client.get("/api/session", headers={"Authorization": header})

    assert response.status_code == 200
    assert response.json() == UNAUTHORIZED


@pytest.mark.asyncio
async def test_session_with_non_utf8_header(client: AsyncClient):
    response = await client.get(
        "/api/session", headers={"Authorization": b"Bearer \xff\xfe"}
    )

    assert response.status_code == 200
    assert response.json() == UNAUTHORIZED


@pytest.mark.asyncio
async def test_session_with_foreign_secret_token(client: AsyncClient, account, insert_rows):
    (session,) = await insert_rows(
        Session(account_id=account.id, expires_at=utcnow() + timedelta(minutes=30))
    )
    token = TokenCodec("not-the-server-secret").encode(session.id)

    response = await client.get(
        "/api/session", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.json() == UNAUTHORIZED


@pytest.mark.asyncio
async def test_session_with_tampered_token(client: AsyncClient, account, login):
    token = (await login())["data"]["Login"]["session_token"]
    tampered = ("B" if token[0] == "A" else "A") + token[1:]

    response = await client.get(
        "/api/session", headers={"Authorization": f"Bearer {tampered}"}
    )

    assert response.json() == UNAUTHORIZED


@pytest.mark.asyncio
async def test_session_unknown_session_id(client: AsyncClient, app):
    token = app.state.token_codec.encode(uuid4())

    response = await client.get(
        "/api/session", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.json() == UNAUTHORIZED


@pytest.mark.asyncio
async def test_session_expired(client: AsyncClient, app, account, insert_rows):
    """Expired is reported distinctly from Unauthorized"""
    (session,) = await insert_rows(
        Session(account_id=account.id, expires_at=utcnow() - timedelta(minutes=5))
    )
    token = app.state.token_codec.encode(session.id)

    response = await client.get(
        "/api/session", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200
    assert response.json() == {"error": "Expired", "expires_at": 0, "data": EMPTY}


@pytest.mark.asyncio
async def test_session_refresh_extends_expiry(
    client: AsyncClient, app, account, insert_rows, fetch_sessions, ttl
):
    old_expiry = utcnow() + timedelta(minutes=2)
    (session,) = await insert_rows(Session(account_id=account.id, expires_at=old_expiry))
    token = app.state.token_codec.encode(session.id)
    before = utcnow()

    response = await client.get(
        "/api/session", headers={"Authorization": f"Bearer {token}"}
    )

    body = response.json()
    assert body["error"] == ""
    assert body["expires_at"] >= to_timestamp(before + ttl)
    (stored,) = await fetch_sessions()
    assert stored.expires_at > old_expiry
    assert to_timestamp(stored.expires_at) == body["expires_at"]


@pytest.mark.asyncio
async def test_authenticated_request_sweeps_outdated_sessions(
    client: AsyncClient, account, login, insert_rows, fetch_sessions
):
    token = (await login())["data"]["Login"]["session_token"]
    await insert_rows(
        Session(account_id=account.id, expires_at=utcnow() - timedelta(hours=2)),
        Session(account_id=account.id, expires_at=utcnow() - timedelta(minutes=1)),
    )

    response = await client.get(
        "/api/session", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.json()["error"] == ""
    # the login session and the one still inside the grace window remain
    assert len(await fetch_sessions()) == 2
