import pytest
from httpx import AsyncClient

from tests.utils.auth_flow import bearer, sign_in, signed_in_user
from tests.utils.email_links import find_link, query_param

NEW_PASSWORD = "BrandNewPass456!"


async def request_reset_token(client: AsyncClient, mailbox, email: str) -> str:
    response = await client.post("/api/auth/request-password-reset", json={"email": email})
    assert response.status_code == 200
    link = find_link(mailbox.last_to(email).html, "/reset-password")
    assert link.startswith("http://test/reset-password?")
    return query_param(link, "token")


@pytest.mark.asyncio
async def test_reset_password_revokes_sessions(client: AsyncClient, mailbox):
    old_token = await signed_in_user(client, mailbox, "alice@example.com")
    client.cookies.clear()
    reset_token = await request_reset_token(client, mailbox, "alice@example.com")

    response = await client.post(
        "/api/auth/reset-password", json={"token": reset_token, "new_password": NEW_PASSWORD}
    )

    assert response.status_code == 200
    assert response.json()["status"] == "success"

    current = await client.get("/api/auth/get-session", headers=bearer(old_token))
    assert current.json() is None

    old_password = await client.post(
        "/api/auth/sign-in/email",
        json={"email": "alice@example.com", "password": "SecurePass123!"},
    )
    assert old_password.status_code == 401

    assert await sign_in(client, "alice@example.com", NEW_PASSWORD)


@pytest.mark.asyncio
async def test_reset_token_is_single_use(client: AsyncClient, mailbox):
    await signed_in_user(client, mailbox, "alice@example.com")
    reset_token = await request_reset_token(client, mailbox, "alice@example.com")
    payload = {"token": reset_token, "new_password": NEW_PASSWORD}

    first = await client.post("/api/auth/reset-password", json=payload)
    second = await client.post("/api/auth/reset-password", json=payload)

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "TOKEN_ALREADY_USED"


@pytest.mark.asyncio
async def test_unknown_email_gets_same_answer(client: AsyncClient, mailbox):
    await signed_in_user(client, mailbox, "alice@example.com")
    sent_before = len(mailbox.sent)

    known = await client.post(
        "/api/auth/request-password-reset", json={"email": "alice@example.com"}
    )
    unknown = await client.post(
        "/api/auth/request-password-reset", json={"email": "nobody@example.com"}
    )

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert len(mailbox.sent) == sent_before + 1


@pytest.mark.asyncio
async def test_invalid_reset_token(client: AsyncClient):
    response = await client.post(
        "/api/auth/reset-password", json={"token": "bogus", "new_password": NEW_PASSWORD}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_new_request_invalidates_earlier_link(client: AsyncClient, mailbox):
    await signed_in_user(client, mailbox, "alice@example.com")
    first = await request_reset_token(client, mailbox, "alice@example.com")
    second = await request_reset_token(client, mailbox, "alice@example.com")

    stale = await client.post(
        "/api/auth/reset-password", json={"token": first, "new_password": NEW_PASSWORD}
    )
    fresh = await client.post(
        "/api/auth/reset-password", json={"token": second, "new_password": NEW_PASSWORD}
    )

    assert stale.status_code == 400
    assert stale.json()["error"]["code"] == "TOKEN_ALREADY_USED"
    assert fresh.status_code == 200
