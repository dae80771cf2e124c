import re

import pytest
from httpx import AsyncClient
from sqlmodel import select

from orgauth.domain.entities import Session
from tests.utils.auth_flow import DEFAULT_PASSWORD, bearer, sign_up_verified, signed_in_user


def provider_button(body: str, provider: str) -> str:
    match = re.search(rf'<a[^>]*data-provider="{provider}"[^>]*>(.*?)</a>', body, re.S)
    assert match, f"No {provider} button"
    return match.group(1)


@pytest.mark.asyncio
async def test_login_page_lists_configured_providers(client: AsyncClient):
    response = await client.get("/login")

    assert response.status_code == 200
    assert 'data-provider="github"' in response.text
    assert 'data-provider="google"' not in response.text
    assert 'role="alert"' not in response.text


@pytest.mark.asyncio
async def test_oauth_failure_notification(client: AsyncClient):
    response = await client.get("/login", params={"error": "oauth_failed"})

    assert response.status_code == 200
    assert 'role="alert"' in response.text
    assert "Social sign-in failed. Please try again." in response.text


@pytest.mark.asyncio
async def test_unknown_error_code_is_not_echoed(client: AsyncClient):
    response = await client.get("/login", params={"error": "<script>alert(1)</script>"})

    assert 'role="alert"' not in response.text
    assert "<script>alert(1)</script>" not in response.text


@pytest.mark.asyncio
async def test_last_used_badge(client: AsyncClient):
    response = await client.get(
        "/login", headers={"Cookie": "orgauth.last_used_login_method=github"}
    )

    assert "last used" in provider_button(response.text, "github")
    assert response.text.count("last used") == 1


@pytest.mark.asyncio
async def test_short_password_is_rejected_before_sign_in(
    client: AsyncClient, mailbox, db_session
):
    await sign_up_verified(client, mailbox, "alice@example.com")

    response = await client.post(
        "/login", data={"email": "alice@example.com", "password": "short"}
    )

    assert response.status_code == 422
    assert 'data-field="password"' in response.text
    assert "Password must be at least 8 characters." in response.text
    assert 'value="alice@example.com"' in response.text

    sessions = (await db_session.exec(select(Session))).all()
    assert sessions == []


@pytest.mark.asyncio
async def test_invalid_email_message(client: AsyncClient):
    response = await client.post(
        "/login", data={"email": "not-an-email", "password": DEFAULT_PASSWORD}
    )

    assert response.status_code == 422
    assert "Please enter a valid email address." in response.text
    assert 'data-field="password"' not in response.text


@pytest.mark.asyncio
async def test_wrong_password_notification(client: AsyncClient, mailbox):
    await sign_up_verified(client, mailbox, "alice@example.com")

    response = await client.post(
        "/login", data={"email": "alice@example.com", "password": "WrongPass123!"}
    )

    assert response.status_code == 401
    assert 'role="alert"' in response.text
    assert "Invalid email or password." in response.text


@pytest.mark.asyncio
async def test_sign_in_redirects_to_invitation_with_accepted_flag(
    client: AsyncClient, mailbox
):
    await sign_up_verified(client, mailbox, "alice@example.com")

    response = await client.post(
        "/login",
        data={
            "email": "alice@example.com",
            "password": DEFAULT_PASSWORD,
            "redirect_to": "/invitation/abc",
        },
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/invitation/abc?accepted=true"
    cookies = response.headers.get_list("set-cookie")
    assert any(c.startswith("orgauth.session_token=") and "HttpOnly" in c for c in cookies)
    assert any(c.startswith("orgauth.last_used_login_method=email") for c in cookies)


@pytest.mark.asyncio
async def test_offsite_redirect_falls_back_to_dashboard(client: AsyncClient, mailbox):
    await sign_up_verified(client, mailbox, "alice@example.com")

    response = await client.post(
        "/login",
        data={
            "email": "alice@example.com",
            "password": DEFAULT_PASSWORD,
            "redirect_to": "https://evil.example.com/phish",
        },
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"


@pytest.mark.asyncio
async def test_social_sign_in_redirects_to_provider(client: AsyncClient):
    response = await client.get(
        "/api/auth/sign-in/social/github", params={"callback_url": "/dashboard"}
    )

    assert response.status_code == 302
    assert response.headers["location"].startswith(
        "https://github.com/login/oauth/authorize?"
    )


@pytest.mark.asyncio
async def test_unconfigured_provider_redirects_to_login(client: AsyncClient):
    response = await client.get("/api/auth/sign-in/social/google")

    assert response.status_code == 302
    assert response.headers["location"] == "/login?error=oauth_failed"


@pytest.mark.asyncio
async def test_invitation_page_requires_sign_in(client: AsyncClient):
    response = await client.get("/invitation/abc")

    assert response.status_code == 302
    assert response.headers["location"] == "/login?redirect_to=%2Finvitation%2Fabc"


@pytest.mark.asyncio
async def test_invitation_page_after_sign_in(client: AsyncClient, mailbox):
    owner_token = await signed_in_user(client, mailbox, "owner@acme.com", name="Olivia")
    await client.post(
        "/api/auth/organization/create", json={"name": "Acme Corp"}, headers=bearer(owner_token)
    )
    invite = await client.post(
        "/api/auth/organization/invite-member",
        json={"email": "bob@example.com"},
        headers=bearer(owner_token),
    )
    invitation_id = invite.json()["id"]
    bob_token = await signed_in_user(client, mailbox, "bob@example.com")
    client.cookies.clear()

    page = await client.get(
        f"/invitation/{invitation_id}",
        params={"accepted": "true"},
        headers=bearer(bob_token),
    )

    assert page.status_code == 200
    assert "Join Acme Corp" in page.text
    assert "You are signed in" in page.text

    accept = await client.post(
        f"/invitation/{invitation_id}/accept", headers=bearer(bob_token)
    )

    assert accept.status_code == 303
    assert accept.headers["location"] == "/dashboard"
