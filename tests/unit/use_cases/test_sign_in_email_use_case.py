from dataclasses import replace
from uuid import uuid4

import pytest

from orgauth.api.utils.jwt import verify_session_token
from orgauth.app.hooks import before_session_create
from orgauth.app.services.passwords import hash_password
from orgauth.app.use_cases.auth import SignInEmailUseCase
from orgauth.domain.entities import Membership, MembershipRole, Organization, User


@pytest.fixture
def verified_user():
    return User(
        id=uuid4(),
        email="alice@example.com",
        name="Alice",
        password_hash=hash_password("password123"),
        email_verified=True,
    )


@pytest.mark.asyncio
async def test_sign_in_opens_session_tagged_with_organization(
    mock_uow, auth_config, verified_user
):
    organization = Organization(id=uuid4(), name="Acme", slug="acme")
    mock_uow.users.get_by_email.return_value = verified_user
    mock_uow.memberships.get_latest_by_user_id.return_value = Membership(
        user_id=verified_user.id, organization_id=organization.id, role=MembershipRole.owner
    )
    mock_uow.organizations.get_by_id.return_value = organization
    hooks = replace(auth_config.hooks, before_session_create=before_session_create)
    config = replace(auth_config, hooks=hooks)

    result = await SignInEmailUseCase(mock_uow, config).execute(
        "alice@example.com", "password123", "127.0.0.1", "pytest"
    )

    assert result.is_ok()
    response = result.value
    assert response.login_method == "email"
    assert response.session.active_organization_id == str(organization.id)
    assert response.user.id == str(verified_user.id)

    payload = verify_session_token(response.token, config.secret)
    assert payload["sid"] == response.session.id
    assert payload["sub"] == str(verified_user.id)

    session = mock_uow.sessions.create.call_args.args[0]
    assert session.ip_address == "127.0.0.1"
    assert session.user_agent == "pytest"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_sign_in_without_organization(mock_uow, auth_config, verified_user):
    mock_uow.users.get_by_email.return_value = verified_user
    config = replace(
        auth_config, hooks=replace(auth_config.hooks, before_session_create=before_session_create)
    )

    result = await SignInEmailUseCase(mock_uow, config).execute(
        "alice@example.com", "password123"
    )

    assert result.is_ok()
    assert result.value.session.active_organization_id is None


@pytest.mark.asyncio
async def test_sign_in_wrong_password(mock_uow, auth_config, verified_user):
    mock_uow.users.get_by_email.return_value = verified_user

    result = await SignInEmailUseCase(mock_uow, auth_config).execute(
        "alice@example.com", "wrong-password"
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.create.assert_not_called()


@pytest.mark.asyncio
async def test_sign_in_unknown_email(mock_uow, auth_config):
    result = await SignInEmailUseCase(mock_uow, auth_config).execute(
        "nobody@example.com", "password123"
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_sign_in_unverified_email(mock_uow, auth_config, verified_user):
    verified_user.email_verified = False
    mock_uow.users.get_by_email.return_value = verified_user

    result = await SignInEmailUseCase(mock_uow, auth_config).execute(
        "alice@example.com", "password123"
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_NOT_VERIFIED"
    mock_uow.sessions.create.assert_not_called()
