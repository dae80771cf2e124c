from unittest.mock import AsyncMock, MagicMock

import pytest

from orgauth.app.auth_config import AuthConfig
from orgauth.app.hooks import AuthHooks
from orgauth.app.services.side_effects import BestEffort, Propagating


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    savepoint = MagicMock()
    savepoint.__aenter__ = AsyncMock(return_value=savepoint)
    savepoint.__aexit__ = AsyncMock(return_value=False)
    uow.savepoint = MagicMock(return_value=savepoint)

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.get_by_verification_token = AsyncMock(return_value=None)

    uow.accounts = MagicMock()
    uow.accounts.get_by_provider = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)

    uow.organizations = MagicMock()
    uow.organizations.get_by_id = AsyncMock(return_value=None)
    uow.organizations.get_by_slug = AsyncMock(return_value=None)
    uow.organizations.create = AsyncMock(side_effect=lambda organization: organization)

    uow.memberships = MagicMock()
    uow.memberships.get_by_user_and_organization = AsyncMock(return_value=None)
    uow.memberships.get_latest_by_user_id = AsyncMock(return_value=None)
    uow.memberships.count_by_organization_id = AsyncMock(return_value=0)
    uow.memberships.create = AsyncMock(side_effect=lambda membership: membership)

    uow.invitations = MagicMock()
    uow.invitations.get_by_id = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_organization_and_email = AsyncMock(return_value=None)
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.update = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.delete = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.update = AsyncMock(side_effect=lambda session: session)
    uow.sessions.set_active_organization_for_user = AsyncMock(return_value=1)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)
    uow.sessions.revoke_by_id = AsyncMock(return_value=True)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.update = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.invalidate_for_user = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def hook_mocks():
    """The raw callables behind each hook, for call assertions"""
    return {
        "send_verification_email": AsyncMock(),
        "send_reset_password": AsyncMock(),
        "send_invitation_email": AsyncMock(),
        "after_organization_create": AsyncMock(return_value=1),
        "before_session_create": AsyncMock(side_effect=lambda session, uow: session),
    }


@pytest.fixture
def auth_config(hook_mocks):
    hooks = AuthHooks(
        send_verification_email=Propagating(hook_mocks["send_verification_email"]),
        send_reset_password=Propagating(hook_mocks["send_reset_password"]),
        send_invitation_email=Propagating(hook_mocks["send_invitation_email"]),
        after_organization_create=BestEffort(hook_mocks["after_organization_create"]),
        before_session_create=hook_mocks["before_session_create"],
    )
    return AuthConfig(
        base_url="https://app.example.com",
        secret="unit-test-secret",
        hooks=hooks,
        trusted_origins=("https://app.example.com",),
    )
