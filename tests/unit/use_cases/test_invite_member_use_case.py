from datetime import timedelta
from uuid import uuid4

import pytest

from orgauth.app.hooks import InvitationEmailData
from orgauth.app.services.email_dispatcher import EmailDispatchError
from orgauth.app.use_cases.organizations import InviteMemberUseCase
from orgauth.domain.base import utcnow
from orgauth.domain.entities import (
    Invitation,
    Membership,
    MembershipRole,
    Organization,
    User,
)


@pytest.fixture
def organization():
    return Organization(id=uuid4(), name="Acme", slug="acme")


@pytest.fixture
def inviter():
    return User(id=uuid4(), email="alice@example.com", name="Alice")


@pytest.fixture
def setup(mock_uow, organization, inviter):
    def _setup(role=MembershipRole.owner):
        mock_uow.organizations.get_by_id.return_value = organization
        mock_uow.users.get_by_id.return_value = inviter
        mock_uow.memberships.get_by_user_and_organization.return_value = Membership(
            user_id=inviter.id, organization_id=organization.id, role=role
        )
        mock_uow.memberships.count_by_organization_id.return_value = 1

    return _setup


@pytest.mark.asyncio
async def test_invite_sends_one_email_and_commits(
    mock_uow, auth_config, hook_mocks, setup, organization, inviter
):
    setup()

    async def send(data):
        # Invitation is already stored when the email goes out
        mock_uow.commit.assert_awaited_once()

    hook_mocks["send_invitation_email"].side_effect = send

    result = await InviteMemberUseCase(mock_uow, auth_config).execute(
        inviter.id, organization.id, "Bob@Example.com", "member"
    )

    assert result.is_ok()
    response = result.value
    assert response.email == "bob@example.com"
    assert response.status == "pending"
    assert response.role == "member"

    invitation: Invitation = mock_uow.invitations.create.call_args.args[0]
    expected_expiry = utcnow() + timedelta(hours=48)
    assert abs((invitation.expires_at - expected_expiry).total_seconds()) < 60

    hook_mocks["send_invitation_email"].assert_called_once()
    data: InvitationEmailData = hook_mocks["send_invitation_email"].call_args.args[0]
    assert data.id == invitation.id
    assert data.email == "bob@example.com"
    assert data.inviter_name == "Alice"
    assert data.inviter_email == "alice@example.com"
    assert data.organization_name == "Acme"
    mock_uow.commit.assert_called_once()
    mock_uow.invitations.delete.assert_not_called()


@pytest.mark.asyncio
async def test_admin_may_invite(mock_uow, auth_config, setup, organization, inviter):
    setup(role=MembershipRole.admin)

    result = await InviteMemberUseCase(mock_uow, auth_config).execute(
        inviter.id, organization.id, "bob@example.com", "admin"
    )

    assert result.is_ok()


@pytest.mark.asyncio
async def test_member_may_not_invite(mock_uow, auth_config, hook_mocks, setup, organization, inviter):
    setup(role=MembershipRole.member)

    result = await InviteMemberUseCase(mock_uow, auth_config).execute(
        inviter.id, organization.id, "bob@example.com", "member"
    )

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"
    hook_mocks["send_invitation_email"].assert_not_called()


@pytest.mark.asyncio
async def test_admin_may_not_invite_owner(mock_uow, auth_config, setup, organization, inviter):
    setup(role=MembershipRole.admin)

    result = await InviteMemberUseCase(mock_uow, auth_config).execute(
        inviter.id, organization.id, "bob@example.com", "owner"
    )

    assert result.is_err()
    assert result.error.code == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_invalid_role(mock_uow, auth_config, organization, inviter):
    result = await InviteMemberUseCase(mock_uow, auth_config).execute(
        inviter.id, organization.id, "bob@example.com", "superuser"
    )

    assert result.is_err()
    assert result.error.code == "INVALID_ROLE"


@pytest.mark.asyncio
async def test_non_member_may_not_invite(mock_uow, auth_config, organization, inviter):
    mock_uow.organizations.get_by_id.return_value = organization

    result = await InviteMemberUseCase(mock_uow, auth_config).execute(
        inviter.id, organization.id, "bob@example.com", "member"
    )

    assert result.is_err()
    assert result.error.code == "NOT_A_MEMBER"


@pytest.mark.asyncio
async def test_pending_invitation_exists(mock_uow, auth_config, setup, organization, inviter):
    setup()
    mock_uow.invitations.get_pending_by_organization_and_email.return_value = Invitation(
        organization_id=organization.id,
        inviter_id=inviter.id,
        email="bob@example.com",
        role=MembershipRole.member,
        expires_at=utcnow() + timedelta(hours=1),
    )

    result = await InviteMemberUseCase(mock_uow, auth_config).execute(
        inviter.id, organization.id, "bob@example.com", "member"
    )

    assert result.is_err()
    assert result.error.code == "INVITE_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_membership_limit(mock_uow, auth_config, setup, organization, inviter):
    setup()
    mock_uow.memberships.count_by_organization_id.return_value = 100

    result = await InviteMemberUseCase(mock_uow, auth_config).execute(
        inviter.id, organization.id, "bob@example.com", "member"
    )

    assert result.is_err()
    assert result.error.code == "MEMBERSHIP_LIMIT_REACHED"
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_email_failure_discards_invitation(
    mock_uow, auth_config, hook_mocks, setup, organization, inviter
):
    setup()
    hook_mocks["send_invitation_email"].side_effect = EmailDispatchError("down")

    result = await InviteMemberUseCase(mock_uow, auth_config).execute(
        inviter.id, organization.id, "bob@example.com", "member"
    )

    assert result.is_err()
    assert result.error.code == "INVITATION_EMAIL_FAILED"
    invitation = mock_uow.invitations.create.call_args.args[0]
    mock_uow.invitations.delete.assert_awaited_once_with(invitation)
    assert mock_uow.commit.await_count == 2
