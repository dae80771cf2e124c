"""
Organization lifecycle hooks.

- tag_creator_sessions: after an organization is created, point the creator's
  sessions at it
- invitation email: render and send the deep link for a new invitation
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable
from uuid import UUID

from orgauth.app.services.email_dispatcher import EmailMessage, IEmailDispatcher
from orgauth.app.services.email_templates import render_organization_invitation
from orgauth.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

INVITATION_SUBJECT = "You've been invited to join our organization"


@dataclass(frozen=True)
class OrganizationCreated:
    organization_id: UUID
    user_id: UUID


@dataclass(frozen=True)
class InvitationEmailData:
    id: UUID
    email: str
    inviter_name: str
    inviter_email: str
    organization_name: str


async def tag_creator_sessions(data: OrganizationCreated, uow: UnitOfWork) -> int:
    updated = await uow.sessions.set_active_organization_for_user(
        data.user_id, data.organization_id
    )
    await uow.commit()
    logger.info(
        "Set active organization %s on %d session(s) of user %s",
        data.organization_id,
        updated,
        data.user_id,
    )
    return updated


def invitation_link(base_url: str, invitation_id: UUID) -> str:
    return f"{base_url.rstrip('/')}/invitation/{invitation_id}"


def make_invitation_email_sender(
    base_url: str, dispatcher: IEmailDispatcher
) -> Callable[[InvitationEmailData], Awaitable[None]]:
    async def send_invitation_email(data: InvitationEmailData) -> None:
        invite_link = invitation_link(base_url, data.id)
        html = render_organization_invitation(
            email=data.email,
            invited_by_username=data.inviter_name,
            invited_by_email=data.inviter_email,
            team_name=data.organization_name,
            invite_link=invite_link,
        )
        await dispatcher.send_email(
            EmailMessage(to=data.email, subject=INVITATION_SUBJECT, html=html)
        )
        logger.info("Invitation %s sent to %s", data.id, data.email)

    return send_invitation_email
