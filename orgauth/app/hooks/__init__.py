"""
Auth lifecycle hooks.

AuthHooks bundles every hook the use cases fire. The declared type of each
field states its failure policy: BestEffort hooks never fail the primary
operation, Propagating hooks hand their failure to the caller.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from orgauth.app.services.email_dispatcher import IEmailDispatcher
from orgauth.app.services.side_effects import BestEffort, Propagating
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.entities import Session

from .email_hooks import (
    UserLinkEmailData,
    make_reset_password_sender,
    make_verification_email_sender,
)
from .organization_hooks import (
    InvitationEmailData,
    OrganizationCreated,
    invitation_link,
    make_invitation_email_sender,
    tag_creator_sessions,
)
from .session_hooks import before_session_create, get_active_organization

SessionHook = Callable[[Session, UnitOfWork], Awaitable[Session]]


@dataclass(frozen=True)
class AuthHooks:
    send_verification_email: Propagating[None]
    send_reset_password: Propagating[None]
    send_invitation_email: Propagating[None]
    after_organization_create: Optional[BestEffort[int]] = None
    before_session_create: Optional[SessionHook] = None


def build_auth_hooks(base_url: str, dispatcher: IEmailDispatcher) -> AuthHooks:
    return AuthHooks(
        send_verification_email=Propagating(make_verification_email_sender(dispatcher)),
        send_reset_password=Propagating(make_reset_password_sender(dispatcher)),
        send_invitation_email=Propagating(make_invitation_email_sender(base_url, dispatcher)),
        after_organization_create=BestEffort(
            tag_creator_sessions, name="tag creator sessions"
        ),
        before_session_create=before_session_create,
    )


__all__ = [
    "AuthHooks",
    "InvitationEmailData",
    "OrganizationCreated",
    "UserLinkEmailData",
    "before_session_create",
    "build_auth_hooks",
    "get_active_organization",
    "invitation_link",
    "tag_creator_sessions",
]
