"""
Session lifecycle hooks.

before_session_create runs on every new session, before it is persisted, and
tags it with the user's active organization.
"""

import logging
from typing import Optional
from uuid import UUID

from orgauth.app.services.side_effects import BestEffort
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.entities import Organization, Session

logger = logging.getLogger(__name__)


async def get_active_organization(uow: UnitOfWork, user_id: UUID) -> Optional[Organization]:
    """The organization of the user's most recent membership, if any"""
    async with uow.savepoint():
        membership = await uow.memberships.get_latest_by_user_id(user_id)
        if membership is None:
            return None
        return await uow.organizations.get_by_id(membership.organization_id)


# A failed lookup leaves the session untagged instead of blocking sign-in.
# The savepoint keeps the failed statement from poisoning the session insert.
lookup_active_organization = BestEffort(
    get_active_organization, name="active organization lookup"
)


async def before_session_create(session: Session, uow: UnitOfWork) -> Session:
    organization = await lookup_active_organization(uow, session.user_id)
    session.active_organization_id = organization.id if organization else None
    if organization is not None:
        logger.debug(
            "Session for user %s tagged with organization %s", session.user_id, organization.id
        )
    return session
