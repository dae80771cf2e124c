"""
Session creation.

Every sign-in path creates its session here so the before-create hook always
runs before the record is persisted.
"""

import logging
from typing import Optional
from uuid import UUID

from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.base import utcnow
from orgauth.domain.entities import Session

logger = logging.getLogger(__name__)


async def create_session(
    uow: UnitOfWork,
    config,
    user_id: UUID,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Session:
    """
    Build, augment and persist a new session.

    Args:
        uow: Active unit of work (caller commits)
        config: AuthConfig providing session lifetime and hooks
        user_id: Owner of the session
        ip_address: Client address, informational
        user_agent: Client user agent, informational

    Returns:
        The persisted Session
    """
    session = Session(
        user_id=user_id,
        ip_address=ip_address,
        user_agent=(user_agent or "")[:512] or None,
        expires_at=utcnow() + config.session.expires_in,
    )

    hook = config.hooks.before_session_create
    if hook is not None:
        session = await hook(session, uow)

    session = await uow.sessions.create(session)
    logger.info("Session %s created for user %s", session.id, user_id)
    return session
