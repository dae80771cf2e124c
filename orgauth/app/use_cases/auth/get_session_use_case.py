from uuid import UUID

from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.base import utcnow
from orgauth.result import Error, Result, Return

from .dtos import GetSessionResponse, SessionInfo, UserInfo


class GetSessionUseCase:
    """
    Resolve a session id from a verified token to the live session and user.

    Errors:
        - SESSION_NOT_FOUND: No such session, or its user is gone
        - SESSION_REVOKED: Signed out or revoked by a password reset
        - SESSION_EXPIRED: Past expires_at
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: UUID) -> Result[GetSessionResponse]:
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            if session.revoked:
                return Return.err(Error("SESSION_REVOKED", "Session has been revoked"))

            if session.expires_at < utcnow():
                return Return.err(Error("SESSION_EXPIRED", "Session has expired"))

            user = await self.uow.users.get_by_id(session.user_id)
            if user is None:
                return Return.err(Error("SESSION_NOT_FOUND", "Session not found"))

            return Return.ok(
                GetSessionResponse(
                    user=UserInfo.from_entity(user),
                    session=SessionInfo.from_entity(session),
                )
            )
