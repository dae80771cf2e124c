from uuid import UUID

from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.result import Result, Return

from .dtos import SignOutResponse


class SignOutUseCase:
    """Revoke the caller's session"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: UUID) -> Result[SignOutResponse]:
        async with self.uow:
            revoked = await self.uow.sessions.revoke_by_id(session_id)
            await self.uow.commit()
            return Return.ok(SignOutResponse(success=revoked))
