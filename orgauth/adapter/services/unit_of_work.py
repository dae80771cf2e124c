from sqlmodel.ext.asyncio.session import AsyncSession

from orgauth.adapter.repositories.account_repository import AccountRepository
from orgauth.adapter.repositories.invitation_repository import InvitationRepository
from orgauth.adapter.repositories.membership_repository import MembershipRepository
from orgauth.adapter.repositories.organization_repository import OrganizationRepository
from orgauth.adapter.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from orgauth.adapter.repositories.session_repository import SessionRepository
from orgauth.adapter.repositories.user_repository import UserRepository
from orgauth.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._bind_repositories()

    def _bind_repositories(self):
        self.users = UserRepository(self.session)
        self.accounts = AccountRepository(self.session)
        self.organizations = OrganizationRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.password_reset_tokens = PasswordResetTokenRepository(self.session)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        # Anything not committed explicitly is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    def savepoint(self):
        return self.session.begin_nested()
