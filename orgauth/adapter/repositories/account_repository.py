from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from orgauth.app.repositories.account_repository import IAccountRepository
from orgauth.domain.entities import Account


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_provider(self, provider_id: str, account_id: str) -> Optional[Account]:
        stmt = select(Account).where(
            Account.provider_id == provider_id, Account.account_id == account_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, account: Account) -> Account:
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account
