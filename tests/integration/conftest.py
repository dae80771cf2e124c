from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from orgauth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from orgauth.api.app import create_app
from orgauth.app.auth_config import build_auth_config
from orgauth.app.services.email_dispatcher import EmailDispatchError, IEmailDispatcher
from orgauth.depends import get_unit_of_work


class RecordingEmailDispatcher(IEmailDispatcher):
    """Keeps every message; raises EmailDispatchError while fail is set"""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send_email(self, message):
        if self.fail:
            raise EmailDispatchError("mail transport unavailable")
        self.sent.append(message)

    def last_to(self, email):
        for message in reversed(self.sent):
            if message.to == email:
                return message
        raise AssertionError(f"No email sent to {email}")


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def mailbox():
    return RecordingEmailDispatcher()


@pytest.fixture
def auth_config(mailbox):
    app_config = SimpleNamespace(
        APP_URL="http://test",
        FRONTEND_URL=None,
        AUTH_SECRET="integration-test-secret",
        GOOGLE_CLIENT_ID=None,
        GOOGLE_CLIENT_SECRET=None,
        GITHUB_CLIENT_ID="github-client-id",
        GITHUB_CLIENT_SECRET="github-client-secret",
    )
    return build_auth_config(app_config, mailbox)


@pytest_asyncio.fixture
async def client(db_session, auth_config):
    app = create_app(auth_config)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
