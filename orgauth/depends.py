from typing import Optional
from uuid import UUID

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from orgauth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from orgauth.api.error import ClientError
from orgauth.api.utils.jwt import verify_session_token
from orgauth.app.auth_config import AuthConfig
from orgauth.app.use_cases.auth import GetSessionResponse, GetSessionUseCase
from orgauth.domain import entities  # noqa: F401  registers tables on SQLModel.metadata
from orgauth.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

STATE_CHANGING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class SessionContext(BaseModel):
    """Authenticated caller, detached from the database session"""

    session_id: UUID
    user_id: UUID
    email: str
    name: str
    email_verified: bool
    active_organization_id: Optional[UUID] = None
    expires_at: str

    @classmethod
    def from_response(cls, response: GetSessionResponse) -> "SessionContext":
        return cls(
            session_id=UUID(response.session.id),
            user_id=UUID(response.user.id),
            email=response.user.email,
            name=response.user.name,
            email_verified=response.user.email_verified,
            expires_at=response.session.expires_at,
            active_organization_id=(
                UUID(response.session.active_organization_id)
                if response.session.active_organization_id
                else None
            ),
        )


async def init_models():
    """Create missing tables; used at startup when AUTO_CREATE_TABLES is on"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_auth_config(request: Request) -> AuthConfig:
    return request.app.state.auth_config


async def verify_trusted_origin(
    request: Request, auth_config: AuthConfig = Depends(get_auth_config)
) -> None:
    """
    Reject state-changing requests sent from an untrusted browser origin.

    Requests without an Origin header (server-to-server, tests) pass.
    """
    if request.method not in STATE_CHANGING_METHODS:
        return
    origin = request.headers.get("origin")
    if origin and origin.rstrip("/") not in auth_config.trusted_origins:
        raise ClientError(
            Error("INVALID_ORIGIN", "Invalid origin"),
            status_code=status.HTTP_403_FORBIDDEN,
        )


async def get_optional_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow=Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
) -> Optional[SessionContext]:
    """
    Resolve the caller's session from the Bearer token or the session cookie.

    Returns:
        SessionContext, or None when there is no valid, live session
    """
    token = credentials.credentials if credentials else None
    if not token:
        token = request.cookies.get(auth_config.session.cookie_name)
    if not token:
        return None

    payload = verify_session_token(token, auth_config.secret)
    if payload is None:
        return None

    try:
        session_id = UUID(payload["sid"])
    except (KeyError, TypeError, ValueError):
        return None

    result = await GetSessionUseCase(uow).execute(session_id)
    if result.is_err():
        return None

    return SessionContext.from_response(result.value)


async def get_current_session(
    context: Optional[SessionContext] = Depends(get_optional_session),
) -> SessionContext:
    """
    Dependency for endpoints that require a signed-in caller.

    Raises:
        ClientError: 401 if there is no valid session
    """
    if context is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return context
