"""
Auth Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
"""

from typing import Optional

from pydantic import BaseModel

from orgauth.domain.entities import Session, User


# ============================================================================
# Command DTOs
# ============================================================================


class SignUpCommand(BaseModel):
    """Validated sign-up intent"""

    email: str
    password: str
    name: str = ""
    callback_url: str = "/"


class SocialProfile(BaseModel):
    """Identity asserted by a social provider after token exchange"""

    provider: str
    account_id: str
    email: str
    email_verified: bool
    name: str = ""
    image: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """User information in responses"""

    id: str
    email: str
    name: str
    email_verified: bool
    image: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            email_verified=user.email_verified,
            image=user.image,
        )


class SessionInfo(BaseModel):
    """Session information in responses"""

    id: str
    user_id: str
    active_organization_id: Optional[str] = None
    expires_at: str

    @classmethod
    def from_entity(cls, session: Session) -> "SessionInfo":
        return cls(
            id=str(session.id),
            user_id=str(session.user_id),
            active_organization_id=(
                str(session.active_organization_id)
                if session.active_organization_id
                else None
            ),
            expires_at=session.expires_at.isoformat(),
        )


class SignUpResponse(BaseModel):
    """Response for sign-up. No session until the email is verified."""

    user: UserInfo
    email_verification_required: bool
    token: Optional[str] = None
    session: Optional[SessionInfo] = None


class SignInResponse(BaseModel):
    """Response for every sign-in method"""

    user: UserInfo
    session: SessionInfo
    token: str
    login_method: str


class SignOutResponse(BaseModel):
    success: bool


class VerifyEmailResponse(BaseModel):
    status: str
    email: str


class SendVerificationEmailResponse(BaseModel):
    status: str


class RequestPasswordResetResponse(BaseModel):
    status: str
    message: str


class ResetPasswordResponse(BaseModel):
    status: str
    message: str


class GetSessionResponse(BaseModel):
    """Current session and its user"""

    user: UserInfo
    session: SessionInfo
