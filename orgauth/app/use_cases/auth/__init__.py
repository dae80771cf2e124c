"""
Authentication Use Cases

Sign-up, sign-in (email and social), sign-out, email verification and
password reset.
"""

from .dtos import (
    GetSessionResponse,
    RequestPasswordResetResponse,
    ResetPasswordResponse,
    SendVerificationEmailResponse,
    SessionInfo,
    SignInResponse,
    SignOutResponse,
    SignUpCommand,
    SignUpResponse,
    SocialProfile,
    UserInfo,
    VerifyEmailResponse,
)
from .get_session_use_case import GetSessionUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .send_verification_email_use_case import SendVerificationEmailUseCase
from .sign_in_email_use_case import SignInEmailUseCase
from .sign_in_social_use_case import SignInSocialUseCase
from .sign_out_use_case import SignOutUseCase
from .sign_up_email_use_case import SignUpEmailUseCase
from .verify_email_use_case import VerifyEmailUseCase

__all__ = [
    "SignUpEmailUseCase",
    "SignInEmailUseCase",
    "SignInSocialUseCase",
    "SignOutUseCase",
    "GetSessionUseCase",
    "VerifyEmailUseCase",
    "SendVerificationEmailUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    "SignUpCommand",
    "SignUpResponse",
    "SignInResponse",
    "SignOutResponse",
    "GetSessionResponse",
    "SocialProfile",
    "SessionInfo",
    "UserInfo",
    "VerifyEmailResponse",
    "SendVerificationEmailResponse",
    "RequestPasswordResetResponse",
    "ResetPasswordResponse",
]
