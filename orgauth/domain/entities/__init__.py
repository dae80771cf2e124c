"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import (
    CREDENTIAL_PROVIDER,
    InvitationStatus,
    LoginMethod,
    MembershipRole,
)

from .user import User
from .account import Account
from .organization import Organization
from .membership import Membership
from .invitation import Invitation
from .session import Session
from .password_reset_token import PasswordResetToken

__all__ = [
    # Enums
    "CREDENTIAL_PROVIDER",
    "InvitationStatus",
    "LoginMethod",
    "MembershipRole",
    # Entities
    "User",
    "Account",
    "Organization",
    "Membership",
    "Invitation",
    "Session",
    "PasswordResetToken",
]
