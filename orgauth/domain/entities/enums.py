"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class MembershipRole(str, Enum):
    """User role within an organization"""

    owner = "owner"
    admin = "admin"
    member = "member"


class InvitationStatus(str, Enum):
    """Invitation status"""

    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    canceled = "canceled"


class LoginMethod(str, Enum):
    """Sign-in method remembered as the last used one on a device"""

    email = "email"
    google = "google"
    github = "github"


CREDENTIAL_PROVIDER = "credential"
