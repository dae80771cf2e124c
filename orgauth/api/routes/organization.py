from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from orgauth.api.error import ClientError, ServerError
from orgauth.app.auth_config import AuthConfig
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.app.use_cases.organizations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    CreateOrganizationUseCase,
    GetInvitationUseCase,
    InvitationDetails,
    InvitationStatusResponse,
    InviteMemberResponse,
    InviteMemberUseCase,
    OrganizationInfo,
    RejectInvitationUseCase,
)
from orgauth.depends import (
    SessionContext,
    get_auth_config,
    get_current_session,
    get_unit_of_work,
    verify_trusted_origin,
)
from orgauth.result import Error

router = APIRouter(
    prefix="/api/auth/organization",
    tags=["Organization"],
    dependencies=[Depends(verify_trusted_origin)],
)


class CreateOrganizationRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Organization name")
    slug: Optional[str] = Field(
        None, max_length=255, description="URL slug, derived from the name when omitted"
    )


@router.post("/create", status_code=status.HTTP_201_CREATED, response_model=OrganizationInfo)
async def create_organization(
    request: CreateOrganizationRequest,
    current: SessionContext = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    Create Organization

    The caller becomes owner and every session of the caller switches to the
    new organization.

    Raises:
        - 400 Bad Request: INVALID_NAME, INVALID_SLUG
        - 401 Unauthorized: No session
        - 409 Conflict: SLUG_TAKEN
        - 500 Internal Server Error: Server error
    """
    use_case = CreateOrganizationUseCase(uow, auth_config)
    result = await use_case.execute(current.user_id, request.name, request.slug)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_NAME", "INVALID_SLUG"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "SLUG_TAKEN":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class InviteMemberRequest(BaseModel):
    """
    Invite member HTTP request payload

    organization_id defaults to the session's active organization.
    """

    email: EmailStr = Field(..., description="Email address to invite")
    role: str = Field("member", description="Role to assign (owner/admin/member)")
    organization_id: Optional[UUID] = Field(None, description="Target organization")


@router.post(
    "/invite-member",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteMemberResponse,
)
async def invite_member(
    request: InviteMemberRequest,
    current: SessionContext = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    Invite Member

    Creates a pending invitation and sends the invitation email. When the
    email cannot be sent no invitation is stored.

    Raises:
        - 400 Bad Request: INVALID_ROLE, NO_ACTIVE_ORGANIZATION
        - 401 Unauthorized: No session
        - 403 Forbidden: NOT_A_MEMBER, INSUFFICIENT_ROLE, MEMBERSHIP_LIMIT_REACHED
        - 404 Not Found: ORGANIZATION_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER, INVITE_ALREADY_EXISTS
        - 500 Internal Server Error: INVITATION_EMAIL_FAILED, server error
    """
    organization_id = request.organization_id or current.active_organization_id
    if organization_id is None:
        raise ClientError(
            Error("NO_ACTIVE_ORGANIZATION", "No organization given and no active organization"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    use_case = InviteMemberUseCase(uow, auth_config)
    result = await use_case.execute(
        current.user_id, organization_id, request.email, request.role
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_ROLE":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("NOT_A_MEMBER", "INSUFFICIENT_ROLE", "MEMBERSHIP_LIMIT_REACHED"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "ORGANIZATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("ALREADY_MEMBER", "INVITE_ALREADY_EXISTS"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/get-invitation", status_code=status.HTTP_200_OK, response_model=InvitationDetails
)
async def get_invitation(
    id: UUID,
    current: SessionContext = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Invitation

    Only the invited email address may read the invitation.

    Raises:
        - 403 Forbidden: NOT_RECIPIENT
        - 404 Not Found: INVITATION_NOT_FOUND
    """
    use_case = GetInvitationUseCase(uow)
    result = await use_case.execute(id, current.email)

    if result.is_err():
        error = result.error
        if error.code == "NOT_RECIPIENT":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "INVITATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


class InvitationActionRequest(BaseModel):
    invitation_id: UUID = Field(..., description="Invitation ID")


@router.post(
    "/accept-invitation",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    request: InvitationActionRequest,
    current: SessionContext = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    Accept Invitation

    Creates the membership and makes the joined organization active on the
    current session.

    Raises:
        - 400 Bad Request: INVITATION_NOT_PENDING
        - 403 Forbidden: NOT_RECIPIENT, EMAIL_NOT_VERIFIED, MEMBERSHIP_LIMIT_REACHED
        - 404 Not Found: INVITATION_NOT_FOUND, ORGANIZATION_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER
        - 410 Gone: INVITATION_EXPIRED
    """
    use_case = AcceptInvitationUseCase(uow, auth_config)
    result = await use_case.execute(
        request.invitation_id, current.user_id, current.session_id
    )

    if result.is_err():
        error = result.error
        if error.code == "INVITATION_NOT_PENDING":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("NOT_RECIPIENT", "EMAIL_NOT_VERIFIED", "MEMBERSHIP_LIMIT_REACHED"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("INVITATION_NOT_FOUND", "ORGANIZATION_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "ALREADY_MEMBER":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVITATION_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value


@router.post(
    "/reject-invitation",
    status_code=status.HTTP_200_OK,
    response_model=InvitationStatusResponse,
)
async def reject_invitation(
    request: InvitationActionRequest,
    current: SessionContext = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reject Invitation

    Raises:
        - 400 Bad Request: INVITATION_NOT_PENDING
        - 403 Forbidden: NOT_RECIPIENT
        - 404 Not Found: INVITATION_NOT_FOUND
    """
    use_case = RejectInvitationUseCase(uow)
    result = await use_case.execute(request.invitation_id, current.email)

    if result.is_err():
        error = result.error
        if error.code == "INVITATION_NOT_PENDING":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NOT_RECIPIENT":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "INVITATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/cancel-invitation",
    status_code=status.HTTP_200_OK,
    response_model=InvitationStatusResponse,
)
async def cancel_invitation(
    request: InvitationActionRequest,
    current: SessionContext = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cancel Invitation

    Raises:
        - 400 Bad Request: INVITATION_NOT_PENDING
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: INVITATION_NOT_FOUND
    """
    use_case = CancelInvitationUseCase(uow)
    result = await use_case.execute(request.invitation_id, current.user_id)

    if result.is_err():
        error = result.error
        if error.code == "INVITATION_NOT_PENDING":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INSUFFICIENT_ROLE":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "INVITATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
