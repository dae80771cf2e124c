import logging
from typing import Optional

from authlib.integrations.starlette_client import OAuthError
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse
from httpx import HTTPError
from pydantic import BaseModel, EmailStr, Field

from orgauth.adapter.oauth import get_oauth_user_info
from orgauth.api.error import ClientError, ServerError
from orgauth.api.utils.cookies import clear_session_cookie, set_session_cookies
from orgauth.api.utils.redirects import safe_redirect_target, with_query_param
from orgauth.app.auth_config import AuthConfig
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.app.use_cases.auth import (
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
    ResetPasswordResponse,
    ResetPasswordUseCase,
    SendVerificationEmailResponse,
    SendVerificationEmailUseCase,
    SignInEmailUseCase,
    SignInResponse,
    SignInSocialUseCase,
    SignOutResponse,
    SignOutUseCase,
    SignUpCommand,
    SignUpEmailUseCase,
    SignUpResponse,
    VerifyEmailUseCase,
)
from orgauth.depends import (
    SessionContext,
    get_auth_config,
    get_current_session,
    get_optional_session,
    get_unit_of_work,
    verify_trusted_origin,
)
from orgauth.domain.entities import LoginMethod

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["Authentication"],
    dependencies=[Depends(verify_trusted_origin)],
)

OAUTH_CALLBACK_SESSION_KEY = "oauth_callback_url"
OAUTH_FAILED_REDIRECT = "/login?error=oauth_failed"


def client_address(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


class SignUpEmailRequest(BaseModel):
    """
    Sign-up HTTP request payload

    Password length policy is enforced by the use case from AuthConfig.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")
    name: str = Field("", max_length=255, description="Display name")
    callback_url: str = Field("/", description="Where the verification link lands")


@router.post(
    "/sign-up/email", status_code=status.HTTP_201_CREATED, response_model=SignUpResponse
)
async def sign_up_email(
    request: SignUpEmailRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    Sign Up with email and password

    Creates the user and sends the verification email. A session is only
    opened when email verification is not required.

    Raises:
        - 400 Bad Request: INVALID_PASSWORD, EMAIL_PASSWORD_DISABLED
        - 409 Conflict: USER_ALREADY_EXISTS
        - 500 Internal Server Error: EMAIL_DELIVERY_FAILED, server error
    """
    command = SignUpCommand(
        email=request.email.lower(),
        password=request.password,
        name=request.name,
        callback_url=safe_redirect_target(request.callback_url, default="/"),
    )

    use_case = SignUpEmailUseCase(uow, auth_config)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_PASSWORD", "EMAIL_PASSWORD_DISABLED"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    if result.value.token:
        set_session_cookies(response, auth_config, result.value.token, LoginMethod.email.value)

    return result.value


class SignInEmailRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/sign-in/email", status_code=status.HTTP_200_OK, response_model=SignInResponse)
async def sign_in_email(
    request: SignInEmailRequest,
    http_request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    Sign In with email and password

    Sets the session cookie and the last-used login method cookie.

    Raises:
        - 400 Bad Request: EMAIL_PASSWORD_DISABLED
        - 401 Unauthorized: INVALID_CREDENTIALS
        - 403 Forbidden: EMAIL_NOT_VERIFIED
        - 500 Internal Server Error: Server error
    """
    use_case = SignInEmailUseCase(uow, auth_config)
    result = await use_case.execute(
        request.email.lower(),
        request.password,
        client_address(http_request),
        http_request.headers.get("user-agent"),
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "EMAIL_NOT_VERIFIED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "EMAIL_PASSWORD_DISABLED":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    set_session_cookies(response, auth_config, result.value.token, result.value.login_method)
    return result.value


@router.get("/sign-in/social/{provider}")
async def sign_in_social(
    provider: str,
    request: Request,
    callback_url: str = "/dashboard",
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    Start the OAuth authorization code flow.

    Unknown or disabled providers, and any failure reaching the provider,
    redirect to /login?error=oauth_failed.
    """
    if provider not in auth_config.social_providers:
        return RedirectResponse(OAUTH_FAILED_REDIRECT, status_code=status.HTTP_302_FOUND)

    request.session[OAUTH_CALLBACK_SESSION_KEY] = safe_redirect_target(callback_url)

    client = request.app.state.oauth.create_client(provider)
    redirect_uri = auth_config.url(f"/api/auth/callback/{provider}")
    try:
        return await client.authorize_redirect(request, redirect_uri)
    except (OAuthError, HTTPError):
        logger.exception("OAuth redirect failed for provider %r", provider)
        return RedirectResponse(OAUTH_FAILED_REDIRECT, status_code=status.HTTP_302_FOUND)


@router.get("/callback/{provider}", name="oauth_callback")
async def oauth_callback(
    provider: str,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    OAuth provider callback.

    Exchanges the code, signs the user in and redirects to the callback URL
    stored when the flow started.
    """
    if provider not in auth_config.social_providers:
        return RedirectResponse(OAUTH_FAILED_REDIRECT, status_code=status.HTTP_302_FOUND)

    client = request.app.state.oauth.create_client(provider)

    try:
        token = await client.authorize_access_token(request)
        profile = await get_oauth_user_info(client, provider, token)
    except (OAuthError, HTTPError, ValueError):
        logger.exception("OAuth callback failed for provider %r", provider)
        return RedirectResponse(OAUTH_FAILED_REDIRECT, status_code=status.HTTP_302_FOUND)

    use_case = SignInSocialUseCase(uow, auth_config)
    result = await use_case.execute(
        profile, client_address(request), request.headers.get("user-agent")
    )

    if result.is_err():
        logger.warning("Social sign-in rejected: %s", result.error.code)
        return RedirectResponse(OAUTH_FAILED_REDIRECT, status_code=status.HTTP_302_FOUND)

    target = safe_redirect_target(request.session.pop(OAUTH_CALLBACK_SESSION_KEY, None))
    response = RedirectResponse(target, status_code=status.HTTP_302_FOUND)
    set_session_cookies(response, auth_config, result.value.token, result.value.login_method)
    response.headers["Cache-Control"] = "no-store"
    return response


@router.post("/sign-out", status_code=status.HTTP_200_OK, response_model=SignOutResponse)
async def sign_out(
    response: Response,
    current: SessionContext = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """Revoke the current session and clear the session cookie"""
    use_case = SignOutUseCase(uow)
    result = await use_case.execute(current.session_id)

    if result.is_err():
        raise ServerError(result.error)

    clear_session_cookie(response, auth_config)
    return result.value


@router.get(
    "/get-session", status_code=status.HTTP_200_OK, response_model=Optional[SessionContext]
)
async def get_session(current: Optional[SessionContext] = Depends(get_optional_session)):
    """Current session, or null when signed out"""
    return current


@router.get("/verify-email", response_model=None)
async def verify_email(
    token: str,
    callback_url: Optional[str] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Email verification link target

    With a callback_url the browser is redirected there, carrying
    ?error=<code> when verification failed. Without one the outcome is
    returned as JSON.

    Raises:
        - 400 Bad Request: INVALID_TOKEN
        - 410 Gone: TOKEN_EXPIRED
    """
    use_case = VerifyEmailUseCase(uow)
    result = await use_case.execute(token)

    if callback_url is not None:
        target = safe_redirect_target(callback_url, default="/")
        if result.is_err():
            target = with_query_param(target, "error", result.error.code.lower())
        return RedirectResponse(target, status_code=status.HTTP_302_FOUND)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_TOKEN":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TOKEN_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value


class SendVerificationEmailRequest(BaseModel):
    email: EmailStr = Field(..., description="Address to verify")
    callback_url: str = Field("/", description="Where the verification link lands")


@router.post(
    "/send-verification-email",
    status_code=status.HTTP_200_OK,
    response_model=SendVerificationEmailResponse,
)
async def send_verification_email(
    request: SendVerificationEmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    Re-send the verification email

    Unknown and already verified addresses get the same response.
    """
    use_case = SendVerificationEmailUseCase(uow, auth_config)
    result = await use_case.execute(
        request.email.lower(), safe_redirect_target(request.callback_url, default="/")
    )

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class RequestPasswordResetRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/request-password-reset",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    Request Password Reset

    Always answers the same way, whether or not the email is registered.
    """
    use_case = RequestPasswordResetUseCase(uow, auth_config)
    result = await use_case.execute(request.email.lower())

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., description="Password reset token from the email link")
    new_password: str = Field(..., description="New password")


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    Reset Password

    Consumes the reset token and revokes every session of the user.

    Raises:
        - 400 Bad Request: INVALID_TOKEN, TOKEN_ALREADY_USED, INVALID_PASSWORD
        - 404 Not Found: USER_NOT_FOUND
        - 410 Gone: TOKEN_EXPIRED
        - 500 Internal Server Error: Server error
    """
    use_case = ResetPasswordUseCase(uow, auth_config)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "TOKEN_ALREADY_USED", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TOKEN_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
