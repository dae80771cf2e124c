"""
Server-rendered pages: login, invitation landing page and dashboard.

Pages that need a signed-in user redirect to /login with redirect_to set to
the page itself, so the user comes back after signing in.
"""

import logging
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urlencode
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from orgauth.api.routes.auth import client_address
from orgauth.api.utils.cookies import clear_session_cookie, set_session_cookies
from orgauth.app.auth_config import AuthConfig
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.app.use_cases.auth import SignInEmailUseCase, SignOutUseCase
from orgauth.app.use_cases.organizations import (
    AcceptInvitationUseCase,
    GetInvitationUseCase,
    RejectInvitationUseCase,
)
from orgauth.depends import (
    SessionContext,
    get_auth_config,
    get_optional_session,
    get_unit_of_work,
    verify_trusted_origin,
)

from .login_form import (
    ERROR_MESSAGES,
    SOCIAL_PROVIDERS,
    error_message,
    last_used_login_method,
    post_login_redirect,
    social_sign_in_url,
    validate_login_form,
)

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent.parent / "templates" / "web"))

router = APIRouter(tags=["Web"])


def login_redirect(path: str) -> RedirectResponse:
    return RedirectResponse(
        f"/login?{urlencode({'redirect_to': path})}", status_code=status.HTTP_302_FOUND
    )


def render_login(
    request: Request,
    auth_config: AuthConfig,
    redirect_to: Optional[str],
    email: str = "",
    field_errors: Optional[Dict[str, str]] = None,
    notification: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    callback_url = post_login_redirect(redirect_to)
    providers = [
        {"name": name, "label": label, "url": social_sign_in_url(name, callback_url)}
        for name, label in SOCIAL_PROVIDERS
        if name in auth_config.social_providers
    ]
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "email": email,
            "redirect_to": redirect_to or "",
            "field_errors": field_errors or {},
            "notification": notification,
            "providers": providers,
            "last_used": last_used_login_method(
                request.cookies, auth_config.session.last_login_method_cookie
            ),
        },
        status_code=status_code,
    )


@router.get("/login", response_class=HTMLResponse)
async def login_page(
    request: Request,
    redirect_to: Optional[str] = None,
    default_email: str = "",
    error: Optional[str] = None,
    current: Optional[SessionContext] = Depends(get_optional_session),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """Render the login form with social buttons and the last-used badge"""
    if current is not None:
        return RedirectResponse(post_login_redirect(redirect_to), status_code=status.HTTP_302_FOUND)

    return render_login(
        request, auth_config, redirect_to, email=default_email, notification=error_message(error)
    )


@router.post(
    "/login", response_class=HTMLResponse, dependencies=[Depends(verify_trusted_origin)]
)
async def login_submit(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    redirect_to: Optional[str] = Form(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    Handle the login form.

    Invalid input is re-rendered with 422 and inline messages. A rejected
    sign-in is re-rendered with a notification. Success redirects (303).
    """
    form, field_errors = validate_login_form(email, password)
    if form is None:
        return render_login(
            request,
            auth_config,
            redirect_to,
            email=email,
            field_errors=field_errors,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    use_case = SignInEmailUseCase(uow, auth_config)
    result = await use_case.execute(
        form.email.lower(),
        form.password,
        client_address(request),
        request.headers.get("user-agent"),
    )

    if result.is_err():
        error = result.error
        status_code = (
            status.HTTP_401_UNAUTHORIZED
            if error.code == "INVALID_CREDENTIALS"
            else status.HTTP_403_FORBIDDEN
        )
        return render_login(
            request,
            auth_config,
            redirect_to,
            email=email,
            notification=ERROR_MESSAGES.get(error.code.lower(), error.message),
            status_code=status_code,
        )

    response = RedirectResponse(
        post_login_redirect(redirect_to), status_code=status.HTTP_303_SEE_OTHER
    )
    set_session_cookies(response, auth_config, result.value.token, result.value.login_method)
    response.headers["Cache-Control"] = "no-store"
    return response


@router.post("/logout", dependencies=[Depends(verify_trusted_origin)])
async def logout(
    current: Optional[SessionContext] = Depends(get_optional_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    if current is not None:
        await SignOutUseCase(uow).execute(current.session_id)
    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    clear_session_cookie(response, auth_config)
    return response


def render_invitation(
    request: Request,
    invitation=None,
    error: Optional[str] = None,
    accepted: bool = False,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "invitation.html",
        {"invitation": invitation, "error": error, "accepted": accepted},
        status_code=status_code,
    )


def parse_invitation_id(invitation_id: str) -> Optional[UUID]:
    try:
        return UUID(invitation_id)
    except ValueError:
        return None


@router.get("/invitation/{invitation_id}", response_class=HTMLResponse)
async def invitation_page(
    invitation_id: str,
    request: Request,
    accepted: Optional[str] = None,
    current: Optional[SessionContext] = Depends(get_optional_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Invitation landing page

    accepted=true marks a visitor who just signed in from this page.
    """
    if current is None:
        return login_redirect(f"/invitation/{invitation_id}")

    invitation_uuid = parse_invitation_id(invitation_id)
    if invitation_uuid is None:
        return render_invitation(
            request, error="Invitation not found", status_code=status.HTTP_404_NOT_FOUND
        )

    result = await GetInvitationUseCase(uow).execute(invitation_uuid, current.email)
    if result.is_err():
        status_code = (
            status.HTTP_404_NOT_FOUND
            if result.error.code == "INVITATION_NOT_FOUND"
            else status.HTTP_403_FORBIDDEN
        )
        return render_invitation(request, error=result.error.message, status_code=status_code)

    return render_invitation(request, invitation=result.value, accepted=accepted == "true")


@router.post(
    "/invitation/{invitation_id}/accept",
    response_class=HTMLResponse,
    dependencies=[Depends(verify_trusted_origin)],
)
async def invitation_accept(
    invitation_id: str,
    request: Request,
    current: Optional[SessionContext] = Depends(get_optional_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    if current is None:
        return login_redirect(f"/invitation/{invitation_id}")

    invitation_uuid = parse_invitation_id(invitation_id)
    if invitation_uuid is None:
        return render_invitation(
            request, error="Invitation not found", status_code=status.HTTP_404_NOT_FOUND
        )

    use_case = AcceptInvitationUseCase(uow, auth_config)
    result = await use_case.execute(invitation_uuid, current.user_id, current.session_id)
    if result.is_err():
        logger.info("Invitation %s not accepted: %s", invitation_id, result.error.code)
        return render_invitation(
            request, error=result.error.message, status_code=status.HTTP_400_BAD_REQUEST
        )

    return RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)


@router.post(
    "/invitation/{invitation_id}/reject",
    response_class=HTMLResponse,
    dependencies=[Depends(verify_trusted_origin)],
)
async def invitation_reject(
    invitation_id: str,
    request: Request,
    current: Optional[SessionContext] = Depends(get_optional_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    if current is None:
        return login_redirect(f"/invitation/{invitation_id}")

    invitation_uuid = parse_invitation_id(invitation_id)
    if invitation_uuid is None:
        return render_invitation(
            request, error="Invitation not found", status_code=status.HTTP_404_NOT_FOUND
        )

    result = await RejectInvitationUseCase(uow).execute(invitation_uuid, current.email)
    if result.is_err():
        return render_invitation(
            request, error=result.error.message, status_code=status.HTTP_400_BAD_REQUEST
        )

    return RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    current: Optional[SessionContext] = Depends(get_optional_session),
):
    if current is None:
        return login_redirect("/dashboard")

    return templates.TemplateResponse(request, "dashboard.html", {"current": current})
