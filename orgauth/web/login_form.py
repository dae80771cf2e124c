"""
Login form model and helpers for the server-rendered login page.

Validation happens here, before any sign-in attempt: an invalid form is
re-rendered with per-field messages and never reaches the sign-in use case.
"""

from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import urlencode

from pydantic import BaseModel, EmailStr, Field, ValidationError

from orgauth.api.utils.redirects import safe_redirect_target, with_query_param
from orgauth.domain.entities import LoginMethod

MIN_PASSWORD_LENGTH = 8

FIELD_MESSAGES: Dict[str, str] = {
    "email": "Please enter a valid email address.",
    "password": f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
}

# ?error= values shown on the login page. The raw query value never reaches
# the template, only the message looked up here.
ERROR_MESSAGES: Dict[str, str] = {
    "oauth_failed": "Social sign-in failed. Please try again.",
    "invalid_credentials": "Invalid email or password.",
    "email_not_verified": "Please verify your email address before signing in.",
    "session_expired": "Your session has expired. Please sign in again.",
}

SOCIAL_PROVIDERS: Tuple[Tuple[str, str], ...] = (
    (LoginMethod.google.value, "Google"),
    (LoginMethod.github.value, "GitHub"),
)


class LoginForm(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


def validate_login_form(
    email: str, password: str
) -> Tuple[Optional[LoginForm], Dict[str, str]]:
    """
    Validate submitted credentials.

    Returns:
        (form, {}) when valid, (None, {field: message}) otherwise
    """
    try:
        return LoginForm(email=email.strip(), password=password), {}
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for error in exc.errors():
            field = str(error["loc"][0])
            errors.setdefault(field, FIELD_MESSAGES.get(field, error["msg"]))
        return None, errors


def post_login_redirect(redirect_to: Optional[str]) -> str:
    """
    Where to send the browser after a successful sign-in.

    Invitation pages get accepted=true so they know the visitor has just
    signed in to accept.
    """
    target = safe_redirect_target(redirect_to)
    if "/invitation/" in target:
        target = with_query_param(target, "accepted", "true")
    return target


def social_sign_in_url(provider: str, callback_url: str) -> str:
    query = urlencode({"callback_url": callback_url})
    return f"/api/auth/sign-in/social/{provider}?{query}"


def last_used_login_method(cookies: Mapping[str, str], cookie_name: str) -> Optional[str]:
    value = cookies.get(cookie_name)
    if value in {method.value for method in LoginMethod}:
        return value
    return None


def error_message(code: Optional[str]) -> Optional[str]:
    if not code:
        return None
    return ERROR_MESSAGES.get(code.lower())
