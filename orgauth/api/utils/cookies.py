from fastapi import Response

from orgauth.app.auth_config import AuthConfig


def set_session_cookies(
    response: Response, auth_config: AuthConfig, token: str, login_method: str
) -> None:
    """
    Write the session cookie and the last-used login method cookie.

    The session cookie is HttpOnly; the login method cookie stays readable
    so the login page can highlight the method used last.
    """
    max_age = int(auth_config.session.expires_in.total_seconds())
    response.set_cookie(
        auth_config.session.cookie_name,
        token,
        max_age=max_age,
        httponly=True,
        secure=auth_config.secure_cookies,
        samesite="lax",
        path="/",
    )
    response.set_cookie(
        auth_config.session.last_login_method_cookie,
        login_method,
        max_age=60 * 60 * 24 * 30,
        httponly=False,
        secure=auth_config.secure_cookies,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, auth_config: AuthConfig) -> None:
    response.delete_cookie(auth_config.session.cookie_name, path="/")
