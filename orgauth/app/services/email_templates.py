"""
Transactional email templates.

Templates live in orgauth/templates/emails and are rendered with Jinja2
(autoescaped, strict undefined so a missing variable fails loudly).
"""

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

_env = Environment(
    loader=PackageLoader("orgauth", "templates/emails"),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
)


def render_verify_email(username: str, verify_url: str) -> str:
    return _env.get_template("verify_email.html").render(
        username=username, verify_url=verify_url
    )


def render_reset_password(username: str, reset_url: str, user_email: str) -> str:
    return _env.get_template("reset_password.html").render(
        username=username, reset_url=reset_url, user_email=user_email
    )


def render_organization_invitation(
    email: str,
    invited_by_username: str,
    invited_by_email: str,
    team_name: str,
    invite_link: str,
) -> str:
    return _env.get_template("organization_invitation.html").render(
        email=email,
        invited_by_username=invited_by_username,
        invited_by_email=invited_by_email,
        team_name=team_name,
        invite_link=invite_link,
    )
