"""
Authlib OAuth registry for the social sign-in providers.

Only providers present in AuthConfig.social_providers are registered. The
OAuth state parameter lives in the Starlette session (SessionMiddleware)
between the authorization redirect and the callback.

get_oauth_user_info normalizes each provider's response into a
SocialProfile; whether an existing account may be linked is decided by the
sign-in use case from profile.email_verified.
"""

import logging

from authlib.integrations.starlette_client import OAuth

from orgauth.app.auth_config import AuthConfig
from orgauth.app.use_cases.auth import SocialProfile

logger = logging.getLogger(__name__)

GOOGLE_DISCOVERY_URL = "https://accounts.google.com/.well-known/openid-configuration"


def build_oauth(auth_config: AuthConfig) -> OAuth:
    oauth = OAuth()

    github = auth_config.social_providers.get("github")
    if github is not None:
        oauth.register(
            name="github",
            client_id=github.client_id,
            client_secret=github.client_secret,
            access_token_url="https://github.com/login/oauth/access_token",  # noqa: S106
            authorize_url="https://github.com/login/oauth/authorize",
            api_base_url="https://api.github.com/",
            client_kwargs={"scope": "read:user user:email"},
        )
        logger.info("GitHub OAuth provider registered")

    google = auth_config.social_providers.get("google")
    if google is not None:
        oauth.register(
            name="google",
            client_id=google.client_id,
            client_secret=google.client_secret,
            server_metadata_url=GOOGLE_DISCOVERY_URL,
            client_kwargs={"scope": "openid email profile"},
        )
        logger.info("Google OAuth provider registered")

    return oauth


async def get_oauth_user_info(client, provider: str, token: dict) -> SocialProfile:
    """
    Build a SocialProfile from a provider token response.

    Raises:
        ValueError: The provider returned no usable email or subject
    """
    if provider == "github":
        return await _get_github_user_info(client, token)
    if provider == "google":
        return _get_google_user_info(token)
    raise ValueError(f"Unknown OAuth provider: {provider!r}")


async def _get_github_user_info(client, token: dict) -> SocialProfile:
    # GitHub keeps emails off the token; /user gives the id, /user/emails the address
    resp = await client.get("user", token=token)
    resp.raise_for_status()
    profile = resp.json()

    emails_resp = await client.get("user/emails", token=token)
    emails_resp.raise_for_status()
    emails = emails_resp.json()

    primary = next((entry for entry in emails if entry.get("primary")), None)
    if primary is None or not primary.get("email"):
        raise ValueError("GitHub OAuth: account has no primary email")

    return SocialProfile(
        provider="github",
        account_id=str(profile["id"]),
        email=primary["email"].lower(),
        email_verified=bool(primary.get("verified")),
        name=profile.get("name") or profile.get("login") or "",
        image=profile.get("avatar_url"),
    )


def _get_google_user_info(token: dict) -> SocialProfile:
    userinfo = token.get("userinfo")
    if not userinfo:
        raise ValueError("google OAuth: no userinfo in token response")

    email = userinfo.get("email")
    subject_id = userinfo.get("sub")
    if not email or not subject_id:
        raise ValueError("google OAuth: missing email or sub claim in userinfo")

    return SocialProfile(
        provider="google",
        account_id=str(subject_id),
        email=email.lower(),
        email_verified=bool(userinfo.get("email_verified", False)),
        name=userinfo.get("name") or "",
        image=userinfo.get("picture"),
    )
