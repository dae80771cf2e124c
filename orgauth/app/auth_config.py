"""
Auth Configuration

AuthConfig is built once at process start and handed to create_app(). It is
immutable; everything request handling needs to know about providers,
policies and hooks is read from it.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from orgauth.app.hooks import AuthHooks, build_auth_hooks
from orgauth.app.services.email_dispatcher import IEmailDispatcher

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """A required setting is missing or invalid"""


@dataclass(frozen=True)
class SocialProvider:
    client_id: str
    client_secret: str


@dataclass(frozen=True)
class EmailAndPasswordPolicy:
    enabled: bool = True
    require_email_verification: bool = True
    min_password_length: int = 8
    max_password_length: int = 128
    reset_password_token_expires_in: timedelta = timedelta(hours=1)


@dataclass(frozen=True)
class EmailVerificationPolicy:
    send_on_sign_up: bool = True
    expires_in: timedelta = timedelta(hours=24)


@dataclass(frozen=True)
class OrganizationPolicy:
    invitation_expires_in: timedelta = timedelta(hours=48)
    membership_limit: int = 100
    # Invitees may not have an account yet
    require_email_verification_on_invitation: bool = False


@dataclass(frozen=True)
class SessionPolicy:
    expires_in: timedelta = timedelta(days=7)
    cookie_name: str = "orgauth.session_token"
    last_login_method_cookie: str = "orgauth.last_used_login_method"


@dataclass(frozen=True)
class AuthConfig:
    base_url: str
    secret: str
    hooks: AuthHooks
    trusted_origins: Tuple[str, ...] = ()
    social_providers: Mapping[str, SocialProvider] = field(
        default_factory=lambda: MappingProxyType({})
    )
    email_and_password: EmailAndPasswordPolicy = EmailAndPasswordPolicy()
    email_verification: EmailVerificationPolicy = EmailVerificationPolicy()
    organization: OrganizationPolicy = OrganizationPolicy()
    session: SessionPolicy = SessionPolicy()

    @property
    def secure_cookies(self) -> bool:
        return self.base_url.startswith("https://")

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"


def _social_provider(client_id: Optional[str], client_secret: Optional[str]) -> Optional[SocialProvider]:
    if client_id and client_secret:
        return SocialProvider(client_id=client_id, client_secret=client_secret)
    return None


def build_auth_config(app_config, email_dispatcher: IEmailDispatcher) -> AuthConfig:
    """
    Build the AuthConfig from ApplicationConfig.

    Raises:
        ConfigurationError: APP_URL or AUTH_SECRET is not set
    """
    base_url = (app_config.APP_URL or "").strip()
    if not base_url:
        raise ConfigurationError("NEXT_PUBLIC_APP_URL is not set")
    secret = (app_config.AUTH_SECRET or "").strip()
    if not secret:
        raise ConfigurationError("AUTH_SECRET is not set")

    trusted_origins = tuple(
        origin.rstrip("/") for origin in (base_url, app_config.FRONTEND_URL) if origin
    )

    providers = {}
    for name, client_id, client_secret in (
        ("google", app_config.GOOGLE_CLIENT_ID, app_config.GOOGLE_CLIENT_SECRET),
        ("github", app_config.GITHUB_CLIENT_ID, app_config.GITHUB_CLIENT_SECRET),
    ):
        provider = _social_provider(client_id, client_secret)
        if provider is None:
            logger.info("%s sign-in disabled: client id/secret not configured", name)
            continue
        providers[name] = provider

    return AuthConfig(
        base_url=base_url.rstrip("/"),
        secret=secret,
        hooks=build_auth_hooks(base_url, email_dispatcher),
        trusted_origins=trusted_origins,
        social_providers=MappingProxyType(providers),
    )
