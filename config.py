import os

import yaml

from orgauth.db_url import to_async_url

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.environ.get("ORGAUTH_CONFIG", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def setting(name, default=None, env=None):
    """Environment variable wins over env.yaml, env.yaml over the default"""
    value = os.environ.get(env or name)
    if value is not None:
        return value
    return data.get(name, default)


def flag(name, default=False, env=None):
    value = setting(name, default, env)
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class ApplicationConfig:
    DATABASE_URL = setting("DATABASE_URL", "sqlite+aiosqlite:///./orgauth.db")
    DB_URI = to_async_url(DATABASE_URL)
    AUTO_CREATE_TABLES = flag("AUTO_CREATE_TABLES", True)
    API_PORT = int(setting("API_PORT", 8000))
    API_HOST = setting("API_HOST", "0.0.0.0")
    LOG_LEVEL = setting("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = flag("ENABLE_LOGGING_MIDDLEWARE", True)

    APP_URL = setting("APP_URL", "http://localhost:8000", env="NEXT_PUBLIC_APP_URL")
    FRONTEND_URL = setting("FRONTEND_URL", None, env="NEXT_PUBLIC_FRONTEND_URL")
    AUTH_SECRET = setting("AUTH_SECRET", "dev-secret-key-change-in-production")

    GOOGLE_CLIENT_ID = setting("GOOGLE_CLIENT_ID")
    GOOGLE_CLIENT_SECRET = setting("GOOGLE_CLIENT_SECRET")
    GITHUB_CLIENT_ID = setting("GITHUB_CLIENT_ID")
    GITHUB_CLIENT_SECRET = setting("GITHUB_CLIENT_SECRET")

    EMAIL_BACKEND = setting("EMAIL_BACKEND", "resend")
    RESEND_API_KEY = setting("RESEND_API_KEY")
    EMAIL_FROM = setting("EMAIL_FROM", "noreply@example.com")
