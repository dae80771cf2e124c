"""Database URL normalization for the async app engine and the sync scripts."""

_ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "postgresql+psycopg2": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}

_SYNC_DRIVERS = {
    "postgres": "postgresql+psycopg2",
    "postgresql": "postgresql+psycopg2",
    "postgresql+asyncpg": "postgresql+psycopg2",
    "sqlite+aiosqlite": "sqlite",
}


def _swap_scheme(url: str, drivers: dict) -> str:
    scheme, sep, rest = url.partition("://")
    if not sep:
        raise ValueError("Database URL must look like <scheme>://...")
    return f"{drivers.get(scheme, scheme)}://{rest}"


def to_async_url(url: str) -> str:
    """postgres://... -> postgresql+asyncpg://..., sqlite:// -> sqlite+aiosqlite://"""
    return _swap_scheme(url, _ASYNC_DRIVERS)


def to_sync_url(url: str) -> str:
    """postgresql+asyncpg://... -> postgresql+psycopg2://..., sqlite+aiosqlite:// -> sqlite://"""
    return _swap_scheme(url, _SYNC_DRIVERS)


def mask_url(url: str, visible: int = 20) -> str:
    return url[:visible] + "..."
