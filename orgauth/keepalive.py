"""
Database keep-alive ping.

Opens a single connection (NullPool), runs one trivial query, reports the
server time and disposes the engine on every path. Meant to be run on a
schedule so an idle hosted database is not paused.

Exit status: 0 on success, 1 when DATABASE_URL is missing or the ping fails.
"""

import asyncio
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from orgauth.db_url import mask_url, to_async_url, to_sync_url

CONNECT_TIMEOUT_SECONDS = 10

PING_QUERY = text("SELECT CURRENT_TIMESTAMP AS server_time, 1 AS status")


def connect_args(url: str) -> dict:
    """Driver specific connect timeout argument"""
    if url.startswith("postgresql+psycopg2"):
        return {"connect_timeout": CONNECT_TIMEOUT_SECONDS}
    # asyncpg, sqlite3 and aiosqlite all take "timeout"
    return {"timeout": CONNECT_TIMEOUT_SECONDS}


def _database_url(database_url: Optional[str]) -> Optional[str]:
    url = database_url if database_url is not None else os.environ.get("DATABASE_URL")
    if not url:
        print("DATABASE_URL environment variable is not set", file=sys.stderr)
        return None
    return url


def _report_success(server_time) -> None:
    print("Database ping successful!")
    print("Timestamp:", datetime.now(timezone.utc).isoformat())
    print("Server time:", server_time if server_time is not None else "N/A")
    print("Database ping completed successfully - database kept alive")


def _report_failure(exc: Exception) -> None:
    print("Database ping failed!", file=sys.stderr)
    print("Error message:", exc, file=sys.stderr)
    traceback.print_exception(type(exc), exc, exc.__traceback__, file=sys.stderr)


def _report_close_failure(exc: Exception) -> None:
    print("Error closing connection:", exc, file=sys.stderr)


async def ping_async(database_url: Optional[str] = None) -> int:
    """Ping through the async driver (asyncpg / aiosqlite)"""
    url = _database_url(database_url)
    if url is None:
        return 1

    print("Connecting to database...")
    print("Connection string:", mask_url(url))

    engine = None
    try:
        url = to_async_url(url)
        engine = create_async_engine(url, poolclass=NullPool, connect_args=connect_args(url))
        async with engine.connect() as conn:
            result = await conn.execute(PING_QUERY)
            row = result.mappings().first()
        _report_success(row["server_time"] if row else None)
        return 0
    except Exception as exc:
        _report_failure(exc)
        return 1
    finally:
        if engine is not None:
            try:
                await engine.dispose()
            except Exception as exc:
                _report_close_failure(exc)
            else:
                print("Database connection closed")


def ping_sync(database_url: Optional[str] = None) -> int:
    """Ping through the sync driver (psycopg2 / sqlite3)"""
    url = _database_url(database_url)
    if url is None:
        return 1

    print("Connecting to database...")
    print("Connection string:", mask_url(url))

    engine = None
    try:
        url = to_sync_url(url)
        engine = create_engine(url, poolclass=NullPool, connect_args=connect_args(url))
        with engine.connect() as conn:
            row = conn.execute(PING_QUERY).mappings().first()
        _report_success(row["server_time"] if row else None)
        return 0
    except Exception as exc:
        _report_failure(exc)
        return 1
    finally:
        if engine is not None:
            try:
                engine.dispose()
            except Exception as exc:
                _report_close_failure(exc)
            else:
                print("Database connection closed")


def main() -> int:
    return asyncio.run(ping_async())


def main_sync() -> int:
    return ping_sync()
