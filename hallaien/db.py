"""
Database connection pool and RLS-scoped connection managers.

All database access goes through user_conn() or system_conn().
Never use pool.acquire() directly outside this module.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from uuid import UUID

import asyncpg

from hallaien import config

logger = logging.getLogger(__name__)

pool: asyncpg.Pool | None = None


async def init_pool() -> None:
    """
    Initialize the connection pool.
    Called once at application startup.
    """
    global pool
    pool = await asyncpg.create_pool(
        dsn=config.settings.DATABASE_URL,
        min_size=2,
        max_size=20,
        command_timeout=60,
        init=_init_connection,
    )
    logger.info("Database pool initialized")


async def close_pool() -> None:
    """
    Close the connection pool.
    Called at application shutdown.
    """
    global pool
    if pool is not None:
        await pool.close()
        pool = None
        logger.info("Database pool closed")


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Decode uuid columns straight into UUID objects."""
    await conn.set_type_codec(
        "uuid",
        encoder=str,
        decoder=lambda x: UUID(x),
        schema="pg_catalog",
    )


@asynccontextmanager
async def user_conn(user_id: str | UUID):
    """
    Acquire a database connection scoped to a specific user via RLS.

    Teachers only see and mutate their own assistants and share codes
    through this connection. Enforced by Postgres RLS policies.

    Usage:
        async with user_conn(teacher_id) as conn:
            row = await conn.fetchrow("SELECT * FROM assistants WHERE id = $1", assistant_id)

    Args:
        user_id: UUID of the principal to scope the connection to

    Yields:
        asyncpg.Connection with RLS context set
    """
    if pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")

    async with pool.acquire() as conn:
        async with conn.transaction():
            await conn.execute(
                "SELECT set_config('app.user_id', $1, true)",
                str(user_id),
            )
            yield conn


@asynccontextmanager
async def system_conn():
    """
    Acquire a database connection without user scoping.

    For operations that span owners:
    - Access resolution (a student reading a teacher's assistant)
    - Share code redemption (lookup by code across all issuers)
    - Profile and program lookups for the authenticated principal

    Yields:
        asyncpg.Connection without RLS scoping
    """
    if pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")

    async with pool.acquire() as conn:
        async with conn.transaction():
            # RLS policies treat an empty app.user_id as a system caller.
            await conn.execute("SELECT set_config('app.user_id', '', true)")
            yield conn
