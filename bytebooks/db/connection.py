"""Asyncpg connection utilities."""
from pathlib import Path
from typing import Optional

import asyncpg

from bytebooks.config import settings
from bytebooks.utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

_pool: Optional[asyncpg.pool.Pool] = None


async def ensure_schema_exists(pool: asyncpg.pool.Pool) -> None:
    """Create the books table if it doesn't exist."""
    schema_sql = SCHEMA_PATH.read_text()
    async with pool.acquire() as conn:
        await conn.execute(schema_sql)
    logger.info("Database schema ready")


async def init_db() -> asyncpg.pool.Pool:
    """Initialize the connection pool and ensure the schema exists."""
    global _pool
    if _pool is None:
        # Empty password means trust auth for local development
        password = settings.pg_password.strip() or None

        logger.info(
            f"Connecting to PostgreSQL at {settings.pg_host}:{settings.pg_port}/{settings.pg_database}"
        )
        _pool = await asyncpg.create_pool(
            host=settings.pg_host,
            port=settings.pg_port,
            user=settings.pg_user,
            password=password,
            database=settings.pg_database,
            min_size=1,
            max_size=10,
            ssl="require" if settings.pg_ssl else None,
        )

        await ensure_schema_exists(_pool)

    return _pool


async def get_pool() -> asyncpg.pool.Pool:
    if _pool is None:
        return await init_db()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool:
        await _pool.close()
        _pool = None
