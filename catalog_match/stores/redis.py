"""Redis store for distributed locks.

Handles:
- Per-offer review locks (two reviewers acting on the same offer)

TTL policies:
- Review locks: REVIEW_LOCK_TTL_SECONDS (default 30 seconds)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import redis.asyncio as redis

from catalog_match.services.errors import ReviewInProgressError
from catalog_match.settings import get_settings

# TTL constants (in seconds)
TTL_REVIEW_LOCK = 30

# Key prefixes
PREFIX_LOCK = "lock:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Distributed locks
# ============================================================


async def acquire_lock(key: str, ttl: int = TTL_REVIEW_LOCK) -> bool:
    """Acquire a distributed lock.

    Args:
        key: Lock key (without the "lock:" prefix).
        ttl: Lock timeout in seconds.

    Returns:
        True if lock acquired, False if already locked.
    """
    lock_key = f"{PREFIX_LOCK}{key}"
    # SET NX (only if not exists) with TTL
    result = await _get_redis().set(lock_key, "1", nx=True, ex=ttl)
    return result is not None


async def release_lock(key: str) -> None:
    """Release a distributed lock.

    Args:
        key: Lock key (without the "lock:" prefix).
    """
    await _get_redis().delete(f"{PREFIX_LOCK}{key}")


@asynccontextmanager
async def review_lock(offer_id: str) -> AsyncGenerator[None, None]:
    """Hold the review lock for an offer while a decision is applied.

    Disabled entirely when REVIEW_LOCKS_ENABLED is false.

    Raises:
        ReviewInProgressError: Another review action holds the lock.
    """
    settings = get_settings()
    if not settings.review_locks_enabled:
        yield
        return

    key = f"review:{offer_id}"
    if not await acquire_lock(key, ttl=settings.review_lock_ttl_seconds):
        raise ReviewInProgressError(offer_id)
    try:
        yield
    finally:
        await release_lock(key)
