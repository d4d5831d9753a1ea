"""
Redis client for Rashed.

This module provides the Redis connection used by the session store,
plus the handful of commands the store needs.
"""

from typing import Optional, Set

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from .config import get_config
from .logging import get_logger


class RedisManager:
    """Redis connection manager with connection pooling."""

    def __init__(self) -> None:
        """Initialize Redis manager."""
        self.config = get_config().redis
        self.logger = get_logger("core.redis")

        self.pool: Optional[ConnectionPool] = None
        self.client: Optional[Redis] = None
        self._healthy = False

    async def initialize(self) -> None:
        """Initialize Redis connection pool and client."""
        self.pool = ConnectionPool(
            host=self.config.host,
            port=self.config.port,
            password=self.config.password,
            db=self.config.db,
            max_connections=self.config.max_connections,
            socket_timeout=self.config.socket_timeout,
            socket_connect_timeout=self.config.socket_connect_timeout,
            retry_on_timeout=self.config.retry_on_timeout,
            decode_responses=True,
        )
        self.client = Redis(connection_pool=self.pool)

        try:
            await self.client.ping()
        except RedisError as e:
            self.logger.error("Failed to initialize Redis connection", error=str(e))
            self._healthy = False
            raise

        self._healthy = True
        self.logger.info(
            "Redis connection established",
            host=self.config.host,
            port=self.config.port,
        )

    async def close(self) -> None:
        """Close Redis connections and cleanup."""
        if self.client:
            await self.client.aclose()
        if self.pool:
            await self.pool.disconnect()
        self.client = None
        self.pool = None
        self._healthy = False
        self.logger.info("Redis connections closed")

    async def ping(self) -> bool:
        """Ping the server and record the outcome."""
        if not self.client:
            self._healthy = False
            return False
        try:
            await self.client.ping()
        except RedisError as e:
            self.logger.warning("Redis health check failed", error=str(e))
            self._healthy = False
            return False
        self._healthy = True
        return True

    async def get_client(self) -> Redis:
        """Get Redis client instance."""
        if not self.client or not self._healthy:
            raise RedisError("Redis connection not available")
        return self.client

    async def get(self, key: str) -> Optional[str]:
        """Get value from Redis."""
        client = await self.get_client()
        result = await client.get(key)
        return result if result is None else str(result)

    async def setex(self, key: str, ex: int, value: str) -> bool:
        """Set value in Redis with expiration."""
        client = await self.get_client()
        return bool(await client.setex(key, ex, value))

    async def delete(self, key: str) -> int:
        """Delete key from Redis."""
        client = await self.get_client()
        return int(await client.delete(key))

    async def expire(self, key: str, ex: int) -> bool:
        """Set expiration for key."""
        client = await self.get_client()
        return bool(await client.expire(key, ex))

    async def sadd(self, key: str, *members: str) -> int:
        """Add members to set."""
        client = await self.get_client()
        return int(await client.sadd(key, *members))  # type: ignore[misc]

    async def srem(self, key: str, *members: str) -> int:
        """Remove members from set."""
        client = await self.get_client()
        return int(await client.srem(key, *members))  # type: ignore[misc]

    async def smembers(self, key: str) -> Set[str]:
        """Get all members of set."""
        client = await self.get_client()
        result = await client.smembers(key)  # type: ignore[misc]
        return set(str(member) for member in result) if result else set()


# Global Redis manager instance
redis_manager = RedisManager()


async def get_redis() -> RedisManager:
    """Get Redis manager instance."""
    return redis_manager


async def initialize_redis() -> None:
    """Initialize Redis connection."""
    await redis_manager.initialize()


async def close_redis() -> None:
    """Close Redis connection."""
    await redis_manager.close()
