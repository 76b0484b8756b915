from redis.exceptions import RedisError

from app.application.errors import RateLimitExceededError
from app.infrastructure.cache.redis_client import get_redis_client
from app.infrastructure.logging import get_logger

logger = get_logger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later"


def rate_limit_key(scope: str, client_id: str) -> str:
    return f"rate-limit:{scope}:{client_id}"


def register_hit(*, scope: str, client_id: str, limit: int, window_seconds: int) -> int:
    """Count one request for ``client_id`` in a fixed window and enforce ``limit``.

    Returns the count for the current window. Requests are let through when Redis
    cannot be reached.
    """
    key = rate_limit_key(scope, client_id)
    try:
        client = get_redis_client()
        count = int(client.incr(key))
        if count == 1:
            client.expire(key, window_seconds)
        ttl = int(client.ttl(key))
        if ttl < 0:
            client.expire(key, window_seconds)
            ttl = window_seconds
    except RedisError as exc:
        logger.warning("rate_limit_backend_unavailable", scope=scope, error=str(exc))
        return 0

    if count > limit:
        logger.warning("rate_limit_exceeded", scope=scope, client_id=client_id, count=count, limit=limit)
        raise RateLimitExceededError(RATE_LIMIT_MESSAGE, retry_after=ttl)
    return count
