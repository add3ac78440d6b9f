"""
Redis client configuration for caching and session management.
"""
import redis
import json
import logging
import uuid
from typing import Optional, Any, Dict

from stockroom.core.config import settings
from stockroom.core.database import utcnow

logger = logging.getLogger(__name__)

# Create Redis client
redis_client = redis.Redis.from_url(
    settings.redis_url,
    db=settings.redis_db,
    decode_responses=True,
    socket_connect_timeout=5,
    socket_timeout=5,
    retry_on_timeout=True
)


def check_redis_connection() -> bool:
    """Check if Redis connection is working."""
    try:
        redis_client.ping()
        return True
    except Exception as e:
        logger.error(f"Redis connection check failed: {e}")
        return False


class CacheManager:
    """Manages caching operations with Redis.

    Values are stored as JSON. Every failure is logged and reported as a
    cache miss so callers fall back to the database.
    """

    def __init__(self, default_ttl: int = 3600):
        self.default_ttl = default_ttl
        self.client = redis_client

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Set a value in cache with optional TTL."""
        try:
            serialized_value = json.dumps(value, default=str)
            ttl = ttl or self.default_ttl
            return bool(self.client.setex(key, ttl, serialized_value))
        except Exception as e:
            logger.error(f"Failed to set cache key {key}: {e}")
            return False

    def get(self, key: str) -> Optional[Any]:
        """Get a value from cache."""
        try:
            value = self.client.get(key)
            if value is not None:
                return json.loads(value)
            return None
        except Exception as e:
            logger.error(f"Failed to get cache key {key}: {e}")
            return None

    def delete(self, key: str) -> bool:
        """Delete a key from cache."""
        try:
            return bool(self.client.delete(key))
        except Exception as e:
            logger.error(f"Failed to delete cache key {key}: {e}")
            return False


# Global cache manager instance
cache_manager = CacheManager()


class SessionManager:
    """Manages user sessions with Redis."""

    def __init__(self, session_ttl: int = settings.session_ttl):
        self.session_ttl = session_ttl
        self.client = redis_client

    def create_session(self, user_id: str, session_data: Dict[str, Any]) -> str:
        """Create a new session for a user."""
        session_id = uuid.uuid4().hex
        session_key = f"session:{session_id}"

        session_data['user_id'] = user_id
        session_data['created_at'] = utcnow().isoformat()

        self.client.setex(session_key, self.session_ttl, json.dumps(session_data))
        return session_id

    def get_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Get session data by session ID."""
        session_key = f"session:{session_id}"
        try:
            session_data = self.client.get(session_key)
            if session_data:
                return json.loads(session_data)
            return None
        except Exception as e:
            logger.error(f"Failed to get session {session_id}: {e}")
            return None

    def delete_session(self, session_id: str) -> bool:
        """Delete a session."""
        session_key = f"session:{session_id}"
        try:
            return bool(self.client.delete(session_key))
        except Exception as e:
            logger.error(f"Failed to delete session {session_id}: {e}")
            return False

    def extend_session(self, session_id: str) -> bool:
        """Extend session TTL."""
        session_key = f"session:{session_id}"
        try:
            return bool(self.client.expire(session_key, self.session_ttl))
        except Exception as e:
            logger.error(f"Failed to extend session {session_id}: {e}")
            return False


# Global session manager instance
session_manager = SessionManager()
