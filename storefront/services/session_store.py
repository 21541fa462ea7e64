# storefront/services/session_store.py
import json
import secrets

import redis

from storefront.domain.entities import Identity
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, SESSION_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SessionStore:
    """
    Sessions shared with the identity provider, kept in redis as
    session:<token> -> {"user_id": .., "is_admin": ..} with a TTL.
    """

    def __init__(self, client: redis.Redis | None = None, url: str | None = None, ttl: int = SESSION_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl = ttl

    @staticmethod
    def _key(token: str) -> str:
        return f"session:{token}"

    @redis_retry()
    def issue(self, user_id: int, is_admin: bool = False) -> str:
        token = secrets.token_urlsafe(32)
        payload = json.dumps({"user_id": user_id, "is_admin": bool(is_admin)})
        self.redis.setex(self._key(token), self.ttl, payload)
        logger.info(f"Issued session for user {user_id}")
        return token

    @redis_retry()
    def resolve(self, token: str | None) -> Identity | None:
        if not token:
            return None

        raw = self.redis.get(self._key(token))
        if not raw:
            return None

        try:
            data = json.loads(raw)
            return Identity(user_id=int(data["user_id"]), is_admin=bool(data.get("is_admin", False)))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Malformed session payload: {e}")
            return None

    @redis_retry()
    def revoke(self, token: str) -> bool:
        return bool(self.redis.delete(self._key(token)))
