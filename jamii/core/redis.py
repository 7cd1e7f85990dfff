import redis
from typing import Optional

from jamii.core.config import Settings
from jamii.core.storage import ClientStorage

class RedisStorage(ClientStorage):
    def __init__(self, client: redis.Redis, prefix: str = "jamii:"):
        self.redis = client
        self.prefix = prefix

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisStorage":
        client = redis.Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
        return cls(client, prefix=settings.REDIS_KEY_PREFIX)

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get_item(self, key: str) -> Optional[str]:
        return self.redis.get(self._key(key))

    def set_item(self, key: str, value: str) -> None:
        self.redis.set(self._key(key), str(value))

    def remove_item(self, key: str) -> None:
        self.redis.delete(self._key(key))

    def close(self):
        self.redis.close()
