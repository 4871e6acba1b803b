"""Key-value persistence port for client session state (cart contents).

The cart store only needs ``get``/``set``/``delete`` on string values, so it
never depends on where the bytes end up. Production uses Redis; tests use the
in-memory adapter.
"""

from abc import ABC, abstractmethod
from typing import Optional

import redis

from libs.common.config import get_settings


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class RedisKeyValueStore(KeyValueStore):
    """Durable adapter backed by Redis. Entries never expire."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: Optional[str] = None) -> "RedisKeyValueStore":
        url = url or get_settings().REDIS_URL
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def set(self, key: str, value: str) -> None:
        self.client.set(key, value)

    def delete(self, key: str) -> None:
        self.client.delete(key)


def cart_storage_key(session_id: str) -> str:
    """Namespaced key holding one anonymous session's cart."""
    return f"{get_settings().CART_STORAGE_KEY}:{session_id}"
