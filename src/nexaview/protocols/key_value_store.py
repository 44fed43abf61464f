"""Key-value store protocol.

Defines the only interface the cache-aside layer needs from its backing
store: string values with a per-key expiry.

Implementations include:
- Redis (default)
- An in-memory store with an injectable clock (tests, local runs)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for cache storage backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed. Implementations raise StoreError when the
    backend cannot be reached.

    Example:
        ```python
        from nexaview.protocols import KeyValueStore

        store: KeyValueStore = RedisKeyValueStore.create()
        store: KeyValueStore = InMemoryKeyValueStore()
        ```
    """

    async def get(self, key: str) -> str | None:
        """Read a value.

        Args:
            key: The storage key

        Returns:
            The stored value, or None if absent or expired
        """
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Write a value, replacing any existing one.

        Args:
            key: The storage key
            value: Serialized payload
            ttl_seconds: Time-to-live in seconds
        """
        ...
