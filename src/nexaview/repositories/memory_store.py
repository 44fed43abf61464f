"""In-memory implementation of KeyValueStore.

Expiry is evaluated lazily on read against an injectable clock, which makes
TTL behaviour testable without sleeping. Suitable for a single process only.
"""

import time
from collections.abc import Callable


class InMemoryKeyValueStore:
    """Dict-backed KeyValueStore with explicit expiry semantics.

    Example:
        ```python
        now = [0.0]
        store = InMemoryKeyValueStore(clock=lambda: now[0])
        await store.set("weather:singapore", "{}", 3600)
        now[0] = 3600.0
        await store.get("weather:singapore")  # None
        ```
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize an empty store.

        Args:
            clock: Returns the current time in seconds.
        """
        self._clock = clock
        self._data: dict[str, tuple[str, float]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._data[key] = (value, self._clock() + ttl_seconds)

    def ttl(self, key: str) -> float | None:
        """Remaining lifetime of a key in seconds, or None if absent."""
        entry = self._data.get(key)
        if entry is None:
            return None
        remaining = entry[1] - self._clock()
        return remaining if remaining > 0 else None

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)
