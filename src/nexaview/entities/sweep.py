"""Preload sweep domain entities."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from .cache_key import CacheKey


@dataclass(frozen=True)
class SweepTarget:
    """One key the sweeper must refresh, with its TTL and upstream call."""

    key: CacheKey
    ttl_seconds: int
    fetch: Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class SweepFailure:
    """A target that could not be refreshed."""

    key: str
    reason: str


@dataclass
class SweepReport:
    """Outcome of one preload sweep, in enumeration order.

    Attributes:
        succeeded: Rendered keys that were re-fetched and stored
        failed: Targets that failed, with the reason
    """

    succeeded: list[str] = field(default_factory=list)
    failed: list[SweepFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        """True when every target was refreshed."""
        return not self.failed
