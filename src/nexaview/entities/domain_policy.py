"""Domain policy entity."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from .cache_key import Domain


@dataclass(frozen=True)
class DomainPolicy:
    """Static fetch and expiry configuration for one data domain.

    Attributes:
        domain: The data domain this policy applies to
        ttl_seconds: Expiry applied to every entry written for the domain
        fetch: Upstream call taking the domain's raw parameters
    """

    domain: Domain
    ttl_seconds: int
    fetch: Callable[..., Awaitable[Any]]
