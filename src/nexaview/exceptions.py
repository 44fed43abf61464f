"""Error hierarchy for the gateway.

FetchError and StoreError describe where a failure happened. The cache-aside
resolver never handles either one locally: it wraps them in ResolveError and
raises, leaving recovery to its caller (the HTTP layer or the preload sweeper).
"""


class GatewayError(Exception):
    """Base exception for all gateway errors."""


class FetchError(GatewayError):
    """Raised when an upstream provider call fails.

    Covers non-success HTTP statuses, transport errors, timeouts and
    missing server-held credentials. Never retried.

    Attributes:
        domain: Data domain of the failed call (e.g. "weather").
        reason: Human-readable error description.
    """

    def __init__(self, domain: str, reason: str) -> None:
        self.domain = domain
        self.reason = reason
        super().__init__(f"[{domain}] {reason}")


class StoreError(GatewayError):
    """Raised when the key-value store is unreachable or holds a bad value."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ResolveError(GatewayError):
    """Raised by the resolver, wrapping the FetchError or StoreError behind it.

    Attributes:
        key: Rendered cache key the resolution was for.
        cause: The wrapped FetchError or StoreError.
    """

    def __init__(self, key: str, cause: FetchError | StoreError) -> None:
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to resolve {key}: {cause}")

    @property
    def reason(self) -> str:
        """Reason of the wrapped error, suitable for an error response."""
        return self.cause.reason


__all__ = [
    "GatewayError",
    "FetchError",
    "StoreError",
    "ResolveError",
]
