"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Resolver -> Store / Upstream client
    (HTTP)  -> (Domain) -> (Cache-aside) -> (Data Access)
"""

from .gateway_handler import GatewayHandler

__all__ = [
    "GatewayHandler",
]
