"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Resolver -> Store / Upstream client
    (HTTP)  -> (Domain) -> (Cache-aside) -> (Data Access)
"""

from .gateway_service import GatewayService
from .policy import build_policies, news_key_space, target_for
from .resolver import CacheAsideResolver
from .sweeper import PreloadSweeper

__all__ = [
    "CacheAsideResolver",
    "GatewayService",
    "PreloadSweeper",
    "build_policies",
    "news_key_space",
    "target_for",
]
