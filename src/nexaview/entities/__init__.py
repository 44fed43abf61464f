"""Domain entities for internal representation.

Frozen dataclasses used by services and repositories. They are not API
contracts; the dto package holds those.
"""

from .cache_key import CacheKey, Domain
from .domain_policy import DomainPolicy
from .sweep import SweepFailure, SweepReport, SweepTarget

__all__ = [
    "CacheKey",
    "Domain",
    "DomainPolicy",
    "SweepFailure",
    "SweepReport",
    "SweepTarget",
]
