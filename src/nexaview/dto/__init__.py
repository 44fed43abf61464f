"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
Internal domain logic should use entities from the entities package.
"""

from .requests import NewsSearchQuery
from .responses import (
    ErrorResponse,
    HealthCheckResponse,
    SweepFailureItem,
    SweepReportResponse,
)

__all__ = [
    "NewsSearchQuery",
    "ErrorResponse",
    "HealthCheckResponse",
    "SweepFailureItem",
    "SweepReportResponse",
]
