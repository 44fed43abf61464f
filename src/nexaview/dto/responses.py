"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field

from nexaview.entities import SweepReport


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Human-readable error message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    store_healthy: bool = Field(..., description="Whether the cache store is reachable")


class SweepFailureItem(BaseModel):
    """Single failed combination of a preload sweep."""

    key: str = Field(..., description="Cache key that could not be refreshed")
    reason: str = Field(..., description="Why the refresh failed")


class SweepReportResponse(BaseModel):
    """Response DTO for a preload sweep."""

    total: int = Field(..., description="Number of combinations swept", ge=0)
    succeeded: list[str] = Field(default_factory=list, description="Refreshed cache keys")
    failed: list[SweepFailureItem] = Field(default_factory=list, description="Failed combinations")

    @classmethod
    def from_report(cls, report: SweepReport) -> "SweepReportResponse":
        return cls(
            total=report.total,
            succeeded=list(report.succeeded),
            failed=[SweepFailureItem(key=f.key, reason=f.reason) for f in report.failed],
        )
