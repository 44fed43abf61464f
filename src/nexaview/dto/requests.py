"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class NewsSearchQuery(BaseModel):
    """Query parameters of the keyword news search."""

    term: str = Field("Singapore", description="Search keyword")
    apikey: str | None = Field(None, description="Caller's NewsAPI key")
