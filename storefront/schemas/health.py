"""Pydantic schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus database reachability, for load balancers and monitoring."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    version: str = Field(description="Running storefront package version")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a trivial query against the configured database",
    )
