"""Health view models."""

from pydantic import BaseModel, Field


class HealthCheck(BaseModel):
    """Runtime health status of a check on a node."""

    node: str = Field(..., description="The node owning the check")
    check_id: str = Field(..., description="The check identifier")
    name: str = Field("", description="The check name")
    status: str = Field(..., description="The current health status")
    notes: str = Field("", description="Free text notes")
    service_id: str = Field("", description="The owning service, empty for node-level checks")

    class Config:
        """Pydantic config."""

        extra = "ignore"
        frozen = True
