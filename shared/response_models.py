"""
Common API response models.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Service status")
    message: str = Field(..., description="Health check message")
    version: str | None = Field(None, description="Service version")
