"""Base schemas and utilities."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(from_attributes=True)


class HealthResponse(BaseModel):
    """Schema for the health check response."""

    status: str
    timestamp: datetime
