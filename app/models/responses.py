"""Pydantic response models for the origin service."""

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = Field(..., description="Overall health status")
    service: str = Field(..., description="Name of the service answering")
    timestamp: datetime = Field(..., description="Timestamp of the health check")


class ErrorDetail(BaseModel):
    """Error detail information."""

    message: str = Field(..., description="Error message")
    type: str = Field(..., description="Error type")
    code: str | None = Field(default=None, description="Error code")


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    error: ErrorDetail = Field(..., description="Error details")
