"""
Fleet API — Shared Response Schemas
====================================

What:  Error envelope, delete confirmation, health and welcome payloads.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error body for every failure, on every endpoint.

    Example:
        {
            "code": 404,
            "error": "not_found",
            "message": "car with ID '6f1c...' was not found",
            "details": {"resource": "car", "resource_id": "6f1c..."},
            "request_id": "a1b2c3d4"
        }
    """
    code: int = Field(description="HTTP status code, repeated in the body")
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class DeleteResponse(BaseModel):
    id: uuid.UUID = Field(description="Identifier of the removed record")
    message: str = Field(description="Confirmation message")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class WelcomeResponse(BaseModel):
    message: str
