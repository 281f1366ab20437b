"""
Pydantic schemas for the HTTP interface.

Request/response models only. No business logic.
"""

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: Optional[str] = None
    report_id: Optional[str] = None
    exception: Optional[str] = None
