"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    # Validation happens in the service so the form and API share messages
    url: str = Field(..., description="The URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_code: str = Field(..., description="The short code")
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The URL as submitted")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "short_code": "n4bQgYh",
                    "short_url": "http://localhost:8080/n4bQgYh",
                    "original_url": "https://example.com/very/long/path",
                }
            ]
        }
    }


class URLInfoResponse(BaseModel):
    """Response with a stored URL record."""

    id: int
    short_code: str
    short_url: str
    original_url: str
    canonical_url: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: Optional[str] = Field(None, description="Error message")
