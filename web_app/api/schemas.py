"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", min_length=1, max_length=2048)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortUrlResponse(BaseModel):
    """Response of the form endpoint."""

    url: str = Field(..., description="The complete short URL")


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    id: int = Field(..., description="Record id assigned by the store")
    chunk: str = Field(..., description="Encoded record id")
    short_url: str = Field(..., description="The complete short URL")
    url: str = Field(..., description="The stored (canonical) URL")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "chunk": "AQAAAA",
                    "short_url": "https://sho.rt/AQAAAA",
                    "url": "https://example.com/very/long/path",
                    "created_at": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class LinkInfoResponse(BaseModel):
    """Response with link information."""

    id: int
    chunk: str
    url: str
    created_at: Optional[datetime] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_links: int
    database: str
