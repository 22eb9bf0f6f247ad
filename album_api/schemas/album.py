"""
Album API - Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the JSON contract of the API.
How:   The POST handler decodes the raw body with AlbumSchema; the same schema is
       used for every Album in responses, so what a client sends is exactly
       what it reads back.

Decoding rules for AlbumSchema:
    - all four fields are required
    - strict types: id/title/artist must be JSON strings, price a JSON number
      (integers are accepted for price); "9.99" as a string is rejected
    - price must be finite: NaN and Infinity are rejected
    - unknown keys are ignored
"""

from pydantic import BaseModel, ConfigDict, Field


class AlbumSchema(BaseModel):
    """
    What:  The Album resource as seen over HTTP.
    Who:   Request body of POST /albums; response of GET and POST endpoints.

    Example:
        {"id": "a1", "title": "Blue Train", "artist": "John Coltrane", "price": 56.99}
    """
    id: str = Field(strict=True, description="Caller-chosen unique identifier")
    title: str = Field(strict=True, description="Album title")
    artist: str = Field(strict=True, description="Performing artist")
    price: float = Field(
        strict=True,
        allow_inf_nan=False,
        description="Price as a finite decimal number",
    )

    model_config = ConfigDict(from_attributes=True, extra="ignore")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every failing endpoint.

    Example:
        {"error": "album not found"}
    """
    error: str = Field(description="Human-readable error message")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and container health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
