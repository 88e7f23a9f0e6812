"""Configuration for the report collection service connection."""

from pydantic import BaseModel, Field, field_validator


class ReportServiceConfig(BaseModel):
    """Connection settings for a GHR report collection service.

    Attributes:
        url: Base URL of the service (e.g. "http://localhost:8080").
        reports_path: Path of the report listing endpoint.
        timeout: Timeout in seconds for a request.
    """

    url: str = "http://localhost:8080"
    reports_path: str = "/reports"
    timeout: float = Field(default=30.0, ge=1.0)

    @field_validator("url")
    @classmethod
    def _require_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Report service URL is required")
        return v.strip()
