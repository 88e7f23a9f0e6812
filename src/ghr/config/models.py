"""Pydantic models for GHR client configuration."""

from pydantic import BaseModel, Field

from ghr.client.config import ReportServiceConfig


class ClientConfig(BaseModel):
    """Top-level client configuration (``~/.ghr/client.yaml``)."""

    service: ReportServiceConfig = Field(default_factory=ReportServiceConfig)
    surface_errors: bool = True
