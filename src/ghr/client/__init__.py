"""Report sources: the collection service over HTTP, or a saved file.

Both expose ``fetch()`` returning the raw JSON payload, so the report store
can use either one.
"""

from .config import ReportServiceConfig
from .files import FileReportSource
from .http import ReportServiceClient

__all__ = [
    "FileReportSource",
    "ReportServiceClient",
    "ReportServiceConfig",
]
