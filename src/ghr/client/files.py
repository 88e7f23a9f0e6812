"""Read reports from a local JSON file instead of the service."""

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ghr.errors import DecodeError, TransportError
from ghr.report.models import decode_report, wrap_report

logger = logging.getLogger(__name__)


class FileReportSource:
    """Serves a saved report file with the same interface as the HTTP client.

    The file may hold either a ``GET /reports`` style array of wrapped
    reports, or one bare report as written by the collector's ``save``
    command. A bare report is wrapped with a generated id and the file's
    modification time as its receipt time.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> Any:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise TransportError(str(self.path), "file not found") from None
        except OSError as e:
            raise TransportError(str(self.path), str(e)) from e
        except json.JSONDecodeError as e:
            raise DecodeError(f"Invalid JSON in {self.path}: {e}") from e

        if isinstance(data, dict):
            logger.debug(f"{self.path} holds a bare report; wrapping it")
            mtime = datetime.fromtimestamp(self.path.stat().st_mtime, tz=timezone.utc)
            wrapped = wrap_report(
                decode_report(data),
                recv_time=mtime,
                report_id=self.path.stem,
            )
            return [wrapped.to_wire()]
        return data

    async def fetch(self) -> Any:
        """Read the file off the event loop and return its JSON payload."""
        return await asyncio.to_thread(self._read)

    def describe(self) -> str:
        """Where reports are read from, for logs and output."""
        return str(self.path)
