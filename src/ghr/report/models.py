"""Pydantic models for hardware reports and their collection wrapper."""

import datetime as dt
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, model_validator

from ghr.errors import DecodeError

from .components import (
    ComponentInfo,
    CpuDescription,
    RejectedComponent,
    decode_components,
    narrow,
)

logger = logging.getLogger(__name__)


class OsInfo(BaseModel):
    """Operating system the report was collected on."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr
    version: StrictStr
    architecture: StrictStr
    other: dict[str, str] = Field(default_factory=dict)


class BiosInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    vendor: str | None = None
    version: str | None = None
    date: dt.date | None = None


class ChassisInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str | None = None
    vendor: str | None = None
    version: str | None = None


class MachineInfo(BaseModel):
    """Machine-level details. ``hash`` is opaque to the client."""

    model_config = ConfigDict(frozen=True)

    vendor: str | None = None
    model: str | None = None
    bios: BiosInfo = Field(default_factory=BiosInfo)
    chassis: ChassisInfo = Field(default_factory=ChassisInfo)
    hash: Any = None


class Report(BaseModel):
    """One hardware inventory snapshot from a single host.

    Components keep the collector's order and duplicates are not merged.
    Components that fail to decode are moved to ``rejected`` instead of
    failing the whole report.
    """

    model_config = ConfigDict(frozen=True)

    os: OsInfo
    machine: MachineInfo | None = None
    components: tuple[ComponentInfo, ...]
    rejected: tuple[RejectedComponent, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _isolate_component_failures(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        raw_components = data.get("components")
        if not isinstance(raw_components, (list, tuple)):
            return data

        components, rejected = decode_components(raw_components)
        return {
            **data,
            "components": components,
            "rejected": [*data.get("rejected", ()), *rejected],
        }

    def to_wire(self) -> dict[str, Any]:
        """Dump in the collector's JSON layout.

        Rejected components are put back at their original positions as
        they were received, so the output matches the input schema.
        """
        data = self.model_dump(mode="json", by_alias=True, exclude={"rejected"})
        for rejected in sorted(self.rejected, key=lambda r: r.index):
            data["components"].insert(rejected.index, rejected.raw)
        return data


class WrappedReport(BaseModel):
    """A report plus the metadata the collection service adds.

    Attributes:
        id: Unique within a collection; used as the rendering key.
        recv_time: When the service received the report. Display only.
        report: The report itself.
    """

    model_config = ConfigDict(frozen=True)

    id: StrictStr
    recv_time: datetime
    report: Report

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude={"report"})
        data["report"] = self.report.to_wire()
        return data


def decode_report(payload: Any) -> Report:
    """Decode a bare report as written by the collector.

    Raises:
        DecodeError: If the payload does not match the report schema.
    """
    try:
        return Report.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f"Invalid report: {e}") from e


def decode_wrapped_reports(payload: Any) -> tuple[WrappedReport, ...]:
    """Decode a ``GET /reports`` response body.

    Args:
        payload: Parsed JSON; must be an array of wrapped reports.

    Returns:
        Wrapped reports in response order. Empty when the array is empty.

    Raises:
        DecodeError: If the payload is not an array or an entry is invalid.
    """
    if not isinstance(payload, list):
        raise DecodeError(
            f"Expected a JSON array of reports, got {type(payload).__name__}"
        )

    reports = []
    for index, entry in enumerate(payload):
        try:
            reports.append(WrappedReport.model_validate(entry))
        except ValidationError as e:
            raise DecodeError(f"Invalid report at index {index}: {e}") from e

    rejected = sum(len(r.report.rejected) for r in reports)
    logger.debug(
        f"Decoded {len(reports)} report(s), {rejected} rejected component(s)"
    )
    return tuple(reports)


def wrap_report(
    report: Report,
    recv_time: datetime | None = None,
    report_id: str | None = None,
) -> WrappedReport:
    """Wrap a bare report with generated collection metadata."""
    return WrappedReport(
        id=report_id or str(uuid.uuid4()),
        recv_time=recv_time or datetime.now(timezone.utc),
        report=report,
    )


def cpu_descriptions(report: Report) -> list[tuple[ComponentInfo, CpuDescription]]:
    """All CPU components of a report, in report order."""
    return narrow(report.components, CpuDescription)
