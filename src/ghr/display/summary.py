"""One-line value summaries for component descriptions.

Absent numbers are shown as ``0`` and absent labels as ``unknown``; a
summary is never an error.
"""

from typing import Any

from ghr.report.components import (
    ComponentDescriptionBase,
    CpuDescription,
    GpuDescription,
    RamDescription,
    StorageDescription,
)

NO_DESCRIPTION = "no description"


def _number(value: Any) -> Any:
    return 0 if value is None else value


def _label(value: str | None) -> str:
    return value or "unknown"


def summarize_cpu(cpu: CpuDescription) -> str:
    """Clock range of a CPU, e.g. ``"max is 4200. min is 800"``."""
    clock = cpu.clock_speed
    return f"max is {_number(clock.max)}. min is {_number(clock.min)}"


def summarize(desc: ComponentDescriptionBase) -> str:
    """Human-readable value string for any description variant.

    PCI, USB and description-less devices have nothing to summarize.
    """
    if isinstance(desc, CpuDescription):
        return summarize_cpu(desc)
    if isinstance(desc, GpuDescription):
        return (
            f"clock is {_number(desc.clock_speed)} MHz. "
            f"vram is {_number(desc.video_memory)} MiB"
        )
    if isinstance(desc, RamDescription):
        return f"total is {_number(desc.total_phsyical_memory)} bytes"
    if isinstance(desc, StorageDescription):
        return (
            f"{_label(desc.kind_)} via {_label(desc.connector)}. "
            f"capacity is {_number(desc.usage.total_capacity)} bytes"
        )
    return NO_DESCRIPTION
