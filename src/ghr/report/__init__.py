"""Report data model and component dispatch.

The schema mirrors what GHR collectors emit: a report holds OS info and an
ordered list of components, each carrying one tagged description variant.
"""

from .components import (
    ComponentDescription,
    ComponentInfo,
    ComponentType,
    CpuDescription,
    GpuDescription,
    NoDescription,
    PciDescription,
    RamDescription,
    RejectedComponent,
    StorageDescription,
    UsbDescription,
    decode_description,
    narrow,
)
from .models import (
    OsInfo,
    Report,
    WrappedReport,
    cpu_descriptions,
    decode_report,
    decode_wrapped_reports,
    wrap_report,
)

__all__ = [
    "ComponentDescription",
    "ComponentInfo",
    "ComponentType",
    "CpuDescription",
    "GpuDescription",
    "NoDescription",
    "OsInfo",
    "PciDescription",
    "RamDescription",
    "RejectedComponent",
    "Report",
    "StorageDescription",
    "UsbDescription",
    "WrappedReport",
    "cpu_descriptions",
    "decode_description",
    "decode_report",
    "decode_wrapped_reports",
    "narrow",
    "wrap_report",
]
