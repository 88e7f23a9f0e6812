"""Icon selection for component kinds."""

from enum import Enum
from typing import Any

from ghr.report.components import ComponentInfo, ComponentType


class IconId(str, Enum):
    """Material Design icon names used for component tiles."""

    CPU = "mdi-cpu-64-bit"
    GPU = "mdi-expansion-card"
    MEMORY = "mdi-memory"
    STORAGE = "mdi-tape-drive"
    EXPANSION_CARD = "mdi-expansion-card-variant"
    USB = "mdi-usb-port"
    UNKNOWN = "mdi-help-rhombus"


FALLBACK_ICON = IconId.UNKNOWN

_ICONS: dict[ComponentType, IconId] = {
    ComponentType.CPU: IconId.CPU,
    ComponentType.GPU: IconId.GPU,
    ComponentType.RAM: IconId.MEMORY,
    ComponentType.STORAGE: IconId.STORAGE,
    ComponentType.PCI: IconId.EXPANSION_CARD,
    ComponentType.USB: IconId.USB,
}

# Buses that identify a device kind when the collector sent no description.
_KINDS_BY_BUS: dict[str, ComponentType] = {
    "pci": ComponentType.PCI,
    "usb": ComponentType.USB,
}


def resolve_icon(kind: Any) -> IconId:
    """Map a component kind to its icon.

    Never fails: anything outside ``ComponentType`` (unknown strings from a
    newer wire format, ``None``, unhashable values) gets ``FALLBACK_ICON``.
    Plain strings equal to a member value, such as ``"cpu"``, resolve like
    the member.
    """
    try:
        kind = ComponentType(kind)
    except (TypeError, ValueError):
        return FALLBACK_ICON
    return _ICONS.get(kind, FALLBACK_ICON)


def component_kind(component: ComponentInfo) -> ComponentType | None:
    """Best-known kind of a component.

    The description decides; description-less devices fall back to the
    bus they were found on.
    """
    if component.kind is not None:
        return component.kind
    if component.bus:
        return _KINDS_BY_BUS.get(component.bus.lower())
    return None
