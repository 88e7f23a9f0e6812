"""Hardware component schema and the tagged description union.

Collectors describe each component with an externally tagged payload:
``{"CpuDescription": {...}}``, ``{"GpuDescription": {...}}`` and so on, or the
bare string ``"None"`` when nothing is known about the device. Decoding maps
the tag to one closed set of pydantic models and rejects anything else.
"""

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any, ClassVar, Literal, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)

from ghr.errors import DecodeError

logger = logging.getLogger(__name__)

# Numbers are never coerced from strings or booleans.
Number = StrictInt | StrictFloat


class ComponentType(str, Enum):
    """Closed set of hardware component kinds."""

    CPU = "cpu"
    GPU = "gpu"
    RAM = "ram"
    STORAGE = "storage"
    PCI = "pci"
    USB = "usb"


# ----------------------------------------------------------------------
# Description variants
# ----------------------------------------------------------------------


class ComponentDescriptionBase(BaseModel):
    """Common base for every description variant.

    Subclasses set ``tag`` (the wire discriminant) and ``kind``.
    """

    model_config = ConfigDict(frozen=True)

    tag: ClassVar[str]
    kind: ClassVar[ComponentType | None]

    def to_wire(self) -> Any:
        """Encode back into the externally tagged wire form."""
        return {self.tag: self.model_dump(mode="json")}


class Frequency(BaseModel):
    """Minimum and maximum frequency in MHz."""

    model_config = ConfigDict(frozen=True)

    min: Number | None = None
    max: Number | None = None


CACHE_LEVELS = ("L1", "L2", "L3")


class CpuCache(BaseModel):
    """One level of CPU cache.

    On the wire the level is the tag: ``{"L2": {"size": 512, "speed": null}}``.
    """

    model_config = ConfigDict(frozen=True)

    level: Literal["L1", "L2", "L3"]
    size: StrictInt
    speed: StrictInt | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap_level(cls, data: Any) -> Any:
        if isinstance(data, dict) and len(data) == 1:
            ((level, payload),) = data.items()
            if level in CACHE_LEVELS and isinstance(payload, dict):
                return {"level": level, **payload}
        return data

    @model_serializer(mode="wrap")
    def _wrap_level(self, handler):
        data = handler(self)
        level = data.pop("level")
        return {level: data}


class CpuCore(BaseModel):
    """One physical processor core."""

    model_config = ConfigDict(frozen=True)

    cache: tuple[CpuCache, ...] | None = None
    speeds: Frequency


class CpuDescription(ComponentDescriptionBase):
    """About the central processing unit."""

    tag: ClassVar[str] = "CpuDescription"
    kind: ClassVar[ComponentType | None] = ComponentType.CPU

    clock_speed: Frequency
    core_ct: StrictInt | None = None
    cache: tuple[CpuCache, ...] | None = None
    cores: tuple[CpuCore, ...] | None = None


class GpuDescription(ComponentDescriptionBase):
    """About a graphics adapter. Clocks in MHz, memory in MiB."""

    tag: ClassVar[str] = "GpuDescription"
    kind: ClassVar[ComponentType | None] = ComponentType.GPU

    clock_speed: Number | None = None
    video_memory: Number | None = None
    video_memory_speed: Number | None = None


class RamDescription(ComponentDescriptionBase):
    """About system memory.

    Per-stick values are often unavailable. ``total_phsyical_memory`` keeps
    the collector's spelling since it is the wire key.
    """

    tag: ClassVar[str] = "RamDescription"
    kind: ClassVar[ComponentType | None] = ComponentType.RAM

    total_phsyical_memory: Number | None = None
    configured_clock_speed: Number | None = None
    configured_voltage: Number | None = None
    removable: Literal["Removable", "NonRemovable"] | None = None


class StorageUsage(BaseModel):
    """Used and total bytes on a storage device."""

    model_config = ConfigDict(frozen=True)

    usage: Number | None = None
    total_capacity: Number | None = None


class StorageDescription(ComponentDescriptionBase):
    """About a disk or other storage device."""

    tag: ClassVar[str] = "StorageDescription"
    kind: ClassVar[ComponentType | None] = ComponentType.STORAGE

    kind_: StrictStr | None = Field(default=None, alias="kind")
    usage: StorageUsage = Field(default_factory=StorageUsage)
    speed: Number | None = None
    connector: StrictStr | None = None
    is_removable: StrictBool | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("connector", mode="before")
    @classmethod
    def _flatten_other(cls, value: Any) -> Any:
        # {"Other": "Thunderbolt"} -> "Thunderbolt"
        if isinstance(value, dict) and set(value) == {"Other"}:
            return value["Other"]
        return value

    def to_wire(self) -> Any:
        return {self.tag: self.model_dump(mode="json", by_alias=True)}


class PciDescription(ComponentDescriptionBase):
    """PCI device payload, kept as-is."""

    tag: ClassVar[str] = "PciDescription"
    kind: ClassVar[ComponentType | None] = ComponentType.PCI

    model_config = ConfigDict(frozen=True, extra="allow")


class UsbDescription(ComponentDescriptionBase):
    """USB device payload, kept as-is."""

    tag: ClassVar[str] = "UsbDescription"
    kind: ClassVar[ComponentType | None] = ComponentType.USB

    model_config = ConfigDict(frozen=True, extra="allow")


class NoDescription(ComponentDescriptionBase):
    """The collector had nothing to say about this device."""

    tag: ClassVar[str] = "None"
    kind: ClassVar[ComponentType | None] = None

    def to_wire(self) -> Any:
        return self.tag


ComponentDescription = (
    CpuDescription
    | GpuDescription
    | RamDescription
    | StorageDescription
    | PciDescription
    | UsbDescription
    | NoDescription
)

DESCRIPTION_TYPES: dict[str, type[ComponentDescriptionBase]] = {
    model.tag: model
    for model in (
        CpuDescription,
        GpuDescription,
        RamDescription,
        StorageDescription,
        PciDescription,
        UsbDescription,
    )
}

_TYPES_BY_KIND: dict[ComponentType, type[ComponentDescriptionBase]] = {
    model.kind: model for model in DESCRIPTION_TYPES.values()
}


def description_type(kind: ComponentType) -> type[ComponentDescriptionBase]:
    """Return the description model carrying the given component kind."""
    return _TYPES_BY_KIND[kind]


def decode_description(raw: Any) -> ComponentDescriptionBase:
    """Decode one wire description into its variant model.

    Args:
        raw: ``{"<Tag>": {...}}``, the string ``"None"``, or an already
            decoded description.

    Returns:
        The matching description model instance.

    Raises:
        DecodeError: If the tag is unknown or the payload does not fit it.
    """
    if isinstance(raw, ComponentDescriptionBase):
        return raw
    if isinstance(raw, str):
        if raw == NoDescription.tag:
            return NoDescription()
        raise DecodeError(f"Unknown component description tag: {raw!r}")
    if not isinstance(raw, dict) or len(raw) != 1:
        raise DecodeError(
            f"Component description must be a single-key object, got {raw!r}"
        )

    ((tag, payload),) = raw.items()
    model = DESCRIPTION_TYPES.get(tag)
    if model is None:
        raise DecodeError(f"Unknown component description tag: {tag!r}")
    if not isinstance(payload, dict):
        raise DecodeError(f"{tag} payload must be an object, got {payload!r}")

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f"Invalid {tag} payload: {e}") from e


# ----------------------------------------------------------------------
# Components
# ----------------------------------------------------------------------


class ComponentInfo(BaseModel):
    """One inventoried hardware component.

    Attributes:
        id: Collector-provided identifier, often a product name.
        desc: Kind-specific description payload.
        bus: Bus the device sits on ("Pci", "Usb", "Sys", ...).
        class_: Device class code, wire key ``class``.
        vendor_id: Vendor identifier or name.
        status: Opaque health info.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: StrictStr | None = None
    desc: ComponentDescription
    bus: StrictStr | None = None
    class_: StrictStr | None = Field(default=None, alias="class")
    vendor_id: StrictStr | None = None
    status: dict[str, Any] | None = None

    @field_validator("desc", mode="before")
    @classmethod
    def _decode_desc(cls, value: Any) -> Any:
        try:
            return decode_description(value)
        except DecodeError as e:
            raise ValueError(str(e)) from e

    @field_validator("bus", mode="before")
    @classmethod
    def _flatten_other_bus(cls, value: Any) -> Any:
        if isinstance(value, dict) and set(value) == {"Other"}:
            return value["Other"]
        return value

    @field_serializer("desc")
    def _encode_desc(self, desc: ComponentDescriptionBase) -> Any:
        return desc.to_wire()

    @property
    def kind(self) -> ComponentType | None:
        """Component kind carried by the description, if any."""
        return self.desc.kind


class RejectedComponent(BaseModel):
    """A component whose payload failed to decode.

    Kept beside the report so the failure stays visible without
    aborting the rest of the report.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    raw: Any = None
    error: str


def decode_components(
    raw_components: Iterable[Any],
) -> tuple[list[ComponentInfo], list[RejectedComponent]]:
    """Decode a wire component list, isolating per-component failures.

    Returns:
        Tuple of (decoded components in original order, rejected entries).
    """
    components: list[ComponentInfo] = []
    rejected: list[RejectedComponent] = []

    for index, raw in enumerate(raw_components):
        if isinstance(raw, ComponentInfo):
            components.append(raw)
            continue
        try:
            components.append(ComponentInfo.model_validate(raw))
        except ValidationError as e:
            error = "; ".join(err["msg"] for err in e.errors())
            logger.warning(f"Skipping undecodable component #{index}: {error}")
            rejected.append(RejectedComponent(index=index, raw=raw, error=error))

    return components, rejected


# ----------------------------------------------------------------------
# Narrowing
# ----------------------------------------------------------------------

D = TypeVar("D", bound=ComponentDescriptionBase)


def narrow(
    components: Iterable[Any],
    variant: type[D] | ComponentType,
) -> list[tuple[ComponentInfo, D]]:
    """Select the components carrying one description variant.

    Scans once and keeps input order. Anything that is not a decoded
    ``ComponentInfo`` never matches.

    Args:
        components: Components to scan. Not modified.
        variant: A description class such as ``CpuDescription``, or a
            ``ComponentType``.

    Returns:
        ``(component, description)`` pairs; empty when nothing matches.
    """
    if isinstance(variant, ComponentType):
        variant = description_type(variant)

    matches: list[tuple[ComponentInfo, D]] = []
    for component in components:
        if not isinstance(component, ComponentInfo):
            continue
        if isinstance(component.desc, variant):
            matches.append((component, component.desc))
    return matches
