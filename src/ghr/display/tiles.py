"""Component tiles: the per-component render contract."""

from dataclasses import dataclass

from ghr.report.components import ComponentInfo, ComponentType
from ghr.report.models import Report

from .icons import IconId, component_kind, resolve_icon
from .summary import summarize

# Doubles as the list-rendering key, so it must stay stable.
NO_ID = "no id found"


@dataclass(frozen=True)
class ComponentTile:
    """Display fields for one component."""

    key: str
    name: str
    kind: ComponentType | None
    icon: IconId
    value: str


def component_key(component: ComponentInfo) -> str:
    """Rendering key for a component: its id, or ``NO_ID``."""
    return component.id or NO_ID


def build_tile(component: ComponentInfo) -> ComponentTile:
    kind = component_kind(component)
    key = component_key(component)
    return ComponentTile(
        key=key,
        name=key,
        kind=kind,
        icon=resolve_icon(kind),
        value=summarize(component.desc),
    )


def component_tiles(
    report: Report, kind: ComponentType | None = None
) -> list[ComponentTile]:
    """Tiles for a report's components, in report order.

    Args:
        report: Report to render.
        kind: If set, only tiles showing this kind. Undescribed PCI and
            USB devices match through their bus, like their icon does.
    """
    tiles = [build_tile(component) for component in report.components]
    if kind is None:
        return tiles
    return [tile for tile in tiles if tile.kind is kind]
