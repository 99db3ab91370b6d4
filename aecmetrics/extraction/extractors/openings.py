"""Door and window extractors.

Both share the same lookup: width and height from the Qto set or
BaseQuantities, then parsed from the display name (``36" x 80"``,
``3' x 6'8"``, ``36x80``) when either is missing.
"""

from __future__ import annotations

from typing import Any

from aecmetrics.config import QTO_DOOR, QTO_WINDOW
from aecmetrics.extraction.dimensions import parse_opening_size
from aecmetrics.extraction.extractors.base import (
    ExtractionContext,
    MetricsExtractor,
    feet,
    square_feet,
)
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import DoorMetrics, WindowMetrics


class OpeningExtractor(MetricsExtractor):
    """Shared width/height/area lookup for doors and windows."""

    area_field = "area_sq_ft"

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        base = ctx.base_source
        qto = self.qto_set
        width = feet(
            ctx.first(
                "width_ft",
                (f"{qto}.Width", ctx.quantity("Width")),
                (f"{base}.Width", ctx.base("width")),
            )
        )
        height = feet(
            ctx.first(
                "height_ft",
                (f"{qto}.Height", ctx.quantity("Height")),
                (f"{base}.Height", ctx.base("height")),
            )
        )
        area = square_feet(
            ctx.first(
                self.area_field,
                (f"{qto}.Area", ctx.quantity("Area")),
                (f"{base}.NetArea", ctx.base("net_area")),
                (f"{base}.GrossArea", ctx.base("gross_area")),
            )
        )

        if width is None or height is None:
            parsed = parse_opening_size(ctx.identity.name)
            if parsed is not None:
                if width is None:
                    width = parsed[0]
                    ctx.note("width_ft", "parsed from name")
                if height is None:
                    height = parsed[1]
                    ctx.note("height_ft", "parsed from name")

        if area is None and width and height:
            area = width * height
            ctx.note(self.area_field, "width x height")

        return {"width_ft": width, "height_ft": height, self.area_field: area}


class DoorExtractor(OpeningExtractor):
    ifc_class = "IfcDoor"
    qto_set = QTO_DOOR
    area_field = "leaf_area_sq_ft"

    @property
    def category(self) -> str:
        return "door"

    @property
    def metrics_model(self) -> type[DoorMetrics]:
        return DoorMetrics


class WindowExtractor(OpeningExtractor):
    ifc_class = "IfcWindow"
    qto_set = QTO_WINDOW

    @property
    def category(self) -> str:
        return "window"

    @property
    def metrics_model(self) -> type[WindowMetrics]:
        return WindowMetrics


_door_extractor = DoorExtractor()
_window_extractor = WindowExtractor()


def extract_door_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> DoorMetrics:
    return _door_extractor.extract(graph, ref, base_view, full_view, identity, trace)


def extract_window_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> WindowMetrics:
    return _window_extractor.extract(graph, ref, base_view, full_view, identity, trace)
