"""Wall extractor."""

from __future__ import annotations

from typing import Any

from aecmetrics.config import QTO_WALL
from aecmetrics.extraction.extractors.base import (
    ExtractionContext,
    MetricsExtractor,
    cubic_feet,
    feet,
    square_feet,
)
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import WallMetrics


class WallExtractor(MetricsExtractor):
    ifc_class = "IfcWall"
    qto_set = QTO_WALL

    @property
    def category(self) -> str:
        return "wall"

    @property
    def metrics_model(self) -> type[WallMetrics]:
        return WallMetrics

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        base = ctx.base_source
        length = ctx.first(
            "length_ft",
            (f"{QTO_WALL}.Length", ctx.quantity("Length")),
            (f"{base}.Length", ctx.base("length")),
        )
        height = ctx.first(
            "height_ft",
            (f"{QTO_WALL}.Height", ctx.quantity("Height")),
            (f"{base}.Height", ctx.base("height")),
        )
        thickness = ctx.first(
            "thickness_ft",
            (f"{QTO_WALL}.Width", ctx.quantity("Width")),
            (f"{base}.Thickness", ctx.base("thickness")),
            (f"{base}.Width", ctx.base("width")),
        )
        area = ctx.first(
            "area_one_side_sq_ft",
            (f"{QTO_WALL}.NetArea", ctx.quantity("NetArea")),
            (f"{QTO_WALL}.GrossArea", ctx.quantity("GrossArea")),
            (f"{base}.NetArea", ctx.base("net_area")),
            (f"{base}.GrossArea", ctx.base("gross_area")),
        )
        return {
            "length_ft": feet(length),
            "height_ft": feet(height),
            "thickness_ft": feet(thickness),
            "area_one_side_sq_ft": square_feet(area),
            "volume_cu_ft": cubic_feet(ctx.volume()),
        }


_extractor = WallExtractor()


def extract_wall_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> WallMetrics:
    return _extractor.extract(graph, ref, base_view, full_view, identity, trace)
