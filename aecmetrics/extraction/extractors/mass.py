"""Massing element extractor (proxies classified as mass)."""

from __future__ import annotations

from typing import Any

from aecmetrics.config import QTO_PROXY
from aecmetrics.extraction.extractors.base import (
    ExtractionContext,
    MetricsExtractor,
    cubic_feet,
    square_feet,
)
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import MassMetrics


class MassExtractor(MetricsExtractor):
    ifc_class = "IfcBuildingElementProxy"
    qto_set = QTO_PROXY

    @property
    def category(self) -> str:
        return "mass"

    @property
    def metrics_model(self) -> type[MassMetrics]:
        return MassMetrics

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        base = ctx.base_source
        gross = ctx.first(
            "gross_area_sq_ft",
            (f"{QTO_PROXY}.GrossArea", ctx.quantity("GrossArea")),
            (f"{QTO_PROXY}.NetArea", ctx.quantity("NetArea")),
            (f"{base}.GrossArea", ctx.base("gross_area")),
            (f"{base}.NetArea", ctx.base("net_area")),
        )
        footprint = ctx.first(
            "footprint_area_sq_ft", (f"{base}.ProjectedArea", ctx.base("projected_area"))
        )
        return {
            "volume_cu_ft": cubic_feet(ctx.volume()),
            "gross_area_sq_ft": square_feet(gross),
            "footprint_area_sq_ft": square_feet(footprint),
            "mass_kind": "massing" if "mass" in ctx.free_text else "other",
        }


_extractor = MassExtractor()


def extract_mass_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> MassMetrics:
    return _extractor.extract(graph, ref, base_view, full_view, identity, trace)
