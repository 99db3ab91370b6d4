"""Casework (cabinets, vanities) extractor."""

from __future__ import annotations

from typing import Any

from aecmetrics.config import QTO_FURNITURE
from aecmetrics.extraction.extractors.base import (
    ExtractionContext,
    MetricsExtractor,
    cubic_feet,
    feet,
    square_feet,
)
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import CaseworkMetrics

# Checked in order; "Tall Wall Cabinet" is a wall cabinet
_CASEWORK_TYPES = ("base", "wall", "tall", "vanity")


def casework_type(name: str | None, type_name: str | None) -> str:
    texts = ((name or "").lower(), (type_name or "").lower())
    for kind in _CASEWORK_TYPES:
        if any(kind in text for text in texts):
            return kind
    return "other"


class CaseworkExtractor(MetricsExtractor):
    ifc_class = "IfcFurniture"
    qto_set = QTO_FURNITURE

    @property
    def category(self) -> str:
        return "casework"

    @property
    def metrics_model(self) -> type[CaseworkMetrics]:
        return CaseworkMetrics

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        base = ctx.base_source
        values: dict[str, Any] = {}
        for field_name, qty_name, base_name in (
            ("width_ft", "Width", "width"),
            ("depth_ft", "Depth", "depth"),
            ("height_ft", "Height", "height"),
        ):
            raw = ctx.first(
                field_name,
                (f"{QTO_FURNITURE}.{qty_name}", ctx.quantity(qty_name)),
                (f"{base}.{qty_name}", ctx.base(base_name)),
            )
            values[field_name] = feet(raw)

        area = ctx.first(
            "area_sq_ft",
            (f"{QTO_FURNITURE}.GrossArea", ctx.quantity("GrossArea")),
            (f"{QTO_FURNITURE}.NetArea", ctx.quantity("NetArea")),
            (f"{base}.GrossArea", ctx.base("gross_area")),
            (f"{base}.NetArea", ctx.base("net_area")),
        )
        values["area_sq_ft"] = square_feet(area)
        values["volume_cu_ft"] = cubic_feet(ctx.volume())
        values["casework_type"] = casework_type(ctx.identity.name, ctx.identity.type_name)
        return values


_extractor = CaseworkExtractor()


def extract_casework_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> CaseworkMetrics:
    return _extractor.extract(graph, ref, base_view, full_view, identity, trace)
