"""Footing extractor."""

from __future__ import annotations

from typing import Any

from aecmetrics.config import QTO_FOOTING
from aecmetrics.extraction.extractors.base import (
    ExtractionContext,
    MetricsExtractor,
    cubic_feet,
    feet,
)
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import FootingMetrics


def footing_type(name: str | None) -> str:
    lower = (name or "").lower()
    if "strip" in lower or "continuous" in lower:
        return "continuous"
    if "pad" in lower or "footing" in lower:
        return "pad"
    if "pier" in lower:
        return "pier"
    return "other"


class FootingExtractor(MetricsExtractor):
    ifc_class = "IfcFooting"
    qto_set = QTO_FOOTING

    @property
    def category(self) -> str:
        return "footing"

    @property
    def metrics_model(self) -> type[FootingMetrics]:
        return FootingMetrics

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        base = ctx.base_source
        length = ctx.first(
            "length_ft",
            (f"{QTO_FOOTING}.Length", ctx.quantity("Length")),
            (f"{base}.Length", ctx.base("length")),
        )
        width = ctx.first(
            "width_ft",
            (f"{QTO_FOOTING}.Width", ctx.quantity("Width")),
            (f"{base}.Width", ctx.base("width")),
        )
        # Footing Qto reports thickness as Height
        thickness = ctx.first(
            "thickness_ft",
            (f"{QTO_FOOTING}.Height", ctx.quantity("Height")),
            (f"{base}.Height", ctx.base("height")),
            (f"{base}.Thickness", ctx.base("thickness")),
        )
        return {
            "length_ft": feet(length),
            "width_ft": feet(width),
            "thickness_ft": feet(thickness),
            "volume_cu_ft": cubic_feet(ctx.volume()),
            "footing_type": footing_type(ctx.identity.name),
        }


_extractor = FootingExtractor()


def extract_footing_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> FootingMetrics:
    return _extractor.extract(graph, ref, base_view, full_view, identity, trace)
