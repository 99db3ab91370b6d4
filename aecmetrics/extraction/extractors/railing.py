"""Railing extractor."""

from __future__ import annotations

from typing import Any

from aecmetrics.config import QTO_RAILING
from aecmetrics.extraction.extractors.base import ExtractionContext, MetricsExtractor, feet
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import RailingMetrics


class RailingExtractor(MetricsExtractor):
    ifc_class = "IfcRailing"
    qto_set = QTO_RAILING

    @property
    def category(self) -> str:
        return "railing"

    @property
    def metrics_model(self) -> type[RailingMetrics]:
        return RailingMetrics

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        length = ctx.first(
            "length_ft",
            (f"{QTO_RAILING}.Length", ctx.quantity("Length")),
            (f"{ctx.base_source}.Length", ctx.base("length")),
        )
        return {"length_ft": feet(length)}


_extractor = RailingExtractor()


def extract_railing_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> RailingMetrics:
    return _extractor.extract(graph, ref, base_view, full_view, identity, trace)
