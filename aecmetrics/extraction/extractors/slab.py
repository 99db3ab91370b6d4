"""Slab, floor and deck extractor."""

from __future__ import annotations

import logging
import math
from typing import Any

from aecmetrics.config import QTO_SLAB, RECTANGLE_AREA_TOLERANCE
from aecmetrics.extraction.extractors.base import (
    ExtractionContext,
    MetricsExtractor,
    cubic_feet,
    feet,
    square_feet,
)
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import SlabMetrics
from aecmetrics.units import format_size_display, positive_number

logger = logging.getLogger(__name__)


def rectangle_from_perimeter_area(perimeter_ft: float, area_sq_ft: float) -> tuple[float, float] | None:
    """Solve ``w^2 - (P/2)w + A = 0`` for a rectangle's ``(width, length)``.

    Returns None when there is no real solution or the reconstructed area
    misses the actual one by 5% or more.
    """
    if perimeter_ft <= 0 or area_sq_ft <= 0:
        return None
    semi = perimeter_ft / 2
    discriminant = semi * semi - 4 * area_sq_ft
    if discriminant < 0:
        return None
    root = math.sqrt(discriminant)
    length = (semi + root) / 2
    width = (semi - root) / 2
    if width <= 0 or length <= 0:
        return None
    if abs(length * width - area_sq_ft) / area_sq_ft >= RECTANGLE_AREA_TOLERANCE:
        return None
    return width, length


def slab_kind(name: str | None, is_external: bool | None) -> str:
    lower = (name or "").lower()
    if any(token in lower for token in ("deck", "balcony", "patio")):
        return "deck"
    if "porch" in lower:
        return "porch"
    if is_external:
        return "exterior"
    return "interior"


class SlabExtractor(MetricsExtractor):
    ifc_class = "IfcSlab"
    qto_set = QTO_SLAB

    @property
    def category(self) -> str:
        return "slab"

    @property
    def categories(self) -> tuple[str, ...]:
        return ("slab", "floor", "deck")

    @property
    def metrics_model(self) -> type[SlabMetrics]:
        return SlabMetrics

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        base = ctx.base_source
        adapter = ctx.adapter("floor")

        area_raw = ctx.first(
            "area_sq_ft",
            (f"{QTO_SLAB}.GrossArea", ctx.quantity("GrossArea")),
            (f"{base}.GrossArea", ctx.base("gross_area")),
            (f"{base}.NetArea", ctx.base("net_area")),
            ("FloorAdapter.FloorArea", positive_number(adapter.get("floorarea"))),
            (f"{QTO_SLAB}.NetArea", ctx.quantity("NetArea")),
        )
        perimeter_raw = ctx.first(
            "perimeter_ft",
            (f"{QTO_SLAB}.Perimeter", ctx.quantity("Perimeter")),
            (f"{base}.Perimeter", ctx.base("perimeter")),
            ("FloorAdapter.FloorPerimeter", positive_number(adapter.get("floorperimeter"))),
        )
        # Width in the slab Qto is the slab's thickness
        thickness_raw = ctx.first(
            "thickness_ft",
            (f"{QTO_SLAB}.Width", ctx.quantity("Width")),
            (f"{base}.Thickness", ctx.base("thickness")),
            ("FloorAdapter.FloorThickness", positive_number(adapter.get("floorthickness"))),
        )

        area = square_feet(area_raw)
        perimeter = feet(perimeter_raw)

        size_display = None
        length_raw = ctx.quantity("Length")
        if length_raw is None:
            length_raw = ctx.base("length")
        plan_width_raw = ctx.base("width")
        if length_raw is not None and plan_width_raw is not None:
            size_display = format_size_display(feet(plan_width_raw), feet(length_raw))
            ctx.note("size_display", "Length x Width")
        elif perimeter and area:
            rectangle = rectangle_from_perimeter_area(perimeter, area)
            if rectangle is not None:
                size_display = format_size_display(*rectangle)
                ctx.note("size_display", "rectangle from perimeter and area")

        return {
            "area_sq_ft": area,
            "perimeter_ft": perimeter,
            "thickness_ft": feet(thickness_raw),
            "volume_cu_ft": cubic_feet(ctx.volume()),
            "size_display": size_display or None,
            "slab_kind": slab_kind(ctx.identity.name, ctx.identity.is_external),
        }


_extractor = SlabExtractor()


def extract_slab_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> SlabMetrics:
    return _extractor.extract(graph, ref, base_view, full_view, identity, trace)
