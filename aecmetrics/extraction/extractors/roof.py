"""Roof extractor.

Roofs are the one category where property sets and quantity sets are both
scanned wholesale: slope lives in whatever common pset the exporter chose,
and slabs used as roofs carry their thickness as ``Width`` in a slab Qto.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from aecmetrics.config import MIN_PITCH_COSINE, QTO_ROOF
from aecmetrics.extraction.extractors.base import (
    ExtractionContext,
    MetricsExtractor,
    feet,
    square_feet,
)
from aecmetrics.extraction.resolver import (
    find_adapter_set,
    normalize_name,
    property_entries,
    property_sets,
    quantity_entries,
    quantity_sets,
)
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import RoofMetrics
from aecmetrics.units import pitch_angle_degrees, pitch_to_slope, positive_number

logger = logging.getLogger(__name__)

_THICKNESS_NAMES = ("thickness", "overallthickness")


def _is_roof_set(set_label: str) -> bool:
    lower = set_label.lower()
    return "roof" in lower or "slab" in lower


def derive_surface_area(footprint_sq_ft: float, pitch_deg: float) -> float | None:
    """Sloped area from plan area and pitch; None for a near-vertical plane."""
    cosine = math.cos(math.radians(pitch_deg))
    if abs(cosine) <= MIN_PITCH_COSINE:
        return None
    return footprint_sq_ft / cosine


class RoofExtractor(MetricsExtractor):
    ifc_class = "IfcRoof"
    qto_set = QTO_ROOF

    @property
    def category(self) -> str:
        return "roof"

    @property
    def metrics_model(self) -> type[RoofMetrics]:
        return RoofMetrics

    def _slope_from_psets(self, ctx: ExtractionContext) -> tuple[str | None, float | None]:
        adapter = find_adapter_set(ctx.full_view, "roof")
        sets = [s for s in property_sets(ctx.full_view) if s is not adapter]
        for set_label, prop_name, value in property_entries(ctx.graph, sets):
            name = normalize_name(prop_name)
            is_slope = (
                name in ("slope", "pitch", "pitchangle")
                or "slope" in name
                or (_is_roof_set(set_label) and "pitch" in name)
            )
            if not is_slope:
                continue
            slope = pitch_to_slope(value)
            if slope:
                ctx.note("slope", f"{set_label}.{prop_name}")
                return slope, pitch_angle_degrees(value)
        return None, None

    def _thickness_from_psets(self, ctx: ExtractionContext) -> float | None:
        adapter = find_adapter_set(ctx.full_view, "roof")
        sets = [s for s in property_sets(ctx.full_view) if s is not adapter]
        for set_label, prop_name, value in property_entries(ctx.graph, sets):
            name = normalize_name(prop_name)
            if "thickness" in name or (_is_roof_set(set_label) and name in ("width", "depth")):
                number = positive_number(value)
                if number is not None:
                    ctx.note("thickness_ft", f"{set_label}.{prop_name}")
                    return number
        return None

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        thickness: float | None = None
        gross: float | None = None
        net: float | None = None
        projected: float | None = None
        length: float | None = None
        width: float | None = None
        depth: float | None = None

        for set_label, qty_name, value in quantity_entries(ctx.graph, quantity_sets(ctx.full_view)):
            name = normalize_name(qty_name)
            roof_set = _is_roof_set(set_label)
            took_thickness = False
            if thickness is None and (
                name in _THICKNESS_NAMES or "thickness" in name or (roof_set and name in ("width", "depth"))
            ):
                thickness = value
                took_thickness = True
                ctx.note("thickness_ft", f"{set_label}.{qty_name}")
            if roof_set or "base" in set_label.lower():
                if name == "grossarea" and gross is None:
                    gross = value
                elif name == "netarea" and net is None:
                    net = value
                elif name == "projectedarea" and projected is None:
                    projected = value
            if name == "length" and length is None:
                length = value
            # In roof and slab sets Width/Depth are thickness unless thickness came first
            plan_dimension = not roof_set or (thickness is not None and not took_thickness)
            if name == "width" and width is None and plan_dimension:
                width = value
            if name == "depth" and depth is None and plan_dimension:
                depth = value

        thickness_raw = thickness
        if thickness_raw is None:
            thickness_raw = ctx.first(
                "thickness_ft", (f"{ctx.base_source}.Thickness", ctx.base("thickness"))
            )
        if thickness_raw is None:
            thickness_raw = self._thickness_from_psets(ctx)

        surface_raw = ctx.first(
            "surface_area_sq_ft",
            ("quantity set GrossArea", gross),
            ("quantity set NetArea", net),
            (f"{ctx.base_source}.GrossArea", ctx.base("gross_area")),
            (f"{ctx.base_source}.NetArea", ctx.base("net_area")),
        )
        surface = square_feet(surface_raw)

        footprint_raw = ctx.first(
            "footprint_area_sq_ft",
            ("quantity set ProjectedArea", projected),
            (f"{ctx.base_source}.ProjectedArea", ctx.base("projected_area")),
        )
        if footprint_raw is None:
            plan_length = length if length is not None else ctx.base("length")
            plan_width = next(
                (v for v in (width, depth, ctx.base("width"), ctx.base("depth")) if v is not None),
                None,
            )
            if plan_length is not None and plan_width is not None:
                footprint_raw = plan_length * plan_width
                ctx.note("footprint_area_sq_ft", "Length x Width")
        footprint = square_feet(footprint_raw)

        slope, pitch_deg = self._slope_from_psets(ctx)

        adapter = ctx.adapter("roof")
        slope_text = adapter.get("slopetext")
        slope_text = None if slope_text is None else str(slope_text)
        if slope is None and slope_text:
            slope = slope_text
            ctx.note("slope", "RoofAdapter.SlopeText")
        base_level = adapter.get("baselevel")
        base_offset = positive_number(adapter.get("baseoffset"))
        ridge = positive_number(adapter.get("maxridgeheight"))

        if surface is None and footprint and pitch_deg is not None:
            surface = derive_surface_area(footprint, pitch_deg)
            if surface is not None:
                ctx.note("surface_area_sq_ft", f"footprint / cos({pitch_deg:.1f} deg)")

        return {
            "slope": slope,
            "slope_text": slope_text,
            "pitch_angle_deg": pitch_deg,
            "thickness_ft": feet(thickness_raw),
            "surface_area_sq_ft": surface,
            "footprint_area_sq_ft": footprint,
            "base_level_label": None if base_level is None else str(base_level),
            "base_offset_ft": feet(base_offset),
            "max_ridge_height_ft": feet(ridge),
        }


_extractor = RoofExtractor()


def extract_roof_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> RoofMetrics:
    return _extractor.extract(graph, ref, base_view, full_view, identity, trace)
