"""Stair and stair flight extractor.

Stairs are exported either as a whole ``IfcStair`` or as ``IfcStairFlight``
runs, each with its own quantity set.  The flight set is searched first and
the stair set fills whatever it lacks.  Riser and tread counts also appear
as plain properties, so those fall back through ``Pset_StairCommon``, a
``StairAdapter`` set and finally any property set.
"""

from __future__ import annotations

import logging
from typing import Any

from aecmetrics.config import (
    MAX_PLAUSIBLE_RISER_FT,
    MIN_PLAUSIBLE_RISER_FT,
    PSET_STAIR_COMMON,
    QTO_STAIR,
    QTO_STAIR_FLIGHT,
    RISER_WARNING_INCHES,
    RISER_WARNING_TEXT,
)
from aecmetrics.extraction.extractors.base import ExtractionContext, MetricsExtractor, feet
from aecmetrics.extraction.resolver import normalize_name
from aecmetrics.graph.base import GraphAccess, PropertyView, type_code_fallback
from aecmetrics.models.element import ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import StairMetrics
from aecmetrics.units import format_inches_fraction, positive_number, round_half_up

logger = logging.getLogger(__name__)

# Revit stores stair geometry in 1/256"; displayed to the nearest quarter
RISER_DENOMINATOR = 256


def stair_class_from_name(type_name: str | None) -> str:
    name = (type_name or "").upper()
    if name.startswith("IFC"):
        name = name[3:]
    return "IfcStairFlight" if name == "STAIRFLIGHT" else "IfcStair"


class StairExtractor(MetricsExtractor):
    ifc_class = "IfcStair"

    @property
    def category(self) -> str:
        return "stair"

    @property
    def metrics_model(self) -> type[StairMetrics]:
        return StairMetrics

    def element_class(self, graph: GraphAccess, base_view: PropertyView) -> str:
        code = base_view.get("type")
        if not isinstance(code, int):
            return self.ifc_class
        try:
            return stair_class_from_name(graph.type_code_to_name(code))
        except Exception:
            logger.warning("Type code %s lookup failed; trying fallback table", code, exc_info=True)
        try:
            return stair_class_from_name(type_code_fallback(graph, code))
        except Exception:
            logger.warning("Fallback lookup failed for type code %s; using %s", code, self.ifc_class)
            return self.ifc_class

    # -- lookups ------------------------------------------------------------

    def _quantity(self, ctx: ExtractionContext, field_name: str, *names: str) -> float | None:
        """First of *names* in the flight Qto, then in the stair Qto.

        Names match exactly: "Rise" must not pick up NumberOfRisers.
        """
        for qto in (QTO_STAIR_FLIGHT, QTO_STAIR):
            for name in names:
                value = ctx.quantity(name, qto, exact=True)
                if value is not None:
                    ctx.note(field_name, f"{qto}.{name}")
                    return value
        return None

    def _property(self, ctx: ExtractionContext, field_name: str, name: str) -> float | None:
        value = ctx.prop(name, PSET_STAIR_COMMON)
        if value is not None:
            ctx.note(field_name, f"{PSET_STAIR_COMMON}.{name}")
            return value
        value = positive_number(ctx.adapter("stair").get(normalize_name(name)))
        if value is not None:
            ctx.note(field_name, f"StairAdapter.{name}")
            return value
        value = ctx.prop(name)
        if value is not None:
            ctx.note(field_name, f"property {name}")
        return value

    # -- collection ---------------------------------------------------------

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        risers = self._quantity(ctx, "number_of_risers", "NumberOfRisers")
        if risers is None:
            risers = self._property(ctx, "number_of_risers", "NumberOfRisers")
        treads = self._quantity(ctx, "number_of_treads", "NumberOfTreads")
        if treads is None:
            treads = self._property(ctx, "number_of_treads", "NumberOfTreads")

        riser_raw = ctx.quantity("RiserHeight", QTO_STAIR_FLIGHT, exact=True)
        if riser_raw is not None:
            ctx.note("riser_height_ft", f"{QTO_STAIR_FLIGHT}.RiserHeight")
        else:
            riser_raw = self._property(ctx, "riser_height_ft", "RiserHeight")

        tread_raw = self._quantity(ctx, "tread_depth_ft", "TreadLength", "TreadDepth")
        width_raw = self._quantity(ctx, "stair_width_ft", "Width")
        run_raw = self._quantity(ctx, "stair_run_ft", "Length")
        rise_raw = self._quantity(ctx, "stair_rise_ft", "Rise")
        height_raw = None
        if rise_raw is None:
            height_raw = self._quantity(ctx, "stair_rise_ft", "Height")

        base = ctx.base_source
        if width_raw is None:
            width_raw = ctx.first("stair_width_ft", (f"{base}.Width", ctx.base("width")))
        if run_raw is None:
            run_raw = ctx.first("stair_run_ft", (f"{base}.Length", ctx.base("length")))
        if rise_raw is None and height_raw is None:
            height_raw = ctx.first("stair_rise_ft", (f"{base}.Height", ctx.base("height")))

        number_of_risers = None if risers is None else round_half_up(risers)
        number_of_treads = None if treads is None else round_half_up(treads)
        riser_ft = feet(positive_number(riser_raw))
        width_ft = feet(width_raw)
        run_ft = feet(run_raw)
        rise_ft = feet(rise_raw if rise_raw is not None else height_raw)

        area = width_ft * run_ft if width_ft and run_ft else None

        calculated_tread = None
        if run_ft and number_of_treads and number_of_treads > 0:
            calculated_tread = format_inches_fraction(run_ft / number_of_treads)

        riser_check = None
        if riser_ft:
            riser_check = riser_ft
        elif rise_ft and number_of_risers and number_of_risers > 0:
            riser_check = rise_ft / number_of_risers
            # Height may be the whole element, not the rise
            if rise_raw is None and not MIN_PLAUSIBLE_RISER_FT <= riser_check <= MAX_PLAUSIBLE_RISER_FT:
                logger.debug(
                    "#%s: height / risers = %.3f ft is not a plausible riser", ctx.ref, riser_check
                )
                riser_check = None

        calculated_riser = None
        warning = None
        if riser_check is not None:
            calculated_riser = format_inches_fraction(riser_check, RISER_DENOMINATOR)
            if riser_check * 12 > RISER_WARNING_INCHES:
                warning = RISER_WARNING_TEXT

        return {
            "number_of_risers": number_of_risers,
            "number_of_treads": number_of_treads,
            "riser_height_ft": riser_ft,
            "tread_depth_ft": feet(tread_raw),
            "stair_width_ft": width_ft,
            "stair_run_ft": run_ft,
            "stair_rise_ft": rise_ft,
            "area_sq_ft": area,
            "calculated_tread_depth": calculated_tread,
            "calculated_riser_height": calculated_riser,
            "riser_height_warning": warning,
        }


_extractor = StairExtractor()


def extract_stair_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> StairMetrics:
    return _extractor.extract(graph, ref, base_view, full_view, identity, trace)
