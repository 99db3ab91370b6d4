"""Column and beam extractors.

Framing members rarely carry their section in quantities, so both
extractors lean on BaseQuantities, the type or display name, and a
``ColumnAdapter`` / ``BeamAdapter`` property set whose size label wins over
anything derived.
"""

from __future__ import annotations

import logging
from typing import Any

from aecmetrics.config import QTO_BEAM, QTO_COLUMN
from aecmetrics.extraction.dimensions import parenthesize, parse_lumber_label, parse_section_size
from aecmetrics.extraction.extractors.base import ExtractionContext, MetricsExtractor, feet
from aecmetrics.extraction.resolver import (
    normalize_name,
    property_entries,
    property_sets,
    set_name,
)
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import BeamMetrics, ColumnMetrics
from aecmetrics.units import format_inches_fraction, positive_number, square_meters_to_square_inches

logger = logging.getLogger(__name__)

_COLUMN_LABEL_KEYS = ("columnsizelabel", "columnsize", "columnlabel", "columnlabeltext", "sizelabel")
_BEAM_LABEL_KEYS = ("beamsizelabel", "sizelabel")


def _adapter_label(adapter: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = adapter.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def _cross_section(ctx: ExtractionContext, qto: str) -> float | None:
    area = ctx.first("cross_section_area_sq_in", (f"{qto}.CrossSectionArea", ctx.quantity("CrossSectionArea")))
    return None if area is None else square_meters_to_square_inches(area)


class ColumnExtractor(MetricsExtractor):
    ifc_class = "IfcColumn"
    qto_set = QTO_COLUMN

    @property
    def category(self) -> str:
        return "column"

    @property
    def metrics_model(self) -> type[ColumnMetrics]:
        return ColumnMetrics

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        base = ctx.base_source
        length = ctx.first(
            "length_ft",
            (f"{QTO_COLUMN}.Height", ctx.quantity("Height")),
            (f"{QTO_COLUMN}.Length", ctx.quantity("Length")),
            (f"{base}.Height", ctx.base("height")),
            (f"{base}.Length", ctx.base("length")),
        )
        width = feet(ctx.first("width_ft", (f"{base}.Width", ctx.base("width"))))
        depth = feet(ctx.first("depth_ft", (f"{base}.Depth", ctx.base("depth"))))

        size_display = None
        for text in (ctx.identity.type_name, ctx.identity.name):
            parsed = parse_section_size(text)
            if parsed is None:
                continue
            if not width:
                width = parsed[0]
                ctx.note("width_ft", "parsed from size text")
            if not depth:
                depth = parsed[1]
                ctx.note("depth_ft", "parsed from size text")
            size_display = f"({format_inches_fraction(width)} x {format_inches_fraction(depth)})"
            break

        adapter = ctx.adapter("column")
        if not width:
            width = feet(positive_number(adapter.get("columnwidth")))
            if width:
                ctx.note("width_ft", "ColumnAdapter.ColumnWidth")
        if not depth:
            depth = feet(positive_number(adapter.get("columndepth")))
            if depth:
                ctx.note("depth_ft", "ColumnAdapter.ColumnDepth")

        size_label = _adapter_label(adapter, _COLUMN_LABEL_KEYS)
        if size_label:
            size_display = parenthesize(size_label)
            ctx.note("size_display", "ColumnAdapter size label")
        elif not size_display and width and depth:
            size_display = f"({format_inches_fraction(width)} x {format_inches_fraction(depth)})"
        if not size_label and size_display:
            size_label = size_display.replace("(", "").replace(")", "").strip()

        return {
            "length_ft": feet(length),
            "width_ft": width or None,
            "depth_ft": depth or None,
            "cross_section_area_sq_in": _cross_section(ctx, QTO_COLUMN),
            "size_label": size_label or None,
            "size_display": size_display or None,
        }


class BeamExtractor(MetricsExtractor):
    ifc_class = "IfcBeam"
    qto_set = QTO_BEAM

    @property
    def category(self) -> str:
        return "beam"

    @property
    def metrics_model(self) -> type[BeamMetrics]:
        return BeamMetrics

    def _pitch_angle(self, ctx: ExtractionContext) -> float | None:
        sets = []
        for set_ in property_sets(ctx.full_view):
            label = set_name(set_).lower()
            if "beam" in label and "common" in label:
                sets.append(set_)
        pitch = None
        for set_label, prop_name, value in property_entries(ctx.graph, sets):
            name = normalize_name(prop_name)
            if "pitch" not in name and "angle" not in name:
                continue
            number = positive_number(value)
            if number is not None and number < 90:
                pitch = number
                ctx.note("pitch_angle_deg", f"{set_label}.{prop_name}")
        return pitch

    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        base = ctx.base_source
        length = ctx.first(
            "length_ft",
            (f"{QTO_BEAM}.Length", ctx.quantity("Length")),
            (f"{base}.Length", ctx.base("length")),
        )

        adapter_label = _adapter_label(ctx.adapter("beam"), _BEAM_LABEL_KEYS)
        size_label = parse_lumber_label(ctx.identity.type_name)

        width = feet(ctx.base("width"))
        height = feet(ctx.base("height"))
        if adapter_label:
            size_display = parenthesize(adapter_label)
            size_label = adapter_label
            ctx.note("size_display", "BeamAdapter size label")
        elif width and height:
            size_display = f"({format_inches_fraction(width)} x {format_inches_fraction(height)})"
            ctx.note("size_display", f"{base}.Width x Height")
        elif size_label:
            size_display = parenthesize(size_label)
        else:
            size_display = None

        return {
            "length_ft": feet(length),
            "cross_section_area_sq_in": _cross_section(ctx, QTO_BEAM),
            "pitch_angle_deg": self._pitch_angle(ctx),
            "size_label": size_label,
            "size_display": size_display,
        }


_column_extractor = ColumnExtractor()
_beam_extractor = BeamExtractor()


def extract_column_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> ColumnMetrics:
    return _column_extractor.extract(graph, ref, base_view, full_view, identity, trace)


def extract_beam_metrics(
    graph: GraphAccess,
    ref: int,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    identity: ElementIdentity | None = None,
    trace: ExtractionTrace | None = None,
) -> BeamMetrics:
    return _beam_extractor.extract(graph, ref, base_view, full_view, identity, trace)
