"""Standardized metric records, one variant per element category.

Numeric fields are in canonical imperial units (ft, sq ft, cu ft).  Each
``*_display`` companion is a computed field of its numeric field, so the
two can never disagree.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter, computed_field

from aecmetrics.models.element import ElementIdentity
from aecmetrics.units import (
    cubic_feet_to_cubic_yards,
    format_area_display,
    format_cubic_feet,
    format_cubic_yards,
    format_feet_inches,
    format_inches_fraction,
    format_size_display,
    format_square_inches,
)


def _feet_inches(value: float | None) -> str | None:
    return None if value is None else format_feet_inches(value)


def _inches(value: float | None) -> str | None:
    return None if value is None else format_inches_fraction(value)


def _area(value: float | None) -> str | None:
    return None if value is None else format_area_display(value)


def _cubic_feet(value: float | None) -> str | None:
    return None if value is None else format_cubic_feet(value)


class _VolumeMetrics(ElementIdentity):
    volume_cu_ft: float | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def volume_cu_yd(self) -> float | None:
        if self.volume_cu_ft is None:
            return None
        return cubic_feet_to_cubic_yards(self.volume_cu_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def volume_display(self) -> str | None:
        """Concrete-style volume in cubic yards."""
        if self.volume_cu_ft is None:
            return None
        return format_cubic_yards(cubic_feet_to_cubic_yards(self.volume_cu_ft))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def volume_cu_ft_display(self) -> str | None:
        return _cubic_feet(self.volume_cu_ft)


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class RoofMetrics(ElementIdentity):
    element_category: Literal["roof"] = "roof"

    slope: str | None = None
    slope_text: str | None = None
    pitch_angle_deg: float | None = None
    thickness_ft: float | None = None
    surface_area_sq_ft: float | None = None
    footprint_area_sq_ft: float | None = None
    base_level_label: str | None = None
    base_offset_ft: float | None = None
    max_ridge_height_ft: float | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def thickness_display(self) -> str | None:
        return _feet_inches(self.thickness_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def surface_area_display(self) -> str | None:
        return _area(self.surface_area_sq_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def footprint_area_display(self) -> str | None:
        return _area(self.footprint_area_sq_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def base_offset_display(self) -> str | None:
        return _feet_inches(self.base_offset_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_ridge_height_display(self) -> str | None:
        return _feet_inches(self.max_ridge_height_ft)


class SlabMetrics(_VolumeMetrics):
    """Slabs, floors and decks share one record shape."""

    element_category: Literal["slab", "floor", "deck"] = "slab"

    area_sq_ft: float | None = None
    perimeter_ft: float | None = None
    thickness_ft: float | None = None
    size_display: str | None = None
    """Width x length label, from quantities or the rectangle solution."""

    slab_kind: Literal["deck", "porch", "exterior", "interior"] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area_display(self) -> str | None:
        return _area(self.area_sq_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def perimeter_display(self) -> str | None:
        return _feet_inches(self.perimeter_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def thickness_display(self) -> str | None:
        return _feet_inches(self.thickness_ft)


class WallMetrics(_VolumeMetrics):
    element_category: Literal["wall"] = "wall"

    length_ft: float | None = None
    height_ft: float | None = None
    thickness_ft: float | None = None
    area_one_side_sq_ft: float | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area_both_sides_sq_ft(self) -> float | None:
        if self.area_one_side_sq_ft is None:
            return None
        return self.area_one_side_sq_ft * 2

    @computed_field  # type: ignore[prop-decorator]
    @property
    def length_display(self) -> str | None:
        return _feet_inches(self.length_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def height_display(self) -> str | None:
        return _feet_inches(self.height_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def thickness_display(self) -> str | None:
        return _feet_inches(self.thickness_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area_one_side_display(self) -> str | None:
        return _area(self.area_one_side_sq_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area_both_sides_display(self) -> str | None:
        return _area(self.area_both_sides_sq_ft)


# ---------------------------------------------------------------------------
# Openings
# ---------------------------------------------------------------------------


class _OpeningMetrics(ElementIdentity):
    width_ft: float | None = None
    height_ft: float | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def width_display(self) -> str | None:
        return _feet_inches(self.width_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def height_display(self) -> str | None:
        return _feet_inches(self.height_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def size_display(self) -> str | None:
        return format_size_display(self.width_ft, self.height_ft) or None


class DoorMetrics(_OpeningMetrics):
    element_category: Literal["door"] = "door"

    leaf_area_sq_ft: float | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def leaf_area_display(self) -> str | None:
        return _area(self.leaf_area_sq_ft)


class WindowMetrics(_OpeningMetrics):
    element_category: Literal["window"] = "window"

    area_sq_ft: float | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area_display(self) -> str | None:
        return _area(self.area_sq_ft)


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


class FootingMetrics(_VolumeMetrics):
    element_category: Literal["footing"] = "footing"

    length_ft: float | None = None
    width_ft: float | None = None
    thickness_ft: float | None = None
    footing_type: Literal["continuous", "pad", "pier", "other"] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def length_display(self) -> str | None:
        return _feet_inches(self.length_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def width_display(self) -> str | None:
        return _feet_inches(self.width_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def thickness_display(self) -> str | None:
        return _feet_inches(self.thickness_ft)


class ColumnMetrics(ElementIdentity):
    element_category: Literal["column"] = "column"

    length_ft: float | None = None
    width_ft: float | None = None
    depth_ft: float | None = None
    cross_section_area_sq_in: float | None = None
    size_label: str | None = None
    """Authoritative label from a column adapter set, else the type name size."""

    size_display: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def length_display(self) -> str | None:
        return _feet_inches(self.length_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def width_display(self) -> str | None:
        return _inches(self.width_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def depth_display(self) -> str | None:
        return _inches(self.depth_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cross_section_area_display(self) -> str | None:
        if self.cross_section_area_sq_in is None:
            return None
        return format_square_inches(self.cross_section_area_sq_in)


class BeamMetrics(ElementIdentity):
    element_category: Literal["beam"] = "beam"

    length_ft: float | None = None
    cross_section_area_sq_in: float | None = None
    pitch_angle_deg: float | None = None
    size_label: str | None = None
    size_display: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def length_display(self) -> str | None:
        return _feet_inches(self.length_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cross_section_area_display(self) -> str | None:
        if self.cross_section_area_sq_in is None:
            return None
        return format_square_inches(self.cross_section_area_sq_in)


# ---------------------------------------------------------------------------
# Everything else
# ---------------------------------------------------------------------------


class RailingMetrics(ElementIdentity):
    element_category: Literal["railing"] = "railing"

    length_ft: float | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def length_display(self) -> str | None:
        return _feet_inches(self.length_ft)


class MassMetrics(_VolumeMetrics):
    element_category: Literal["mass"] = "mass"

    gross_area_sq_ft: float | None = None
    footprint_area_sq_ft: float | None = None
    mass_kind: Literal["massing", "other"] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def gross_area_display(self) -> str | None:
        return _area(self.gross_area_sq_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def footprint_area_display(self) -> str | None:
        return _area(self.footprint_area_sq_ft)


class StairMetrics(ElementIdentity):
    element_category: Literal["stair"] = "stair"

    number_of_risers: int | None = None
    number_of_treads: int | None = None
    riser_height_ft: float | None = None
    tread_depth_ft: float | None = None
    stair_width_ft: float | None = None
    stair_run_ft: float | None = None
    stair_rise_ft: float | None = None
    area_sq_ft: float | None = None
    calculated_tread_depth: str | None = None
    """Run / treads, as fractional inches."""

    calculated_riser_height: str | None = None
    """Rise / risers, as fractional inches rounded to quarters."""

    riser_height_warning: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def riser_height_display(self) -> str | None:
        return _inches(self.riser_height_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def tread_depth_display(self) -> str | None:
        return _inches(self.tread_depth_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stair_width_display(self) -> str | None:
        return _feet_inches(self.stair_width_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stair_run_display(self) -> str | None:
        return _feet_inches(self.stair_run_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stair_rise_display(self) -> str | None:
        return _feet_inches(self.stair_rise_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area_display(self) -> str | None:
        return _area(self.area_sq_ft)


class CaseworkMetrics(_VolumeMetrics):
    element_category: Literal["casework"] = "casework"

    width_ft: float | None = None
    depth_ft: float | None = None
    height_ft: float | None = None
    area_sq_ft: float | None = None
    casework_type: Literal["base", "wall", "tall", "vanity", "other"] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def width_display(self) -> str | None:
        return _feet_inches(self.width_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def depth_display(self) -> str | None:
        return _feet_inches(self.depth_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def height_display(self) -> str | None:
        return _feet_inches(self.height_ft)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area_display(self) -> str | None:
        return _area(self.area_sq_ft)


StandardizedMetrics = Annotated[
    Union[
        RoofMetrics,
        SlabMetrics,
        WallMetrics,
        DoorMetrics,
        WindowMetrics,
        FootingMetrics,
        ColumnMetrics,
        BeamMetrics,
        RailingMetrics,
        MassMetrics,
        StairMetrics,
        CaseworkMetrics,
    ],
    Field(discriminator="element_category"),
]

_METRICS_ADAPTER: TypeAdapter[Any] = TypeAdapter(StandardizedMetrics)


def parse_metrics(data: dict[str, Any]) -> Any:
    """Rebuild a metrics record from a dumped dict (field names or aliases)."""
    return _METRICS_ADAPTER.validate_python(data)
