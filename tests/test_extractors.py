"""Tests for the category extractors.

Each test builds a small property graph with the ``builder`` fixture and
calls the extractor directly, without the router.
"""

from __future__ import annotations

import math

import pytest

from aecmetrics.extraction.extractors import (
    EXTRACTOR_REGISTRY,
    SlabExtractor,
    extract_beam_metrics,
    extract_casework_metrics,
    extract_column_metrics,
    extract_door_metrics,
    extract_footing_metrics,
    extract_mass_metrics,
    extract_railing_metrics,
    extract_roof_metrics,
    extract_slab_metrics,
    extract_stair_metrics,
    extract_wall_metrics,
    extract_window_metrics,
    get_extractor,
)
from aecmetrics.extraction.extractors.casework import casework_type
from aecmetrics.extraction.extractors.footing import footing_type
from aecmetrics.extraction.extractors.roof import derive_surface_area
from aecmetrics.extraction.extractors.slab import rectangle_from_perimeter_area, slab_kind
from aecmetrics.extraction.extractors.stair import stair_class_from_name
from aecmetrics.extraction.identity import extract_element_identity
from aecmetrics.graph.memory import InMemoryGraph
from aecmetrics.models.element import ExtractionTrace
from aecmetrics.models.metrics import SlabMetrics, WallMetrics


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_every_category_but_other_has_an_extractor(self):
        assert set(EXTRACTOR_REGISTRY) == {
            "roof",
            "slab",
            "floor",
            "deck",
            "wall",
            "door",
            "window",
            "footing",
            "column",
            "beam",
            "railing",
            "mass",
            "stair",
            "casework",
        }

    def test_slab_floor_deck_share_one_extractor(self):
        assert isinstance(get_extractor("floor"), SlabExtractor)
        assert isinstance(get_extractor("deck"), SlabExtractor)

    def test_unknown_category(self):
        assert get_extractor("other") is None
        assert get_extractor(None) is None


# ---------------------------------------------------------------------------
# Roof
# ---------------------------------------------------------------------------


class TestRoof:
    def test_surface_derived_from_footprint_and_pitch(self, builder):
        ref = builder.element(
            "IfcRoof",
            "Basic Roof",
            qsets=[builder.qset("Qto_RoofBaseQuantities", {"ProjectedArea": 1000.0})],
            psets=[builder.pset("Pset_RoofCommon", {"PitchAngle": 26.57})],
        )
        metrics = extract_roof_metrics(builder.graph, ref)
        assert metrics.slope == '6" / 12"'
        assert metrics.pitch_angle_deg == 26.57
        assert metrics.footprint_area_sq_ft == 1000.0
        assert metrics.surface_area_sq_ft == pytest.approx(1000.0 / math.cos(math.radians(26.57)))
        assert metrics.surface_area_display == "1118.08 SF"

    def test_slab_qto_width_is_thickness(self, builder):
        ref = builder.element(
            "IfcRoof",
            "Flat Roof",
            qsets=[builder.qset("Qto_SlabBaseQuantities", {"Width": 0.3, "GrossArea": 100.0})],
        )
        metrics = extract_roof_metrics(builder.graph, ref)
        assert metrics.thickness_ft == pytest.approx(0.3 * 3.28084)
        assert metrics.surface_area_sq_ft == 100.0
        assert metrics.thickness_display == "1'"

    def test_adapter_fields(self, builder):
        ref = builder.element(
            "IfcRoof",
            "Roof",
            psets=[
                builder.pset(
                    "Pset_Rehome_RoofAdapter",
                    {"SlopeText": "6:12", "BaseLevel": "Level 2", "BaseOffset": 1.5, "MaxRidgeHeight": 24.0},
                )
            ],
        )
        metrics = extract_roof_metrics(builder.graph, ref)
        assert metrics.slope == "6:12"
        assert metrics.slope_text == "6:12"
        assert metrics.base_level_label == "Level 2"
        assert metrics.base_offset_display == "1' 6\""
        assert metrics.max_ridge_height_display == "24'"

    def test_pset_slope_beats_adapter_text(self, builder):
        ref = builder.element(
            "IfcRoof",
            "Roof",
            psets=[
                builder.pset("Pset_RoofAdapter", {"SlopeText": "4:12"}),
                builder.pset("Pset_RoofCommon", {"Slope": 0.5}),
            ],
        )
        metrics = extract_roof_metrics(builder.graph, ref)
        assert metrics.slope == '6" / 12"'
        assert metrics.slope_text == "4:12"

    def test_footprint_from_length_and_width(self, builder):
        ref = builder.element(
            "IfcRoof",
            "Roof",
            qsets=[builder.qset("Qto_RoofBaseQuantities", {"Thickness": 0.25, "Length": 40.0, "Width": 30.0})],
        )
        metrics = extract_roof_metrics(builder.graph, ref)
        assert metrics.footprint_area_sq_ft == 1200.0

    def test_vertical_plane_has_no_surface(self):
        assert derive_surface_area(100.0, 90.0) is None
        assert derive_surface_area(100.0, 0.0) == pytest.approx(100.0)


# ---------------------------------------------------------------------------
# Slab / floor / deck
# ---------------------------------------------------------------------------


class TestRectangle:
    def test_exact_rectangle(self):
        assert rectangle_from_perimeter_area(40.0, 96.0) == pytest.approx((8.0, 12.0))

    def test_square(self):
        assert rectangle_from_perimeter_area(40.0, 100.0) == pytest.approx((10.0, 10.0))

    def test_no_real_solution(self):
        assert rectangle_from_perimeter_area(10.0, 100.0) is None

    def test_invalid_input(self):
        assert rectangle_from_perimeter_area(0.0, 100.0) is None


class TestSlab:
    def test_size_from_perimeter_and_area(self, builder):
        ref = builder.element(
            "IfcSlab",
            "Floor: Generic 6\"",
            psets=[builder.pset("BaseQuantities", {"GrossArea": 96.0, "Perimeter": 40.0, "Thickness": 0.5})],
        )
        metrics = extract_slab_metrics(builder.graph, ref)
        assert metrics.area_sq_ft == 96.0
        assert metrics.perimeter_ft == 40.0
        assert metrics.thickness_display == "0' 6\""
        assert metrics.size_display == '8\'-0" x 12\'-0" (96" x 144")'

    def test_qto_beats_base_quantities(self, builder):
        ref = builder.element(
            "IfcSlab",
            "Slab",
            qsets=[builder.qset("Qto_SlabBaseQuantities", {"GrossArea": 11.15})],
            psets=[builder.pset("BaseQuantities", {"GrossArea": 200.0})],
        )
        trace = ExtractionTrace()
        metrics = extract_slab_metrics(builder.graph, ref, trace=trace)
        assert metrics.area_sq_ft == pytest.approx(120.0186)
        assert metrics.area_display == "120.02 SF"
        assert trace.sources["area_sq_ft"] == "Qto_SlabBaseQuantities.GrossArea"
        assert trace.base_quantities_source == "BaseQuantities"

    def test_floor_adapter_fallback(self, builder):
        ref = builder.element(
            "IfcSlab",
            "Slab",
            psets=[
                builder.pset(
                    "Pset_FloorAdapter",
                    {"FloorArea": 150.0, "FloorPerimeter": 50.0, "FloorThickness": 0.75},
                )
            ],
        )
        metrics = extract_slab_metrics(builder.graph, ref)
        assert metrics.area_sq_ft == 150.0
        assert metrics.perimeter_ft == 50.0
        assert metrics.thickness_ft == 0.75
        assert metrics.size_display == '10\'-0" x 15\'-0" (120" x 180")'

    def test_size_from_length_and_width(self, builder):
        ref = builder.element(
            "IfcSlab",
            "Slab",
            qsets=[builder.qset("Qto_SlabBaseQuantities", {"Length": 20.0})],
            psets=[builder.pset("BaseQuantities", {"Width": 10.5})],
        )
        metrics = extract_slab_metrics(builder.graph, ref)
        assert metrics.size_display == '10\'-6" x 20\'-0" (126" x 240")'

    def test_volume_in_cubic_yards(self, builder):
        ref = builder.element(
            "IfcSlab",
            "Slab",
            qsets=[builder.qset("Qto_SlabBaseQuantities", {"NetVolume": 54.0})],
        )
        metrics = extract_slab_metrics(builder.graph, ref)
        assert metrics.volume_cu_ft == 54.0
        assert metrics.volume_cu_yd == pytest.approx(2.0)
        assert metrics.volume_display == "2.00 cu yd"

    def test_base_quantities_as_quantity_set(self, builder):
        ref = builder.element(
            "IfcSlab", "Slab", qsets=[builder.qset("BaseQuantities", {"GrossArea": 75.0})]
        )
        metrics = extract_slab_metrics(builder.graph, ref)
        assert metrics.area_sq_ft == 75.0

    def test_floor_category_kept(self, builder):
        ref = builder.element("IfcSlab", "Floor 1", predefined="FLOOR")
        graph = builder.graph
        identity = extract_element_identity(graph, ref, "IfcSlab")
        metrics = extract_slab_metrics(graph, ref, identity=identity)
        assert isinstance(metrics, SlabMetrics)
        assert metrics.element_category == "floor"

    @pytest.mark.parametrize(
        "name, is_external, kind",
        [
            ("Deck 2x6", None, "deck"),
            ("Rear Balcony", True, "deck"),
            ("Front Porch", None, "porch"),
            ("Garage Slab", True, "exterior"),
            ("Garage Slab", False, "interior"),
            (None, None, "interior"),
        ],
    )
    def test_slab_kind(self, name, is_external, kind):
        assert slab_kind(name, is_external) == kind


# ---------------------------------------------------------------------------
# Wall
# ---------------------------------------------------------------------------


class TestWall:
    def test_qto_fields(self, builder):
        ref = builder.element(
            "IfcWall",
            "Basic Wall",
            qsets=[
                builder.qset(
                    "Qto_WallBaseQuantities",
                    {"Length": 20.0, "Height": 9.0, "Width": 0.1524, "NetArea": 150.0, "GrossVolume": 2.0},
                )
            ],
        )
        metrics = extract_wall_metrics(builder.graph, ref)
        assert metrics.length_display == "20'"
        assert metrics.height_display == "9'"
        assert metrics.thickness_display == "0' 6\""
        assert metrics.area_one_side_sq_ft == 150.0
        assert metrics.area_both_sides_display == "300.00 SF"
        assert metrics.volume_cu_ft == pytest.approx(2.0 * 35.3147)
        assert metrics.volume_display == "2.62 cu yd"

    def test_base_quantities_fallback(self, builder):
        ref = builder.element(
            "IfcWall",
            "Basic Wall",
            psets=[builder.pset("BaseQuantities", {"Length": 12.0, "Width": 0.5, "GrossArea": 96.0})],
        )
        metrics = extract_wall_metrics(builder.graph, ref)
        assert metrics.length_ft == 12.0
        assert metrics.thickness_ft == 0.5
        assert metrics.area_one_side_sq_ft == 96.0

    def test_failure_gives_minimal_record(self, builder, caplog):
        with caplog.at_level("ERROR"):
            metrics = extract_wall_metrics(builder.graph, 999)
        assert isinstance(metrics, WallMetrics)
        assert metrics.ifc_class == "IfcWall"
        assert metrics.express_id == 999
        assert metrics.length_ft is None
        assert "wall extraction failed for #999" in caplog.text


# ---------------------------------------------------------------------------
# Doors and windows
# ---------------------------------------------------------------------------


class TestOpenings:
    def test_door_from_qto(self, builder):
        ref = builder.element(
            "IfcDoor", "Door", qsets=[builder.qset("Qto_DoorBaseQuantities", {"Width": 3.0, "Height": 7.0})]
        )
        metrics = extract_door_metrics(builder.graph, ref)
        assert metrics.size_display == '3\'-0" x 7\'-0" (36" x 84")'
        assert metrics.leaf_area_sq_ft == pytest.approx(21.0)

    def test_door_from_name(self, builder):
        ref = builder.element("IfcDoor", 'Single-Flush 36" x 80"')
        metrics = extract_door_metrics(builder.graph, ref)
        assert metrics.width_ft == pytest.approx(3.0)
        assert metrics.height_ft == pytest.approx(80 / 12)
        assert metrics.size_display == '3\'-0" x 6\'-8" (36" x 80")'
        assert metrics.leaf_area_display == "20.00 SF"

    def test_name_only_fills_missing_side(self, builder):
        ref = builder.element(
            "IfcDoor", 'Door 30" x 80"', qsets=[builder.qset("Qto_DoorBaseQuantities", {"Width": 2.75})]
        )
        metrics = extract_door_metrics(builder.graph, ref)
        assert metrics.width_ft == 2.75
        assert metrics.height_ft == pytest.approx(80 / 12)

    def test_door_inches_marked_with_apostrophes(self, builder):
        ref = builder.element("IfcDoor", "Single-Flush 36' x 80'")
        metrics = extract_door_metrics(builder.graph, ref)
        assert metrics.width_ft == pytest.approx(3.0)
        assert metrics.height_ft == pytest.approx(80 / 12)

    def test_window_feet_name(self, builder):
        ref = builder.element("IfcWindow", "Fixed 3' x 4'")
        metrics = extract_window_metrics(builder.graph, ref)
        assert metrics.width_ft == 3.0
        assert metrics.height_ft == 4.0
        assert metrics.area_display == "12.00 SF"

    def test_window_bare_inches_name(self, builder):
        ref = builder.element("IfcWindow", "Casement 24x36")
        metrics = extract_window_metrics(builder.graph, ref)
        assert metrics.width_ft == pytest.approx(2.0)
        assert metrics.height_ft == pytest.approx(3.0)

    def test_window_qto_area(self, builder):
        ref = builder.element(
            "IfcWindow",
            "Window",
            qsets=[builder.qset("Qto_WindowBaseQuantities", {"Width": 4.0, "Height": 5.0, "Area": 1.5})],
        )
        metrics = extract_window_metrics(builder.graph, ref)
        assert metrics.area_sq_ft == pytest.approx(1.5 * 10.764)

    def test_no_dimensions(self, builder):
        ref = builder.element("IfcWindow", "Window")
        metrics = extract_window_metrics(builder.graph, ref)
        assert metrics.width_ft is None
        assert metrics.size_display is None
        assert metrics.area_sq_ft is None


# ---------------------------------------------------------------------------
# Footings
# ---------------------------------------------------------------------------


class TestFooting:
    @pytest.mark.parametrize(
        "name, kind",
        [
            ("Strip Footing 24x12", "continuous"),
            ("Continuous Footing", "continuous"),
            ("Pad 36x36", "pad"),
            ("Pier Footing", "pad"),
            ("Pier 24", "pier"),
            ("Spread", "other"),
            (None, "other"),
        ],
    )
    def test_footing_type(self, name, kind):
        assert footing_type(name) == kind

    def test_qto_fields(self, builder):
        ref = builder.element(
            "IfcFooting",
            "Strip Footing",
            qsets=[
                builder.qset(
                    "Qto_FootingBaseQuantities",
                    {"Length": 20.0, "Width": 2.0, "Height": 1.0, "NetVolume": 40.0},
                )
            ],
        )
        metrics = extract_footing_metrics(builder.graph, ref)
        assert metrics.length_ft == 20.0
        assert metrics.width_ft == 2.0
        assert metrics.thickness_ft == 1.0
        assert metrics.volume_display == "1.48 cu yd"
        assert metrics.footing_type == "continuous"


# ---------------------------------------------------------------------------
# Columns and beams
# ---------------------------------------------------------------------------


class TestColumn:
    def test_size_from_type_name(self, builder):
        ref = builder.element(
            "IfcColumn",
            "Post",
            type_name='Wood Post 5 1/2" x 5 1/2"',
            qsets=[builder.qset("Qto_ColumnBaseQuantities", {"Length": 9.0})],
        )
        metrics = extract_column_metrics(builder.graph, ref)
        assert metrics.length_ft == 9.0
        assert metrics.width_display == '5-1/2"'
        assert metrics.size_display == '(5-1/2" x 5-1/2")'
        assert metrics.size_label == '5-1/2" x 5-1/2"'

    def test_adapter_label_wins(self, builder):
        ref = builder.element(
            "IfcColumn",
            "Post",
            type_name='6" x 6"',
            psets=[builder.pset("Pset_ColumnAdapter", {"ColumnSizeLabel": "6x6 PT"})],
        )
        metrics = extract_column_metrics(builder.graph, ref)
        assert metrics.size_display == "(6x6 PT)"
        assert metrics.size_label == "6x6 PT"
        assert metrics.width_ft == pytest.approx(0.5)

    def test_adapter_dimensions_fallback(self, builder):
        ref = builder.element(
            "IfcColumn",
            "Column",
            psets=[builder.pset("Pset_ColumnAdapter", {"ColumnWidth": 1.0, "ColumnDepth": 1.5})],
        )
        metrics = extract_column_metrics(builder.graph, ref)
        assert metrics.size_display == '(12" x 18")'

    def test_cross_section_in_square_inches(self, builder):
        ref = builder.element(
            "IfcColumn",
            "Column",
            qsets=[builder.qset("Qto_ColumnBaseQuantities", {"CrossSectionArea": 0.0232})],
        )
        metrics = extract_column_metrics(builder.graph, ref)
        assert metrics.cross_section_area_sq_in == pytest.approx(0.0232 * 10.764 * 144)
        assert metrics.cross_section_area_display == "35.96 sq in"


class TestBeam:
    def test_adapter_label_wins(self, builder):
        ref = builder.element(
            "IfcBeam",
            "Header",
            type_name="2x10",
            psets=[builder.pset("Pset_BeamAdapter", {"BeamSizeLabel": "(2) 2x10"})],
        )
        metrics = extract_beam_metrics(builder.graph, ref)
        assert metrics.size_display == "(2) 2x10"
        assert metrics.size_label == "(2) 2x10"

    def test_lvl_label_from_type_name(self, builder):
        ref = builder.element(
            "IfcBeam",
            "Beam",
            type_name="LVL 1-3/4x11-7/8",
            qsets=[builder.qset("Qto_BeamBaseQuantities", {"Length": 16.0})],
        )
        metrics = extract_beam_metrics(builder.graph, ref)
        assert metrics.size_label == "LVL 1-3/4x11-7/8"
        assert metrics.size_display == "(LVL 1-3/4x11-7/8)"
        assert metrics.length_display == "16'"

    def test_section_from_base_quantities(self, builder):
        ref = builder.element(
            "IfcBeam",
            "Beam",
            psets=[builder.pset("BaseQuantities", {"Width": 0.0889, "Height": 0.2413})],
        )
        metrics = extract_beam_metrics(builder.graph, ref)
        assert metrics.size_display == '(3-1/2" x 9-1/2")'
        assert metrics.size_label is None

    def test_pitch_from_beam_common(self, builder):
        ref = builder.element(
            "IfcBeam",
            "Rafter",
            psets=[builder.pset("Pset_BeamCommon", {"PitchAngle": 22.5, "Span": 12.0})],
        )
        metrics = extract_beam_metrics(builder.graph, ref)
        assert metrics.pitch_angle_deg == 22.5

    def test_out_of_range_pitch_ignored(self, builder):
        ref = builder.element(
            "IfcBeam", "Rafter", psets=[builder.pset("Pset_BeamCommon", {"PitchAngle": 95.0})]
        )
        assert extract_beam_metrics(builder.graph, ref).pitch_angle_deg is None


# ---------------------------------------------------------------------------
# Railings, massing, casework
# ---------------------------------------------------------------------------


class TestRailing:
    def test_length(self, builder):
        ref = builder.element(
            "IfcRailing", "Guard", qsets=[builder.qset("Qto_RailingBaseQuantities", {"Length": 12.5})]
        )
        assert extract_railing_metrics(builder.graph, ref).length_display == "12' 6\""

    def test_base_quantities_length(self, builder):
        ref = builder.element("IfcRailing", "Guard", psets=[builder.pset("BaseQuantities", {"Length": 8.0})])
        assert extract_railing_metrics(builder.graph, ref).length_ft == 8.0


class TestMass:
    def test_massing(self, builder):
        ref = builder.element(
            "IfcBuildingElementProxy",
            "Mass 1",
            qsets=[
                builder.qset(
                    "Qto_BuildingElementProxyBaseQuantities", {"GrossVolume": 500.0, "GrossArea": 1200.0}
                )
            ],
            psets=[builder.pset("BaseQuantities", {"ProjectedArea": 400.0})],
        )
        metrics = extract_mass_metrics(builder.graph, ref)
        assert metrics.element_category == "mass"
        assert metrics.volume_cu_ft == 500.0
        assert metrics.gross_area_sq_ft == 1200.0
        assert metrics.footprint_area_sq_ft == 400.0
        assert metrics.mass_kind == "massing"

    def test_direct_call_forces_category(self, builder):
        ref = builder.element("IfcBuildingElementProxy", "Block A")
        metrics = extract_mass_metrics(builder.graph, ref)
        assert metrics.element_category == "mass"
        assert metrics.mass_kind == "other"


class TestCasework:
    @pytest.mark.parametrize(
        "name, type_name, kind",
        [
            ("Base Cabinet 36", None, "base"),
            ("Upper", "Wall Cabinet 30x30", "wall"),
            ("Tall Wall Cabinet", None, "wall"),
            ("Linen Tower Tall", None, "tall"),
            ("Vanity 48", None, "vanity"),
            ("Island", None, "other"),
        ],
    )
    def test_casework_type(self, name, type_name, kind):
        assert casework_type(name, type_name) == kind

    def test_dimensions(self, builder):
        ref = builder.element(
            "IfcFurniture",
            "Base Cabinet 36",
            qsets=[builder.qset("Qto_FurnitureBaseQuantities", {"Width": 3.0, "Depth": 2.0, "Height": 2.875})],
        )
        metrics = extract_casework_metrics(builder.graph, ref)
        assert metrics.width_display == "3'"
        assert metrics.depth_display == "2'"
        assert metrics.height_display == "2' 11\""
        assert metrics.casework_type == "base"


# ---------------------------------------------------------------------------
# Stairs
# ---------------------------------------------------------------------------


class TestStair:
    def test_flight_quantities(self, builder):
        ref = builder.element(
            "IfcStairFlight",
            "Stair Run",
            qsets=[
                builder.qset(
                    "Qto_StairFlightBaseQuantities",
                    {
                        "NumberOfRisers": 16,
                        "NumberOfTreads": 15,
                        "RiserHeight": 0.178,
                        "TreadLength": 0.279,
                        "Length": 13.75,
                        "Width": 3.5,
                    },
                )
            ],
        )
        metrics = extract_stair_metrics(builder.graph, ref)
        assert metrics.ifc_class == "IfcStairFlight"
        assert metrics.number_of_risers == 16
        assert metrics.number_of_treads == 15
        assert metrics.stair_rise_ft is None
        assert metrics.riser_height_ft == pytest.approx(0.178 * 3.28084)
        assert metrics.calculated_riser_height == '7"'
        assert metrics.riser_height_warning is None
        assert metrics.tread_depth_display == '11"'
        assert metrics.calculated_tread_depth == '11"'
        assert metrics.area_sq_ft == pytest.approx(48.125)

    def test_counts_from_stair_common(self, builder):
        ref = builder.element(
            "IfcStair",
            "Stair",
            psets=[builder.pset("Pset_StairCommon", {"NumberOfRisers": 14.0, "NumberOfTreads": 12.6})],
        )
        metrics = extract_stair_metrics(builder.graph, ref)
        assert metrics.number_of_risers == 14
        assert metrics.number_of_treads == 13

    def test_counts_from_stair_adapter(self, builder):
        ref = builder.element(
            "IfcStair", "Stair", psets=[builder.pset("Pset_StairAdapter", {"NumberOfRisers": 11})]
        )
        assert extract_stair_metrics(builder.graph, ref).number_of_risers == 11

    def test_rise_over_risers_with_warning(self, builder):
        ref = builder.element(
            "IfcStair",
            "Stair",
            qsets=[builder.qset("Qto_StairBaseQuantities", {"NumberOfRisers": 10, "Rise": 9.0})],
        )
        metrics = extract_stair_metrics(builder.graph, ref)
        assert metrics.stair_rise_ft == 9.0
        assert metrics.calculated_riser_height == '10-3/4"'
        assert metrics.riser_height_warning == "Verify in model"

    def test_plausible_height_used_for_riser(self, builder):
        ref = builder.element(
            "IfcStair",
            "Stair",
            qsets=[builder.qset("Qto_StairBaseQuantities", {"NumberOfRisers": 16, "Height": 9.333})],
        )
        metrics = extract_stair_metrics(builder.graph, ref)
        assert metrics.stair_rise_ft == 9.333
        assert metrics.calculated_riser_height == '7"'

    def test_implausible_height_ignored_for_riser(self, builder):
        ref = builder.element(
            "IfcStair",
            "Stair",
            qsets=[builder.qset("Qto_StairBaseQuantities", {"NumberOfRisers": 10, "Height": 12.0})],
        )
        metrics = extract_stair_metrics(builder.graph, ref)
        assert metrics.stair_rise_ft == 12.0
        assert metrics.calculated_riser_height is None

    def test_tall_riser_property_warns(self, builder):
        ref = builder.element(
            "IfcStair", "Stair", psets=[builder.pset("Pset_StairCommon", {"RiserHeight": 0.28})]
        )
        metrics = extract_stair_metrics(builder.graph, ref)
        assert metrics.calculated_riser_height == '11"'
        assert metrics.riser_height_warning == "Verify in model"

    def test_unknown_type_code_reports_stair(self, builder):
        ref = builder.element("IfcStair", "Stair", type_code=77777)
        assert extract_stair_metrics(builder.graph, ref).ifc_class == "IfcStair"

    def test_failing_type_lookup_keeps_stair_fields(self, builder, caplog):
        ref = builder.element(
            "IfcStair", "Stair", psets=[builder.pset("Pset_StairCommon", {"NumberOfRisers": 14})]
        )

        class BrokenTypeTable(InMemoryGraph):
            def type_code_to_name(self, code):
                raise RuntimeError("type table unavailable")

        graph = BrokenTypeTable(builder.elements, builder.items, builder.type_names)
        with caplog.at_level("WARNING"):
            metrics = extract_stair_metrics(graph, ref)
        assert metrics.ifc_class == "IfcStair"
        assert metrics.number_of_risers == 14
        assert "stair extraction failed" not in caplog.text

    @pytest.mark.parametrize(
        "type_name, expected",
        [("IFCSTAIRFLIGHT", "IfcStairFlight"), ("IfcStairFlight", "IfcStairFlight"), ("IFCSTAIR", "IfcStair"), (None, "IfcStair")],
    )
    def test_stair_class_from_name(self, type_name, expected):
        assert stair_class_from_name(type_name) == expected
