"""Tests for identity extraction."""

from __future__ import annotations

from aecmetrics.extraction.classifier import ElementClassifier
from aecmetrics.extraction.identity import extract_element_identity
from aecmetrics.models.element import ExtractionTrace


class TestIdentity:
    def test_basic_fields(self, builder):
        ref = builder.element("IfcWall", "Basic Wall:Exterior 8\"", predefined="STANDARD")
        identity = extract_element_identity(builder.graph, ref, "IfcWall")
        assert identity.express_id == ref
        assert identity.global_id == f"GUID-{ref:04d}"
        assert identity.name == "Basic Wall:Exterior 8\""
        assert identity.ifc_predefined_type == "STANDARD"
        assert identity.element_category == "wall"

    def test_type_name_from_type_object(self, builder):
        ref = builder.element("IfcWall", "Wall 1", type_name="Exterior - 2x6 Stud")
        identity = extract_element_identity(builder.graph, ref, "IfcWall")
        assert identity.type_name == "Exterior - 2x6 Stud"

    def test_level_from_container(self, builder):
        ref = builder.element("IfcWall", "Wall 1", level="Level 1")
        identity = extract_element_identity(builder.graph, ref, "IfcWall")
        assert identity.level_name == "Level 1"

    def test_level_property_beats_container(self, builder):
        ref = builder.element(
            "IfcWall",
            "Wall 1",
            level="Level 1",
            psets=[builder.pset("Pset_WallCommon", {"Level": "Roof Deck"})],
        )
        identity = extract_element_identity(builder.graph, ref, "IfcWall")
        assert identity.level_name == "Roof Deck"

    def test_identity_pset_fields(self, builder):
        ref = builder.element(
            "IfcDoor",
            "Single-Flush 36\" x 80\"",
            psets=[
                builder.pset(
                    "Pset_RevitIdentity",
                    {
                        "TypeMark": "D1",
                        "Mark": "101",
                        "Phase Created": "New Construction",
                        "FamilyName": "Single-Flush",
                        "CategoryName": "Doors",
                    },
                ),
                builder.pset("Pset_DoorCommon", {"IsExternal": "TRUE"}),
            ],
        )
        identity = extract_element_identity(builder.graph, ref, "IfcDoor")
        assert identity.type_mark == "D1"
        assert identity.instance_mark == "101"
        assert identity.phase == "New Construction"
        assert identity.family_name == "Single-Flush"
        assert identity.category_name == "Doors"
        assert identity.is_external is True

    def test_rehome_named_set_is_read(self, builder):
        ref = builder.element("IfcWall", "Wall", psets=[builder.pset("Rehome_Data", {"Mark": "W9"})])
        identity = extract_element_identity(builder.graph, ref, "IfcWall")
        assert identity.instance_mark == "W9"

    def test_unrelated_psets_ignored(self, builder):
        ref = builder.element("IfcWall", "Wall", psets=[builder.pset("Other_Data", {"Mark": "W9"})])
        identity = extract_element_identity(builder.graph, ref, "IfcWall")
        assert identity.instance_mark is None

    def test_reference_properties_resolved(self, builder):
        ref = builder.element(
            "IfcWall",
            "Wall",
            psets=[builder.pset("Pset_WallCommon", {"IsExternal": False}, by_reference=True)],
        )
        identity = extract_element_identity(builder.graph, ref, "IfcWall")
        assert identity.is_external is False

    def test_classifier_uses_refining_fields(self, builder):
        ref = builder.element(
            "IfcBuildingElementProxy",
            "Generic 1",
            psets=[builder.pset("Pset_RevitIdentity", {"CategoryName": "Mass"})],
        )
        identity = extract_element_identity(builder.graph, ref, "IfcBuildingElementProxy")
        assert identity.element_category == "mass"

    def test_custom_classifier(self, builder):
        ref = builder.element("IfcWall", "Wall")
        classifier = ElementClassifier({"IfcWall": {"DEFAULT": "railing"}})
        identity = extract_element_identity(builder.graph, ref, "IfcWall", classifier=classifier)
        assert identity.element_category == "railing"

    def test_trace_collects_psets(self, builder):
        ref = builder.element("IfcWall", "Wall", psets=[builder.pset("Pset_WallCommon", {"IsExternal": True})])
        trace = ExtractionTrace()
        extract_element_identity(builder.graph, ref, "IfcWall", trace=trace)
        assert trace.property_sets_found == ["Pset_WallCommon"]

    def test_missing_element_gives_minimal_identity(self, builder, caplog):
        with caplog.at_level("WARNING"):
            identity = extract_element_identity(builder.graph, 999, "IfcWall")
        assert identity.ifc_class == "IfcWall"
        assert identity.express_id == 999
        assert identity.name is None
        assert identity.element_category is None
        assert "Identity extraction failed for #999" in caplog.text

    def test_dangling_type_object_skipped(self, builder):
        ref = builder.element("IfcWall", "Wall")
        builder.elements[ref]["typeObject"] = {"value": 9999}
        identity = extract_element_identity(builder.graph, ref, "IfcWall")
        assert identity.type_name is None
        assert identity.name == "Wall"

    def test_camel_case_dump(self, builder):
        ref = builder.element("IfcWall", "Wall", level="Level 2")
        identity = extract_element_identity(builder.graph, ref, "IfcWall")
        dumped = identity.model_dump(by_alias=True, exclude_none=True)
        assert dumped["ifcClass"] == "IfcWall"
        assert dumped["expressId"] == ref
        assert dumped["levelName"] == "Level 2"
        assert dumped["elementCategory"] == "wall"
