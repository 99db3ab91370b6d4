"""Tests for the extraction router and settings."""

from __future__ import annotations

import pytest

from aecmetrics.config import ExtractionSettings
from aecmetrics.extraction.classifier import ElementClassifier
from aecmetrics.extraction.router import (
    MetricsRouter,
    extract_standardized_metrics,
    normalize_class_name,
    resolve_ifc_class,
)
from aecmetrics.graph.memory import InMemoryGraph
from aecmetrics.models.element import ExtractionTrace
from aecmetrics.models.metrics import RailingMetrics, SlabMetrics, StairMetrics, WallMetrics, parse_metrics


# ---------------------------------------------------------------------------
# IFC class resolution
# ---------------------------------------------------------------------------


class TestClassNames:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("IFCWALL", "IfcWall"),
            ("IFCWALLSTANDARDCASE", "IfcWallStandardCase"),
            ("IFCBUILDINGELEMENTPROXY", "IfcBuildingElementProxy"),
            ("IFCCOVERING", "IfcCovering"),
            ("IfcDoor", "IfcDoor"),
            ("", None),
            ("IFC", None),
            ("UNKNOWN", None),
            (None, None),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_class_name(raw) == expected


class TestResolveIfcClass:
    def test_primary_lookup(self, builder):
        assert resolve_ifc_class(builder.graph, 2391) == "IfcWall"

    def test_fallback_table(self, builder):
        graph = InMemoryGraph(fallback_type_names={424242: "IFCCOVERING"})
        assert resolve_ifc_class(graph, 424242) == "IfcCovering"

    def test_unknown_name_goes_to_fallback(self):
        graph = InMemoryGraph(type_names={55: "UNKNOWN"}, fallback_type_names={55: "IFCSLAB"})
        assert resolve_ifc_class(graph, 55) == "IfcSlab"

    def test_unresolved_code(self, caplog):
        with caplog.at_level("WARNING"):
            assert resolve_ifc_class(InMemoryGraph(), 424242) == "Type 424242"
        assert "Unresolved type code 424242" in caplog.text

    def test_missing_code(self):
        assert resolve_ifc_class(InMemoryGraph(), None) == "Unknown"
        assert resolve_ifc_class(InMemoryGraph(), True) == "Unknown"


# ---------------------------------------------------------------------------
# End-to-end extraction
# ---------------------------------------------------------------------------


class TestExtractStandardizedMetrics:
    def test_slab_end_to_end(self, builder):
        ref = builder.element(
            "IfcSlab",
            "Slab on Grade",
            level="Level 1",
            qsets=[builder.qset("Qto_SlabBaseQuantities", {"GrossArea": 11.15})],
            psets=[builder.pset("BaseQuantities", {"GrossArea": 200.0})],
        )
        metrics = extract_standardized_metrics(builder.graph, ref)
        assert isinstance(metrics, SlabMetrics)
        assert metrics.ifc_class == "IfcSlab"
        assert metrics.element_category == "slab"
        assert metrics.level_name == "Level 1"
        assert metrics.area_display == "120.02 SF"

        dumped = metrics.model_dump(by_alias=True, exclude_none=True)
        assert dumped["ifcClass"] == "IfcSlab"
        assert dumped["areaSqFt"] == pytest.approx(120.0186)

    def test_deterministic(self, builder):
        ref = builder.element(
            "IfcWall",
            "Basic Wall",
            qsets=[builder.qset("Qto_WallBaseQuantities", {"Length": 20.0, "Height": 9.0})],
        )
        graph = builder.graph
        assert extract_standardized_metrics(graph, ref) == extract_standardized_metrics(graph, ref)

    def test_floor_subtype(self, builder):
        ref = builder.element("IfcSlab", "Level 2 Floor", predefined="FLOOR")
        metrics = extract_standardized_metrics(builder.graph, ref)
        assert isinstance(metrics, SlabMetrics)
        assert metrics.element_category == "floor"

    def test_stair_flight_class(self, builder):
        ref = builder.element("IfcStairFlight", "Run 1")
        metrics = extract_standardized_metrics(builder.graph, ref)
        assert isinstance(metrics, StairMetrics)
        assert metrics.ifc_class == "IfcStairFlight"

    def test_other_proxy_has_no_extractor(self, builder, caplog):
        ref = builder.element("IfcBuildingElementProxy", "Generic Model 1")
        with caplog.at_level("WARNING"):
            assert extract_standardized_metrics(builder.graph, ref) is None
        assert "No extractor available for category other" in caplog.text

    def test_unresolved_type_code_has_no_extractor(self, builder):
        ref = builder.element("IfcWall", "Wall", type_code=77777)
        assert extract_standardized_metrics(builder.graph, ref) is None

    def test_fallback_type_table_used(self, builder):
        ref = builder.element("IfcWall", "Wall", type_code=77777)
        graph = InMemoryGraph(builder.elements, builder.items, builder.type_names, {77777: "IFCWALL"})
        metrics = extract_standardized_metrics(graph, ref)
        assert isinstance(metrics, WallMetrics)
        assert metrics.ifc_class == "IfcWall"

    def test_missing_element(self, builder, caplog):
        with caplog.at_level("ERROR"):
            assert extract_standardized_metrics(builder.graph, 999) is None
        assert "Metrics extraction failed for #999" in caplog.text

    def test_custom_classifier(self, builder):
        ref = builder.element("IfcWall", "Guard Wall")
        classifier = ElementClassifier({"IfcWall": {"DEFAULT": "railing"}})
        metrics = extract_standardized_metrics(builder.graph, ref, classifier=classifier)
        assert isinstance(metrics, RailingMetrics)

    def test_trace_is_filled(self, builder):
        ref = builder.element(
            "IfcSlab",
            "Slab",
            qsets=[builder.qset("Qto_SlabBaseQuantities", {"GrossArea": 80.0})],
            psets=[builder.pset("Pset_SlabCommon", {"IsExternal": False})],
        )
        trace = ExtractionTrace()
        extract_standardized_metrics(builder.graph, ref, trace=trace)
        assert trace.property_sets_found == ["Pset_SlabCommon"]
        assert trace.quantity_sets_found == ["Qto_SlabBaseQuantities"]
        assert trace.sources["area_sq_ft"] == "Qto_SlabBaseQuantities.GrossArea"

    def test_debug_logs_trace(self, builder, caplog):
        ref = builder.element("IfcRailing", "Guard")
        with caplog.at_level("DEBUG", logger="aecmetrics"):
            extract_standardized_metrics(builder.graph, ref, settings=ExtractionSettings(debug=True))
        assert f"Extraction trace for #{ref}" in caplog.text

    def test_slow_extraction_warning(self, builder, caplog):
        ref = builder.element("IfcRailing", "Guard")
        with caplog.at_level("WARNING"):
            extract_standardized_metrics(
                builder.graph, ref, settings=ExtractionSettings(slow_extraction_ms=-1)
            )
        assert "Slow extraction" in caplog.text

    def test_dump_parses_back_to_same_variant(self, builder):
        ref = builder.element(
            "IfcSlab", "Deck", qsets=[builder.qset("Qto_SlabBaseQuantities", {"GrossArea": 80.0})]
        )
        metrics = extract_standardized_metrics(builder.graph, ref)
        assert metrics.element_category == "deck"
        assert parse_metrics(metrics.model_dump(by_alias=True)) == metrics


class TestMetricsRouter:
    def test_extract_many_skips_unextractable(self, builder):
        wall = builder.element("IfcWall", "Wall")
        proxy = builder.element("IfcBuildingElementProxy", "Generic")
        door = builder.element("IfcDoor", "Door")
        router = MetricsRouter(builder.graph)
        results = router.extract_many([wall, proxy, door, 999])
        assert [m.express_id for m in results] == [wall, door]

    def test_router_settings_default(self, builder):
        router = MetricsRouter(builder.graph)
        assert router.settings == ExtractionSettings()


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("AECMETRICS_DEBUG", "AECMETRICS_SLOW_MS", "AECMETRICS_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = ExtractionSettings.from_env()
        assert settings.debug is False
        assert settings.slow_extraction_ms == 200.0
        assert settings.log_level == "INFO"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("AECMETRICS_DEBUG", "yes")
        monkeypatch.setenv("AECMETRICS_SLOW_MS", "50")
        monkeypatch.setenv("AECMETRICS_LOG_LEVEL", "debug")
        settings = ExtractionSettings.from_env()
        assert settings.debug is True
        assert settings.slow_extraction_ms == 50.0
        assert settings.log_level == "DEBUG"

    def test_invalid_slow_threshold_ignored(self, monkeypatch, caplog):
        monkeypatch.setenv("AECMETRICS_SLOW_MS", "fast")
        with caplog.at_level("WARNING"):
            settings = ExtractionSettings.from_env()
        assert settings.slow_extraction_ms == 200.0
        assert "AECMETRICS_SLOW_MS" in caplog.text

    def test_unknown_log_level_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("AECMETRICS_LOG_LEVEL", "verbose")
        with caplog.at_level("WARNING"):
            settings = ExtractionSettings.from_env()
        assert settings.log_level == "WARNING"
        assert "Unknown log level 'verbose'" in caplog.text

    def test_log_level_normalized_on_construction(self):
        assert ExtractionSettings(log_level=" error ").log_level == "ERROR"
