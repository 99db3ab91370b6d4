"""Global configuration: conversion constants, thresholds, settings."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

# Unit conversion factors (SI -> imperial)
METERS_TO_FEET = 3.28084
SQ_METERS_TO_SQ_FEET = 10.764
CU_METERS_TO_CU_FEET = 35.3147
CU_FEET_PER_CU_YARD = 27.0
SQ_INCHES_PER_SQ_FOOT = 144.0

# Magnitude heuristics: values below these are assumed to be SI.
# A value exactly at the threshold is treated as already imperial.
LENGTH_METERS_THRESHOLD = 0.5
AREA_SQ_METERS_THRESHOLD = 50.0
VOLUME_CU_METERS_THRESHOLD = 10.0

# A wrapped number above this is read as an entity id, not a magnitude
REFERENCE_ID_THRESHOLD = 1000

# Roof slopes snapped from degrees, with the snap tolerance in degrees
COMMON_ROOF_SLOPES: tuple[tuple[float, str], ...] = (
    (18.43, '4" / 12"'),
    (26.57, '6" / 12"'),
    (33.69, '8" / 12"'),
    (36.87, '9" / 12"'),
    (39.81, '10" / 12"'),
    (45.0, '12" / 12"'),
)
SLOPE_SNAP_TOLERANCE_DEG = 0.5

# cos(pitch) below this is treated as a vertical roof plane
MIN_PITCH_COSINE = 1e-6

# Rectangle reconstruction: relative area mismatch accepted
RECTANGLE_AREA_TOLERANCE = 0.05

# Stair sanity limits (feet / inches)
MIN_PLAUSIBLE_RISER_FT = 0.4
MAX_PLAUSIBLE_RISER_FT = 0.75
RISER_WARNING_INCHES = 10.0
RISER_WARNING_TEXT = "Verify in model"

# Standard quantity set names
QTO_ROOF = "Qto_RoofBaseQuantities"
QTO_SLAB = "Qto_SlabBaseQuantities"
QTO_WALL = "Qto_WallBaseQuantities"
QTO_DOOR = "Qto_DoorBaseQuantities"
QTO_WINDOW = "Qto_WindowBaseQuantities"
QTO_FOOTING = "Qto_FootingBaseQuantities"
QTO_COLUMN = "Qto_ColumnBaseQuantities"
QTO_BEAM = "Qto_BeamBaseQuantities"
QTO_RAILING = "Qto_RailingBaseQuantities"
QTO_PROXY = "Qto_BuildingElementProxyBaseQuantities"
QTO_STAIR = "Qto_StairBaseQuantities"
QTO_STAIR_FLIGHT = "Qto_StairFlightBaseQuantities"
QTO_FURNITURE = "Qto_FurnitureBaseQuantities"

PSET_STAIR_COMMON = "Pset_StairCommon"

# All-caps IFC names (without the "Ifc" prefix) whose camel casing cannot be
# recovered by capitalising the first letter
KNOWN_CLASS_NAMES: dict[str, str] = {
    "ROOF": "Roof",
    "WALL": "Wall",
    "SLAB": "Slab",
    "DOOR": "Door",
    "WINDOW": "Window",
    "RAILING": "Railing",
    "FOOTING": "Footing",
    "COLUMN": "Column",
    "BEAM": "Beam",
    "WALLSTANDARDCASE": "WallStandardCase",
    "STAIR": "Stair",
    "STAIRFLIGHT": "StairFlight",
    "FURNITURE": "Furniture",
    "BUILDINGELEMENTPROXY": "BuildingElementProxy",
}

# Level names accepted for ExtractionSettings.log_level
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# IFC classes treated as extractable building elements by the batch pipeline
ELEMENT_BASE_CLASS = "IfcBuildingElement"
EXTRA_ELEMENT_CLASSES = ("IfcFurniture", "IfcFurnishingElement")


def _env_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


class ExtractionSettings(BaseModel):
    """Runtime knobs for the extraction router."""

    debug: bool = False
    """Collect an ExtractionTrace per element and log it at DEBUG level."""

    slow_extraction_ms: float = 200.0
    """Extractions slower than this are logged as warnings."""

    log_level: str = "INFO"
    """Level name for the application to apply; the library never sets it."""

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value: object) -> str:
        level = str(value or "").strip().upper()
        if level not in LOG_LEVELS:
            logger.warning("Unknown log level %r; using WARNING", value)
            return "WARNING"
        return level

    @classmethod
    def from_env(cls) -> ExtractionSettings:
        """Build settings from ``AECMETRICS_*`` environment variables."""
        settings = cls()
        data = settings.model_dump()
        if "AECMETRICS_DEBUG" in os.environ:
            data["debug"] = _env_flag(os.environ["AECMETRICS_DEBUG"])
        slow = os.environ.get("AECMETRICS_SLOW_MS")
        if slow:
            try:
                data["slow_extraction_ms"] = float(slow)
            except ValueError:
                logger.warning("Ignoring invalid AECMETRICS_SLOW_MS=%r", slow)
        level = os.environ.get("AECMETRICS_LOG_LEVEL")
        if level:
            data["log_level"] = level
        return cls(**data)
