"""Pydantic models for element identity and standardized metrics."""

from aecmetrics.models.element import BaseQuantities, ElementIdentity, ExtractionTrace
from aecmetrics.models.metrics import (
    BeamMetrics,
    CaseworkMetrics,
    ColumnMetrics,
    DoorMetrics,
    FootingMetrics,
    MassMetrics,
    RailingMetrics,
    RoofMetrics,
    SlabMetrics,
    StairMetrics,
    StandardizedMetrics,
    WallMetrics,
    WindowMetrics,
    parse_metrics,
)

__all__ = [
    "BaseQuantities",
    "BeamMetrics",
    "CaseworkMetrics",
    "ColumnMetrics",
    "DoorMetrics",
    "ElementIdentity",
    "ExtractionTrace",
    "FootingMetrics",
    "MassMetrics",
    "RailingMetrics",
    "RoofMetrics",
    "SlabMetrics",
    "StairMetrics",
    "StandardizedMetrics",
    "WallMetrics",
    "WindowMetrics",
    "parse_metrics",
]
