"""Category extractors, one per element family."""

from aecmetrics.extraction.extractors.base import ExtractionContext, MetricsExtractor
from aecmetrics.extraction.extractors.casework import CaseworkExtractor, extract_casework_metrics
from aecmetrics.extraction.extractors.footing import FootingExtractor, extract_footing_metrics
from aecmetrics.extraction.extractors.framing import (
    BeamExtractor,
    ColumnExtractor,
    extract_beam_metrics,
    extract_column_metrics,
)
from aecmetrics.extraction.extractors.mass import MassExtractor, extract_mass_metrics
from aecmetrics.extraction.extractors.openings import (
    DoorExtractor,
    WindowExtractor,
    extract_door_metrics,
    extract_window_metrics,
)
from aecmetrics.extraction.extractors.railing import RailingExtractor, extract_railing_metrics
from aecmetrics.extraction.extractors.roof import RoofExtractor, extract_roof_metrics
from aecmetrics.extraction.extractors.slab import SlabExtractor, extract_slab_metrics
from aecmetrics.extraction.extractors.stair import StairExtractor, extract_stair_metrics
from aecmetrics.extraction.extractors.wall import WallExtractor, extract_wall_metrics

EXTRACTOR_REGISTRY: dict[str, type[MetricsExtractor]] = {
    "roof": RoofExtractor,
    "slab": SlabExtractor,
    "floor": SlabExtractor,
    "deck": SlabExtractor,
    "wall": WallExtractor,
    "door": DoorExtractor,
    "window": WindowExtractor,
    "footing": FootingExtractor,
    "column": ColumnExtractor,
    "beam": BeamExtractor,
    "railing": RailingExtractor,
    "mass": MassExtractor,
    "stair": StairExtractor,
    "casework": CaseworkExtractor,
}


def get_extractor(category: str | None) -> MetricsExtractor | None:
    """Return an extractor instance for an element category, or None."""
    extractor_cls = EXTRACTOR_REGISTRY.get(category or "")
    if extractor_cls is None:
        return None
    return extractor_cls()


__all__ = [
    "ExtractionContext",
    "MetricsExtractor",
    "RoofExtractor",
    "SlabExtractor",
    "WallExtractor",
    "DoorExtractor",
    "WindowExtractor",
    "FootingExtractor",
    "ColumnExtractor",
    "BeamExtractor",
    "RailingExtractor",
    "MassExtractor",
    "StairExtractor",
    "CaseworkExtractor",
    "EXTRACTOR_REGISTRY",
    "get_extractor",
    "extract_roof_metrics",
    "extract_slab_metrics",
    "extract_wall_metrics",
    "extract_door_metrics",
    "extract_window_metrics",
    "extract_footing_metrics",
    "extract_column_metrics",
    "extract_beam_metrics",
    "extract_railing_metrics",
    "extract_mass_metrics",
    "extract_stair_metrics",
    "extract_casework_metrics",
]
