"""aecmetrics: standardized, display-ready metrics from IFC property graphs."""

__version__ = "0.4.0"

from aecmetrics.config import ExtractionSettings
from aecmetrics.errors import (
    GraphAccessError,
    MetricsError,
    ReferenceResolutionError,
    TypeCodeLookupError,
)
from aecmetrics.extraction import (
    ElementClassifier,
    MetricsRouter,
    classify_element,
    extract_element_identity,
    extract_standardized_metrics,
    get_extractor,
)
from aecmetrics.graph import GraphAccess, InMemoryGraph
from aecmetrics.models import (
    BaseQuantities,
    ElementIdentity,
    ExtractionTrace,
    StandardizedMetrics,
    parse_metrics,
)

__all__ = [
    "__version__",
    # Configuration
    "ExtractionSettings",
    # Errors
    "GraphAccessError",
    "MetricsError",
    "ReferenceResolutionError",
    "TypeCodeLookupError",
    # Graph access
    "GraphAccess",
    "InMemoryGraph",
    # Models
    "BaseQuantities",
    "ElementIdentity",
    "ExtractionTrace",
    "StandardizedMetrics",
    "parse_metrics",
    # Extraction
    "ElementClassifier",
    "MetricsRouter",
    "classify_element",
    "extract_element_identity",
    "extract_standardized_metrics",
    "get_extractor",
]
