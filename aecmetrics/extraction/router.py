"""Extraction Router: element reference in, one standardized record out.

Entry point: ``extract_standardized_metrics(graph, ref)``

The router resolves the element's IFC class from its numeric type code,
fetches the base and full property views once, builds the identity (which
runs the classifier), and hands everything to the extractor registered for
the element's category.  Elements classified as ``other`` or not classified
at all yield ``None``.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from aecmetrics.config import KNOWN_CLASS_NAMES, ExtractionSettings
from aecmetrics.extraction.classifier import ElementClassifier
from aecmetrics.extraction.extractors import get_extractor
from aecmetrics.extraction.identity import extract_element_identity
from aecmetrics.graph.base import GraphAccess, type_code_fallback
from aecmetrics.models.element import ExtractionTrace

logger = logging.getLogger(__name__)

UNKNOWN_CLASS = "Unknown"


def normalize_class_name(type_name: str | None) -> str | None:
    """``"IFCWALLSTANDARDCASE"`` -> ``"IfcWallStandardCase"``.

    Names the lookup could not resolve (empty, or containing "unknown")
    give None.
    """
    if not type_name or "unknown" in type_name.lower():
        return None
    if type_name.startswith("Ifc") and not type_name.isupper():
        return type_name
    bare = type_name.upper()
    if bare.startswith("IFC"):
        bare = bare[3:]
    if not bare:
        return None
    camel = KNOWN_CLASS_NAMES.get(bare) or bare[0] + bare[1:].lower()
    return f"Ifc{camel}"


def resolve_ifc_class(graph: GraphAccess, code: Any) -> str:
    """Map a numeric type code to an IFC class name.

    Tries the graph's type-code lookup, then its secondary table, then
    gives ``"Type N"``.  Never raises.
    """
    if not isinstance(code, int) or isinstance(code, bool):
        return UNKNOWN_CLASS
    try:
        resolved = normalize_class_name(graph.type_code_to_name(code))
        if resolved:
            return resolved
    except Exception:
        logger.warning("Type code %s lookup failed", code, exc_info=True)

    try:
        resolved = normalize_class_name(type_code_fallback(graph, code))
        if resolved:
            return resolved
    except Exception:
        logger.warning("Fallback type table failed for %s", code, exc_info=True)

    logger.warning("Unresolved type code %s", code)
    return f"Type {code}"


def extract_standardized_metrics(
    graph: GraphAccess,
    ref: int,
    *,
    trace: ExtractionTrace | None = None,
    settings: ExtractionSettings | None = None,
    classifier: ElementClassifier | None = None,
) -> Any:
    """Return the StandardizedMetrics record for element *ref*, or None.

    None means "no extractor available": the element is classified as
    ``other``, was not classified, or its views could not be fetched.
    """
    settings = settings or ExtractionSettings()
    if trace is None and settings.debug:
        trace = ExtractionTrace()

    start = time.perf_counter()
    ifc_class = UNKNOWN_CLASS
    result = None
    try:
        base_view = graph.get_properties(ref, False)
        ifc_class = resolve_ifc_class(graph, base_view.get("type"))
        full_view = graph.get_properties(ref, True)

        identity = extract_element_identity(
            graph, ref, ifc_class, base_view, full_view, classifier=classifier, trace=trace
        )
        category = identity.element_category
        extractor = get_extractor(category)
        if extractor is None:
            logger.warning(
                "No extractor available for category %s (IFC class %s, #%s)",
                category,
                ifc_class,
                ref,
            )
        else:
            result = extractor.extract(graph, ref, base_view, full_view, identity, trace)
    except Exception:
        logger.error("Metrics extraction failed for #%s (%s)", ref, ifc_class, exc_info=True)
        result = None

    elapsed_ms = (time.perf_counter() - start) * 1000
    if elapsed_ms > settings.slow_extraction_ms:
        logger.warning("Slow extraction: %.2fms for #%s (%s)", elapsed_ms, ref, ifc_class)

    if settings.debug and trace is not None:
        logger.debug("Extraction trace for #%s: %s", ref, trace.model_dump())
    return result


class MetricsRouter:
    """Bind a graph, classifier and settings for repeated extraction."""

    def __init__(
        self,
        graph: GraphAccess,
        classifier: ElementClassifier | None = None,
        settings: ExtractionSettings | None = None,
    ) -> None:
        self.graph = graph
        self.classifier = classifier
        self.settings = settings or ExtractionSettings()

    def extract(self, ref: int, trace: ExtractionTrace | None = None) -> Any:
        return extract_standardized_metrics(
            self.graph, ref, trace=trace, settings=self.settings, classifier=self.classifier
        )

    def extract_many(self, refs: list[int]) -> list[Any]:
        """Extract every ref, skipping elements without an extractor."""
        results = []
        for ref in refs:
            metrics = self.extract(ref)
            if metrics is not None:
                results.append(metrics)
        return results
