"""Metrics extraction: resolver, classifier, identity, extractors, router."""

from aecmetrics.extraction.classifier import DEFAULT_CLASS_TABLE, ElementClassifier, classify_element
from aecmetrics.extraction.extractors import EXTRACTOR_REGISTRY, MetricsExtractor, get_extractor
from aecmetrics.extraction.identity import extract_element_identity
from aecmetrics.extraction.resolver import (
    extract_base_quantities,
    find_property,
    find_property_text,
    find_quantity,
)
from aecmetrics.extraction.router import (
    MetricsRouter,
    extract_standardized_metrics,
    resolve_ifc_class,
)

__all__ = [
    "DEFAULT_CLASS_TABLE",
    "EXTRACTOR_REGISTRY",
    "ElementClassifier",
    "MetricsExtractor",
    "MetricsRouter",
    "classify_element",
    "extract_base_quantities",
    "extract_element_identity",
    "extract_standardized_metrics",
    "find_property",
    "find_property_text",
    "find_quantity",
    "get_extractor",
    "resolve_ifc_class",
]
