"""Batch extraction over an IFC file.

Entry point: ``extract_model_metrics(ifc_path)``

Opens an IFC2x3 or IFC4 file with ifcopenshell and runs the router over
every IfcBuildingElement (plus furniture, which is not one), returning the
standardized record of each element that has an extractor.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import ifcopenshell

from aecmetrics.config import ELEMENT_BASE_CLASS, EXTRA_ELEMENT_CLASSES, ExtractionSettings
from aecmetrics.extraction.classifier import ElementClassifier
from aecmetrics.extraction.router import MetricsRouter
from aecmetrics.graph.ifc import IfcOpenShellGraph

logger = logging.getLogger(__name__)


def _element_ids(ifc_file: ifcopenshell.file) -> list[int]:
    ids: list[int] = []
    seen: set[int] = set()
    for ifc_class in (ELEMENT_BASE_CLASS, *EXTRA_ELEMENT_CLASSES):
        try:
            entities = ifc_file.by_type(ifc_class)
        except RuntimeError:
            # Class not in this file's schema
            logger.debug("%s not in schema %s", ifc_class, ifc_file.schema)
            continue
        for entity in entities:
            if entity.id() not in seen:
                seen.add(entity.id())
                ids.append(entity.id())
    return ids


def extract_file_metrics(
    ifc_file: ifcopenshell.file,
    settings: ExtractionSettings | None = None,
    classifier: ElementClassifier | None = None,
) -> list[Any]:
    """Extract standardized metrics for every building element in *ifc_file*."""
    router = MetricsRouter(IfcOpenShellGraph(ifc_file), classifier, settings)
    ids = _element_ids(ifc_file)
    logger.info("Found %d building elements", len(ids))
    results = router.extract_many(ids)
    logger.info("Extraction complete: %d of %d elements have metrics", len(results), len(ids))
    return results


def extract_model_metrics(
    ifc_path: str | Path,
    settings: ExtractionSettings | None = None,
    classifier: ElementClassifier | None = None,
) -> list[Any]:
    """Parse an IFC file and return one StandardizedMetrics record per element.

    Parameters
    ----------
    ifc_path:
        Path to an IFC2x3 or IFC4 file.
    settings:
        Extraction settings; read from ``AECMETRICS_*`` environment
        variables when omitted.

    Returns
    -------
    list
        StandardizedMetrics records, in file order.  Elements classified as
        ``other`` are skipped.
    """
    settings = settings or ExtractionSettings.from_env()
    ifc_path = Path(ifc_path)
    logger.info("Opening %s", ifc_path)
    ifc_file = ifcopenshell.open(str(ifc_path))
    return extract_file_metrics(ifc_file, settings, classifier)
