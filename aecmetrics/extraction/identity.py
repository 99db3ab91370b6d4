"""Identity Extractor: the fields every standardized record shares."""

from __future__ import annotations

import logging
from typing import Any

from aecmetrics.extraction.classifier import ElementClassifier, classify_element
from aecmetrics.extraction.resolver import (
    entry_name,
    entry_value,
    property_sets,
    resolve_entry,
    set_name,
    text_value,
)
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import ElementIdentity, ExtractionTrace

logger = logging.getLogger(__name__)

# Property sets scanned for identity fields, by lower-case name fragment
_IDENTITY_SET_TOKENS = ("identity", "rehome", "type", "common", "adapter")

_TRUE_STRINGS = ("true", "yes", "1", "t", "y")


def _reference(value: Any) -> int | None:
    value = value.get("value") if isinstance(value, dict) else value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, dict):
        return None
    if isinstance(value, str):
        return value.strip() or None
    return str(value)


def _as_bool(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _predefined_type(*views: PropertyView | None) -> str | None:
    for view in views:
        if not view:
            continue
        raw = view.get("PredefinedType")
        raw = raw.get("value") if isinstance(raw, dict) else raw
        if raw is not None and not isinstance(raw, (dict, list)):
            return str(raw)
    return None


def _linked_name(graph: GraphAccess, ref: int | None, what: str) -> str | None:
    if ref is None:
        return None
    try:
        view = graph.get_item_properties(ref)
    except Exception:
        logger.debug("%s lookup #%s failed", what, ref, exc_info=True)
        return None
    if not view:
        return None
    return text_value(view.get("Name")) or text_value(view.get("name"))


def _scan_identity_sets(graph: GraphAccess, view: PropertyView | None, fields: dict[str, Any]) -> None:
    for pset in property_sets(view):
        pset_name = set_name(pset).lower()
        if not any(token in pset_name for token in _IDENTITY_SET_TOKENS):
            continue
        for raw in pset.get("HasProperties") or ():
            entry = resolve_entry(graph, raw)
            prop = entry_name(entry).lower()
            value = entry_value(entry)
            if not prop or value is None:
                continue

            if "typemark" in prop or prop == "type mark":
                fields["type_mark"] = _as_text(value)
            elif prop == "mark" or "instance mark" in prop:
                fields["instance_mark"] = _as_text(value)
            elif "typename" in prop or prop == "type name":
                if not fields.get("type_name"):
                    fields["type_name"] = _as_text(value)
            elif "phase" in prop:
                fields["phase"] = _as_text(value)
            elif "isexternal" in prop or prop == "is external":
                fields["is_external"] = _as_bool(value)
            elif "family" in prop and ("name" in prop or prop == "family"):
                fields["family_name"] = _as_text(value)
            elif "category" in prop and ("name" in prop or prop == "category"):
                fields["category_name"] = _as_text(value)
            elif prop == "level" or "reference level" in prop or "level name" in prop:
                fields["level_name"] = _as_text(value)


def extract_element_identity(
    graph: GraphAccess,
    ref: int,
    ifc_class: str,
    base_view: PropertyView | None = None,
    full_view: PropertyView | None = None,
    classifier: ElementClassifier | None = None,
    trace: ExtractionTrace | None = None,
) -> ElementIdentity:
    """Assemble the identity of element *ref*.

    The base view keeps the element's own attributes as exported; the full
    view carries its property sets.  The classifier runs last so it can use
    every refining field.  Any failure yields ``ElementIdentity(ifc_class,
    express_id)`` only.
    """
    try:
        if base_view is None:
            base_view = graph.get_properties(ref, False)
        if full_view is None:
            full_view = graph.get_properties(ref, True)

        fields: dict[str, Any] = {
            "global_id": text_value(base_view.get("GlobalId")) or text_value(full_view.get("GlobalId")),
            "name": text_value(full_view.get("Name")) or text_value(base_view.get("Name")),
            "ifc_predefined_type": _predefined_type(base_view, full_view),
        }

        type_ref = _reference(full_view.get("typeObject", base_view.get("typeObject")))
        type_name = _linked_name(graph, type_ref, "Type object")
        if type_name:
            fields["type_name"] = type_name

        _scan_identity_sets(graph, full_view, fields)
        if trace is not None:
            for pset in property_sets(full_view):
                trace.saw_property_set(set_name(pset))

        if not fields.get("level_name"):
            container = full_view.get("ContainedInStructure", base_view.get("ContainedInStructure"))
            fields["level_name"] = _linked_name(graph, _reference(container), "Container")

        args = (
            ifc_class,
            fields.get("ifc_predefined_type"),
            fields.get("category_name"),
            fields.get("family_name"),
            fields.get("type_name"),
            fields.get("name"),
        )
        fields["element_category"] = (
            classifier.classify(*args) if classifier is not None else classify_element(*args)
        )
        identity = ElementIdentity(ifc_class=ifc_class, express_id=ref, **fields)
    except Exception:
        logger.warning("Identity extraction failed for #%s (%s)", ref, ifc_class, exc_info=True)
        return ElementIdentity(ifc_class=ifc_class, express_id=ref)

    logger.debug(
        "Identity #%s: %s / %s -> %s",
        ref,
        identity.ifc_class,
        identity.ifc_predefined_type,
        identity.element_category,
    )
    return identity
