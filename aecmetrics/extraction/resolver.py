"""Property Graph Resolver: typed scalar lookups over loosely shaped sets.

Exporters disagree about how a property or quantity entry looks.  Every
entry is one of a small closed set of raw shapes (see :class:`RawShape`)
and :func:`resolve_entry` is the single place that turns a reference into
the entity it points at.  Lookups match names exactly first (ignoring case,
spaces and underscores) and only then by substring, so ``"Width"`` prefers
a real ``Width`` over ``NominalWidth``.
"""

from __future__ import annotations

import logging
import math
import re
from enum import Enum
from typing import Any, Callable, Iterable

from aecmetrics.config import REFERENCE_ID_THRESHOLD
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import BaseQuantities, ExtractionTrace
from aecmetrics.units import positive_number

logger = logging.getLogger(__name__)

MEASURE_KEYS = ("AreaValue", "LengthValue", "VolumeValue", "CountValue")
_WRAPPER_KEYS = ("NominalValue", "value", "wrappedValue")

_LEADING_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")

# Normalized BaseQuantities property names -> BaseQuantities field
_BASE_QUANTITY_FIELDS = {
    "grossarea": "gross_area",
    "netarea": "net_area",
    "projectedarea": "projected_area",
    "perimeter": "perimeter",
    "thickness": "thickness",
    "overallthickness": "thickness",
    "width": "width",
    "depth": "depth",
    "length": "length",
    "height": "height",
    "grossvolume": "gross_volume",
    "netvolume": "net_volume",
    "volume": "volume",
}


class RawShape(str, Enum):
    """The raw shapes a set entry can take."""

    EMPTY = "empty"
    PRIMITIVE = "primitive"
    WRAPPED = "wrapped"
    REFERENCE = "reference"
    MEASURE = "measure"


def normalize_name(name: str) -> str:
    """Lower-case and drop spaces, underscores and hyphens."""
    return re.sub(r"[\s_\-]+", "", name or "").lower()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _unwrap(value: Any) -> Any:
    if isinstance(value, dict):
        if "value" in value:
            return value["value"]
        if "wrappedValue" in value:
            return value["wrappedValue"]
        return None
    return value


def text_value(value: Any) -> str | None:
    """Return a wrapped or bare string attribute, stripped, or None."""
    value = _unwrap(value)
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return None


# ---------------------------------------------------------------------------
# Raw entries
# ---------------------------------------------------------------------------


def classify_raw(entry: Any) -> RawShape:
    """Classify one set entry.

    A bare integer is an entity id.  A nameless wrapper around an integer
    above ``REFERENCE_ID_THRESHOLD`` is an id as well; smaller wrapped
    numbers are magnitudes.
    """
    if entry is None:
        return RawShape.EMPTY
    if _is_int(entry):
        return RawShape.REFERENCE
    if not isinstance(entry, dict):
        return RawShape.PRIMITIVE
    if any(key in entry for key in MEASURE_KEYS):
        return RawShape.MEASURE
    if not entry_name(entry):
        inner = entry.get("value")
        if _is_int(inner) and inner > REFERENCE_ID_THRESHOLD:
            return RawShape.REFERENCE
    if any(key in entry for key in _WRAPPER_KEYS):
        return RawShape.WRAPPED
    return RawShape.EMPTY if not entry else RawShape.WRAPPED


def resolve_entry(graph: GraphAccess, entry: Any) -> Any:
    """Follow a reference entry one hop; anything else is returned as is.

    A failed or empty lookup is logged and the original entry is kept as
    a literal.
    """
    if classify_raw(entry) is not RawShape.REFERENCE:
        return entry
    ref = entry if _is_int(entry) else entry["value"]
    try:
        item = graph.get_item_properties(ref)
    except Exception:
        logger.warning("Could not resolve reference #%s, using raw value", ref, exc_info=True)
        return entry
    if not item:
        logger.warning("Reference #%s resolved to nothing, using raw value", ref)
        return entry
    return item


def entry_name(entry: Any) -> str:
    if not isinstance(entry, dict):
        return ""
    name = entry.get("Name")
    if isinstance(name, str):
        return name
    if isinstance(name, dict):
        inner = _unwrap(name)
        if inner is not None:
            return str(inner)
    if entry.get("name") is not None:
        return str(entry["name"])
    for key, value in entry.items():
        if "name" in key.lower() and value:
            text = text_value(value)
            if text:
                return text
    return ""


def entry_value(entry: Any) -> Any:
    """Typed measure, then a ``NominalValue``/``value`` wrapper, then a primitive."""
    if not isinstance(entry, dict):
        return entry
    for key in MEASURE_KEYS:
        if key in entry and entry[key] is not None:
            return _unwrap(entry[key])
    if entry.get("NominalValue") is not None:
        return _unwrap(entry["NominalValue"])
    if "value" in entry:
        return entry["value"]
    if "wrappedValue" in entry:
        return entry["wrappedValue"]
    return None


# ---------------------------------------------------------------------------
# Sets
# ---------------------------------------------------------------------------


def set_name(set_: Any) -> str:
    if not isinstance(set_, dict):
        return ""
    return text_value(set_.get("Name")) or ""


def _as_list(sets: Any) -> list[dict[str, Any]]:
    if isinstance(sets, dict):
        sets = list(sets.values())
    return [s for s in sets or () if isinstance(s, dict)]


def property_sets(view: PropertyView | None) -> list[dict[str, Any]]:
    if not view:
        return []
    return _as_list(view.get("psets"))


def quantity_sets(view: PropertyView | None) -> list[dict[str, Any]]:
    """Proper quantity sets, or psets that look like them when there are none."""
    if not view:
        return []
    qsets = _as_list(view.get("qsets"))
    if qsets:
        return qsets
    return [
        s
        for s in property_sets(view)
        if "qto" in set_name(s).lower()
        or "quantity" in set_name(s).lower()
        or "Quantities" in s
    ]


def _scoped(sets: Iterable[dict[str, Any]], scope: str | None) -> list[dict[str, Any]]:
    if not scope:
        return list(sets)
    scope_lower = scope.lower()
    return [s for s in sets if scope_lower in set_name(s).lower()]


def _resolved_entries(
    graph: GraphAccess, sets: list[dict[str, Any]], key: str
) -> list[tuple[str, str, Any]]:
    """Return ``(set name, entry name, entry)`` for every entry, references followed."""
    entries = []
    for set_ in sets:
        name = set_name(set_)
        for raw in set_.get(key) or ():
            entry = resolve_entry(graph, raw)
            entries.append((name, entry_name(entry), entry))
    return entries


def _search(
    entries: list[tuple[str, str, Any]],
    name: str,
    accept: Callable[[Any], Any],
    exact_only: bool = False,
) -> tuple[Any, str] | None:
    target = normalize_name(name)
    if not target:
        return None
    for exact in ((True,) if exact_only else (True, False)):
        for set_label, entry_label, entry in entries:
            current = normalize_name(entry_label)
            matched = current == target if exact else target in current
            if not matched:
                continue
            value = accept(entry_value(entry))
            if value is not None:
                return value, f"{set_label}.{entry_label}"
    return None


def _record(trace: ExtractionTrace | None, field: str | None, name: str, source: str) -> None:
    if trace is not None:
        trace.record(field or name, source)
    logger.debug("%s <- %s", field or name, source)


def note_sets(trace: ExtractionTrace | None, view: PropertyView | None) -> None:
    """Record the names of every set on *view* in *trace*."""
    if trace is None:
        return
    for set_ in property_sets(view):
        trace.saw_property_set(set_name(set_))
    for set_ in _as_list((view or {}).get("qsets")):
        trace.saw_quantity_set(set_name(set_))


def _lookup(
    graph: GraphAccess,
    sets: list[dict[str, Any]],
    key: str,
    name: str,
    scope: str | None,
    accept: Callable[[Any], Any],
    trace: ExtractionTrace | None,
    field: str | None,
    exact: bool = False,
) -> Any:
    entries = _resolved_entries(graph, _scoped(sets, scope), key)
    found = _search(entries, name, accept, exact)
    if found is None:
        return None
    value, source = found
    _record(trace, field, name, source)
    return value


# ---------------------------------------------------------------------------
# Value acceptors
# ---------------------------------------------------------------------------


def _accept_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number
    if isinstance(value, str):
        match = _LEADING_NUMBER_RE.match(value)
        if match:
            return float(match.group(1))
    return None


def _accept_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) and not math.isnan(value):
        return str(value)
    return None


def _accept_raw(value: Any) -> Any:
    if isinstance(value, dict):
        return None
    return value


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def find_quantity(
    graph: GraphAccess,
    view: PropertyView | None,
    name: str,
    set_name: str | None = None,
    trace: ExtractionTrace | None = None,
    field: str | None = None,
    exact: bool = False,
) -> float | None:
    """Return the first positive quantity called *name*, or None.

    *set_name* restricts the search to sets whose name contains it
    (case-insensitive).  With *exact* a quantity whose name merely contains
    *name* is never taken.
    """
    note_sets(trace, view)
    return _lookup(
        graph,
        quantity_sets(view),
        "Quantities",
        name,
        set_name,
        positive_number,
        trace,
        field,
        exact,
    )


def find_property(
    graph: GraphAccess,
    view: PropertyView | None,
    name: str,
    set_name: str | None = None,
    trace: ExtractionTrace | None = None,
    field: str | None = None,
) -> float | None:
    """Return a numeric property (numbers or numeric strings), or None."""
    note_sets(trace, view)
    return _lookup(
        graph, property_sets(view), "HasProperties", name, set_name, _accept_number, trace, field
    )


def find_property_text(
    graph: GraphAccess,
    view: PropertyView | None,
    name: str,
    set_name: str | None = None,
    trace: ExtractionTrace | None = None,
    field: str | None = None,
) -> str | None:
    note_sets(trace, view)
    return _lookup(
        graph, property_sets(view), "HasProperties", name, set_name, _accept_text, trace, field
    )


def find_property_raw(
    graph: GraphAccess,
    view: PropertyView | None,
    name: str,
    set_name: str | None = None,
    trace: ExtractionTrace | None = None,
    field: str | None = None,
) -> Any:
    """Return the unconverted value of a property (string, number or bool)."""
    note_sets(trace, view)
    return _lookup(
        graph, property_sets(view), "HasProperties", name, set_name, _accept_raw, trace, field
    )


def property_entries(
    graph: GraphAccess, sets: list[dict[str, Any]]
) -> list[tuple[str, str, Any]]:
    """Every ``(set name, property name, value)`` in *sets*, references followed."""
    return [
        (set_label, entry_label, entry_value(entry))
        for set_label, entry_label, entry in _resolved_entries(graph, sets, "HasProperties")
    ]


def quantity_entries(
    graph: GraphAccess, sets: list[dict[str, Any]]
) -> list[tuple[str, str, float]]:
    """Every positive ``(set name, quantity name, value)`` in *sets*."""
    entries = []
    for set_label, entry_label, entry in _resolved_entries(graph, sets, "Quantities"):
        number = positive_number(entry_value(entry))
        if number is not None:
            entries.append((set_label, entry_label, number))
    return entries


# ---------------------------------------------------------------------------
# BaseQuantities and adapter sets
# ---------------------------------------------------------------------------


def _find_base_quantities_set(psets: list[dict[str, Any]]) -> dict[str, Any] | None:
    for set_ in psets:
        if normalize_name(set_name(set_)) in ("basequantities", "psetbasequantities"):
            return set_
    for set_ in psets:
        name = normalize_name(set_name(set_))
        if "basequantities" in name or ("base" in name and "quantities" in name):
            return set_
    return None


def extract_base_quantities(
    graph: GraphAccess,
    psets: Any,
    trace: ExtractionTrace | None = None,
) -> BaseQuantities | None:
    """Parse the BaseQuantities *property* set into a flat record.

    Returns None if the set is absent or carries no positive number.
    """
    base_set = _find_base_quantities_set(_as_list(psets))
    if base_set is None:
        return None
    items = base_set.get("HasProperties") or base_set.get("Quantities") or ()
    source = set_name(base_set)

    values: dict[str, float] = {}
    for raw in items:
        entry = resolve_entry(graph, raw)
        field = _BASE_QUANTITY_FIELDS.get(normalize_name(entry_name(entry)))
        if field is None or field in values:
            continue
        number = positive_number(entry_value(entry))
        if number is not None:
            values[field] = number

    if not values:
        logger.debug("BaseQuantities set %r has no usable values", source)
        return None
    if trace is not None:
        trace.base_quantities_source = source
    return BaseQuantities(source_name=source, **values)


def find_adapter_set(view: PropertyView | None, kind: str) -> dict[str, Any] | None:
    """Find a custom ``*<Kind>Adapter`` property set.

    ``Pset_Rehome_FloorAdapter``, ``Rehome_FloorAdapter`` and
    ``FloorAdapter`` all match ``kind="floor"``.
    """
    suffix = normalize_name(kind) + "adapter"
    for set_ in property_sets(view):
        name = normalize_name(set_name(set_))
        if name.startswith("pset"):
            name = name[len("pset"):]
        if name.endswith(suffix):
            return set_
    return None


def read_adapter(
    graph: GraphAccess,
    view: PropertyView | None,
    kind: str,
    trace: ExtractionTrace | None = None,
) -> dict[str, Any]:
    """Return ``{normalized property name: value}`` from the adapter set, if any."""
    adapter = find_adapter_set(view, kind)
    if adapter is None:
        return {}
    values: dict[str, Any] = {}
    for raw in adapter.get("HasProperties") or ():
        entry = resolve_entry(graph, raw)
        label = entry_name(entry)
        value = entry_value(entry)
        if not label or value is None or isinstance(value, dict):
            continue
        values.setdefault(normalize_name(label), value)
        if trace is not None:
            trace.saw_adapter_field(label)
    return values
