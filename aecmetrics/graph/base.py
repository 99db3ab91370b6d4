"""The graph-access seam between the extraction engine and a model source.

A ``PropertyView`` is a plain dict describing one entity::

    {
        "expressID": 1234,
        "type": 17,                     # numeric type code
        "GlobalId": "2O2Fr$t4X7Zf8NOew3FLOH",
        "Name": "Basic Wall:Exterior",  # or {"value": "..."}
        "PredefinedType": "FLOOR",
        "ObjectType": "...",
        "typeObject": 1240,             # reference to the type object
        "ContainedInStructure": 88,     # reference to the spatial container
        "psets": [{"Name": "Pset_WallCommon", "HasProperties": [...]}],
        "qsets": [{"Name": "Qto_WallBaseQuantities", "Quantities": [...]}],
    }

Set entries may be literals, wrapped literals, typed measures or bare
reference ids; see :mod:`aecmetrics.extraction.resolver`.  Views fetched
with ``resolve_indirect=False`` omit ``psets`` and ``qsets`` but keep the
element's own attributes untouched.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

PropertyView = dict[str, Any]


@runtime_checkable
class GraphAccess(Protocol):
    """What the engine needs from a model source.

    Implementations may raise anything; the engine catches at its seams.
    No caching is expected of them.
    """

    def get_properties(self, ref: int, resolve_indirect: bool) -> PropertyView:
        """Return the view of element *ref*, with its sets if *resolve_indirect*."""
        ...

    def get_item_properties(self, ref: int) -> PropertyView:
        """Single-hop lookup of a referenced property, quantity or object."""
        ...

    def type_code_to_name(self, code: int) -> str:
        """Map a numeric type code to an IFC class name."""
        ...


def type_code_fallback(graph: Any, code: int) -> str | None:
    """Consult the optional secondary type table of *graph*, if it has one."""
    lookup = getattr(graph, "type_code_fallback", None)
    if lookup is None:
        return None
    return lookup(code)
