"""An in-memory GraphAccess backed by a snapshot of property views."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from aecmetrics.errors import GraphAccessError, ReferenceResolutionError, TypeCodeLookupError
from aecmetrics.graph.base import PropertyView

logger = logging.getLogger(__name__)

_SET_KEYS = ("psets", "qsets")


def _int_keys(data: dict[Any, Any] | None) -> dict[int, Any]:
    return {int(k): v for k, v in (data or {}).items()}


class InMemoryGraph:
    """Serve property views from plain dicts.

    *elements* maps element ids to full views (sets included).  *items*
    holds the targets of reference entries; lookups that miss there fall
    back to *elements* so type objects and containers can live in either.
    Views are deep-copied on the way out so callers cannot corrupt the
    snapshot.
    """

    def __init__(
        self,
        elements: dict[int, PropertyView] | None = None,
        items: dict[int, PropertyView] | None = None,
        type_names: dict[int, str] | None = None,
        fallback_type_names: dict[int, str] | None = None,
    ) -> None:
        self.elements: dict[int, PropertyView] = dict(elements or {})
        self.items: dict[int, PropertyView] = dict(items or {})
        self.type_names: dict[int, str] = dict(type_names or {})
        self.fallback_type_names: dict[int, str] = dict(fallback_type_names or {})

    # -- construction -------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InMemoryGraph:
        """Build from ``{"elements", "items", "typeNames", "fallbackTypeNames"}``.

        Keys may be strings, as they are after a JSON round trip.
        """
        return cls(
            elements=_int_keys(data.get("elements")),
            items=_int_keys(data.get("items")),
            type_names=_int_keys(data.get("typeNames")),
            fallback_type_names=_int_keys(data.get("fallbackTypeNames")),
        )

    @classmethod
    def from_json(cls, path: str | Path) -> InMemoryGraph:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.from_dict(data)

    def add_element(self, view: PropertyView) -> int:
        ref = int(view["expressID"])
        self.elements[ref] = view
        return ref

    def add_item(self, view: PropertyView) -> int:
        ref = int(view["expressID"])
        self.items[ref] = view
        return ref

    # -- GraphAccess --------------------------------------------------------

    def get_properties(self, ref: int, resolve_indirect: bool) -> PropertyView:
        view = self.elements.get(ref)
        if view is None:
            raise GraphAccessError(ref)
        result = copy.deepcopy(view)
        if not resolve_indirect:
            for key in _SET_KEYS:
                result.pop(key, None)
        return result

    def get_item_properties(self, ref: int) -> PropertyView:
        view = self.items.get(ref)
        if view is None:
            view = self.elements.get(ref)
        if view is None:
            raise ReferenceResolutionError(ref, f"No item #{ref} in snapshot")
        return copy.deepcopy(view)

    def type_code_to_name(self, code: int) -> str:
        try:
            return self.type_names[code]
        except KeyError:
            raise TypeCodeLookupError(code) from None

    def type_code_fallback(self, code: int) -> str | None:
        return self.fallback_type_names.get(code)
