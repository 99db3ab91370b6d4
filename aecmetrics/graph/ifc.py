"""GraphAccess over an ifcopenshell model.

Property and quantity sets are exposed the way a streaming viewer API
exposes them: each set lists bare reference ids that are resolved one hop
at a time through :meth:`IfcOpenShellGraph.get_item_properties`.  Values
are passed through in file units; unit reconciliation is left to the
magnitude heuristics downstream.
"""

from __future__ import annotations

import logging
from typing import Any

import ifcopenshell
import ifcopenshell.util.element

from aecmetrics.errors import GraphAccessError, ReferenceResolutionError, TypeCodeLookupError
from aecmetrics.graph.base import PropertyView

logger = logging.getLogger(__name__)


class IfcOpenShellGraph:
    """Build property views on demand from an ``ifcopenshell.file``."""

    def __init__(self, ifc_file: ifcopenshell.file) -> None:
        self.ifc_file = ifc_file
        self._codes: dict[str, int] = {}
        self._names: dict[int, str] = {}

    @classmethod
    def open(cls, path: str) -> IfcOpenShellGraph:
        return cls(ifcopenshell.open(path))

    # -- type codes ---------------------------------------------------------

    def type_code(self, ifc_class: str) -> int:
        """Return the stable per-graph code for *ifc_class*, assigning one if new."""
        code = self._codes.get(ifc_class)
        if code is None:
            code = len(self._codes) + 1
            self._codes[ifc_class] = code
            self._names[code] = ifc_class
        return code

    def type_code_to_name(self, code: int) -> str:
        try:
            return self._names[code]
        except KeyError:
            raise TypeCodeLookupError(code) from None

    # -- views --------------------------------------------------------------

    def _entity(self, ref: int, error: type[GraphAccessError] = GraphAccessError) -> Any:
        try:
            return self.ifc_file.by_id(ref)
        except RuntimeError as exc:
            raise error(ref, f"Entity #{ref} not found") from exc

    def get_properties(self, ref: int, resolve_indirect: bool) -> PropertyView:
        entity = self._entity(ref)
        view = self._object_view(entity)

        element_type = ifcopenshell.util.element.get_type(entity)
        if element_type is not None and element_type != entity:
            view["typeObject"] = element_type.id()

        container = ifcopenshell.util.element.get_container(entity)
        if container is not None:
            view["ContainedInStructure"] = container.id()

        if resolve_indirect:
            psets, qsets = self._definitions(entity)
            view["psets"] = psets
            view["qsets"] = qsets
        return view

    def get_item_properties(self, ref: int) -> PropertyView:
        entity = self._entity(ref, ReferenceResolutionError)
        if entity.is_a("IfcProperty"):
            return self._property_view(entity)
        if entity.is_a("IfcPhysicalQuantity"):
            return self._quantity_view(entity)
        return self._object_view(entity)

    def _object_view(self, entity: Any) -> PropertyView:
        view: PropertyView = {
            "expressID": entity.id(),
            "type": self.type_code(entity.is_a()),
        }
        for attribute in ("GlobalId", "Name", "PredefinedType", "ObjectType"):
            value = getattr(entity, attribute, None)
            if value is not None:
                view[attribute] = value
        return view

    def _definitions(self, entity: Any) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        psets: list[dict[str, Any]] = []
        qsets: list[dict[str, Any]] = []
        for rel in getattr(entity, "IsDefinedBy", None) or ():
            if not rel.is_a("IfcRelDefinesByProperties"):
                continue
            definition = rel.RelatingPropertyDefinition
            if definition.is_a("IfcPropertySet"):
                psets.append(
                    {
                        "expressID": definition.id(),
                        "Name": definition.Name,
                        "HasProperties": [p.id() for p in definition.HasProperties or ()],
                    }
                )
            elif definition.is_a("IfcElementQuantity"):
                qsets.append(
                    {
                        "expressID": definition.id(),
                        "Name": definition.Name,
                        "Quantities": [q.id() for q in definition.Quantities or ()],
                    }
                )
        return psets, qsets

    def _property_view(self, prop: Any) -> PropertyView:
        view: PropertyView = {
            "expressID": prop.id(),
            "type": self.type_code(prop.is_a()),
            "Name": prop.Name,
        }
        if prop.is_a("IfcPropertySingleValue"):
            nominal = prop.NominalValue
            view["NominalValue"] = {"value": None if nominal is None else nominal.wrappedValue}
        elif prop.is_a("IfcPropertyEnumeratedValue"):
            values = prop.EnumerationValues or ()
            view["NominalValue"] = {"value": values[0].wrappedValue if values else None}
        else:
            logger.debug("Unsupported property entity %s #%s", prop.is_a(), prop.id())
        return view

    def _quantity_view(self, quantity: Any) -> PropertyView:
        view: PropertyView = {
            "expressID": quantity.id(),
            "type": self.type_code(quantity.is_a()),
            "Name": quantity.Name,
        }
        # IfcQuantityLength.LengthValue, IfcQuantityArea.AreaValue, ...
        for key, value in quantity.get_info(recursive=False).items():
            if key.endswith("Value") and isinstance(value, (int, float)):
                view[key] = value
        return view
