"""Shared fixtures: dict-built property graphs.

``GraphBuilder`` assembles PropertyViews the way a streaming IFC viewer
delivers them: upper-case class names behind numeric type codes, sets
whose entries are inline dicts or bare reference ids.
"""

from __future__ import annotations

from typing import Any

import pytest

from aecmetrics.graph.memory import InMemoryGraph

TYPE_CODES = {
    "IfcRoof": 2016,
    "IfcSlab": 1529,
    "IfcWall": 2391,
    "IfcWallStandardCase": 3856,
    "IfcDoor": 395,
    "IfcWindow": 3304,
    "IfcFooting": 900,
    "IfcColumn": 843,
    "IfcBeam": 753,
    "IfcRailing": 2061,
    "IfcStair": 331,
    "IfcStairFlight": 4252,
    "IfcFurniture": 1509,
    "IfcBuildingElementProxy": 1095,
    "IfcWallType": 1898,
    "IfcBuildingStorey": 3124,
}


def _measure_key(name: str) -> str:
    lower = name.lower()
    if "area" in lower:
        return "AreaValue"
    if "volume" in lower:
        return "VolumeValue"
    if lower.startswith("number"):
        return "CountValue"
    return "LengthValue"


class GraphBuilder:
    """Incrementally build an InMemoryGraph."""

    def __init__(self) -> None:
        self.elements: dict[int, dict[str, Any]] = {}
        self.items: dict[int, dict[str, Any]] = {}
        self.type_names = {code: name.upper() for name, code in TYPE_CODES.items()}
        self._next_element = 100
        self._next_item = 5000

    def _item(self, view: dict[str, Any]) -> int:
        ref = self._next_item
        self._next_item += 1
        self.items[ref] = {"expressID": ref, **view}
        return ref

    # -- sets ---------------------------------------------------------------

    def pset(self, name: str, properties: dict[str, Any], by_reference: bool = False) -> dict[str, Any]:
        entries: list[Any] = []
        for prop_name, value in properties.items():
            entry = {"Name": {"value": prop_name}, "NominalValue": {"value": value}}
            entries.append(self._item(entry) if by_reference else entry)
        return {"Name": {"value": name}, "HasProperties": entries}

    def qset(self, name: str, quantities: dict[str, float], by_reference: bool = False) -> dict[str, Any]:
        entries: list[Any] = []
        for qty_name, value in quantities.items():
            entry = {"Name": {"value": qty_name}, _measure_key(qty_name): {"value": value}}
            entries.append(self._item(entry) if by_reference else entry)
        return {"Name": {"value": name}, "Quantities": entries}

    # -- elements -----------------------------------------------------------

    def element(
        self,
        ifc_class: str,
        name: str | None = None,
        *,
        predefined: str | None = None,
        psets: list[dict[str, Any]] | None = None,
        qsets: list[dict[str, Any]] | None = None,
        type_name: str | None = None,
        level: str | None = None,
        type_code: int | None = None,
    ) -> int:
        ref = self._next_element
        self._next_element += 1
        view: dict[str, Any] = {
            "expressID": ref,
            "type": TYPE_CODES[ifc_class] if type_code is None else type_code,
            "GlobalId": {"value": f"GUID-{ref:04d}"},
        }
        if name is not None:
            view["Name"] = {"value": name}
        if predefined is not None:
            view["PredefinedType"] = {"value": predefined}
        if type_name is not None:
            view["typeObject"] = {
                "value": self._item({"type": TYPE_CODES["IfcWallType"], "Name": {"value": type_name}})
            }
        if level is not None:
            view["ContainedInStructure"] = self._item(
                {"type": TYPE_CODES["IfcBuildingStorey"], "Name": {"value": level}}
            )
        view["psets"] = list(psets or ())
        view["qsets"] = list(qsets or ())
        self.elements[ref] = view
        return ref

    @property
    def graph(self) -> InMemoryGraph:
        return InMemoryGraph(self.elements, self.items, self.type_names)


@pytest.fixture()
def builder() -> GraphBuilder:
    return GraphBuilder()
