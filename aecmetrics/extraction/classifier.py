"""Element Classifier: IFC class + subtype + free text -> logical category.

The class table follows the Revit IFC export layer mapping: each IFC class
maps predefined types (or ``DEFAULT``) to a category.  Proxies and slabs
are then refined from the category, family, type and instance names.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

ClassTable = Mapping[str, Mapping[str, str]]

DEFAULT_KEY = "DEFAULT"


def _freeze(table: dict[str, dict[str, str]]) -> ClassTable:
    return MappingProxyType(
        {
            ifc_class.upper(): MappingProxyType({k.upper(): v for k, v in subtypes.items()})
            for ifc_class, subtypes in table.items()
        }
    )


DEFAULT_CLASS_TABLE: ClassTable = _freeze(
    {
        "IfcRoof": {DEFAULT_KEY: "roof"},
        "IfcSlab": {"FLOOR": "floor", "BASESLAB": "footing", DEFAULT_KEY: "slab"},
        "IfcWall": {DEFAULT_KEY: "wall"},
        "IfcWallStandardCase": {DEFAULT_KEY: "wall"},
        "IfcDoor": {DEFAULT_KEY: "door"},
        "IfcWindow": {DEFAULT_KEY: "window"},
        "IfcColumn": {DEFAULT_KEY: "column"},
        "IfcBeam": {DEFAULT_KEY: "beam"},
        "IfcFooting": {DEFAULT_KEY: "footing"},
        "IfcRailing": {DEFAULT_KEY: "railing"},
        "IfcStair": {DEFAULT_KEY: "stair"},
        "IfcStairFlight": {DEFAULT_KEY: "stair"},
        "IfcFurniture": {DEFAULT_KEY: "casework"},
        "IfcBuildingElementProxy": {DEFAULT_KEY: "other"},
        "IfcProxy": {DEFAULT_KEY: "other"},
    }
)

_PROXY_CLASSES = ("IFCBUILDINGELEMENTPROXY", "IFCPROXY")

_MASS_TOKENS = ("MASS",)
_CASEWORK_TOKENS = ("CASEWORK", "CABINET", "VANITY")
_FRAMING_CATEGORY_TOKENS = ("STRUCTURAL FRAMING", "FRAMING")
_BEAM_TOKENS = ("BEAM", "GIRDER", "JOIST")
_DECK_TOKENS = ("DECK", "PORCH", "PATIO", "BALCONY")


def _class_key(ifc_class: str) -> str:
    key = (ifc_class or "").strip().upper()
    if not key.startswith("IFC"):
        key = "IFC" + key
    return key


def _contains_any(text: str, tokens: tuple[str, ...]) -> bool:
    return any(token in text for token in tokens)


class ElementClassifier:
    """Classify elements against an immutable class table.

    Pass a custom *table* (``{"IfcSlab": {"FLOOR": "floor", "DEFAULT": "slab"}}``)
    to extend or replace the defaults without touching module state.
    """

    def __init__(self, table: Mapping[str, Mapping[str, str]] | None = None) -> None:
        if table is None:
            self.table = DEFAULT_CLASS_TABLE
        elif isinstance(table, MappingProxyType):
            self.table = table
        else:
            self.table = _freeze({k: dict(v) for k, v in table.items()})

    def lookup(self, ifc_class: str, predefined_type: str | None = None) -> str | None:
        """Step 1: table lookup; a subtype entry beats the class default."""
        subtypes = self.table.get(_class_key(ifc_class))
        if subtypes is None:
            return None
        if predefined_type:
            category = subtypes.get(predefined_type.upper())
            if category is not None:
                return category
        return subtypes.get(DEFAULT_KEY)

    def classify(
        self,
        ifc_class: str,
        predefined_type: str | None = None,
        category_name: str | None = None,
        family_name: str | None = None,
        type_name: str | None = None,
        name: str | None = None,
    ) -> str | None:
        category = self.lookup(ifc_class, predefined_type)
        class_key = _class_key(ifc_class)
        subtype = (predefined_type or "").upper()
        category_upper = (category_name or "").upper()
        text = " ".join(
            (category_upper, (family_name or "").upper(), (type_name or "").upper(), (name or "").upper())
        )

        if class_key in _PROXY_CLASSES:
            if _contains_any(text, _MASS_TOKENS):
                category = "mass"
            elif _contains_any(text, _CASEWORK_TOKENS):
                category = "casework"
            elif _contains_any(category_upper, _FRAMING_CATEGORY_TOKENS) or _contains_any(
                text, _BEAM_TOKENS
            ):
                category = "beam"

        if category in ("slab", "floor"):
            if _contains_any(text, _DECK_TOKENS):
                category = "deck"
            elif subtype == "FLOOR" or ("FLOOR" in text and "SLAB" not in text):
                category = "floor"

        if category == "footing" or (class_key == "IFCSLAB" and subtype == "BASESLAB"):
            category = "footing"

        logger.debug(
            "Classified %s (%s) as %s", ifc_class, predefined_type or "-", category
        )
        return category


_default_classifier = ElementClassifier()


def classify_element(
    ifc_class: str,
    predefined_type: str | None = None,
    category_name: str | None = None,
    family_name: str | None = None,
    type_name: str | None = None,
    name: str | None = None,
) -> str | None:
    """Classify with the default table."""
    return _default_classifier.classify(
        ifc_class, predefined_type, category_name, family_name, type_name, name
    )
