"""Element identity and the intermediate records used while extracting metrics.

Every standardized record starts from an ``ElementIdentity``: the fields that
all building elements share regardless of category.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ELEMENT_CATEGORIES = (
    "roof",
    "slab",
    "floor",
    "deck",
    "wall",
    "door",
    "window",
    "column",
    "beam",
    "footing",
    "railing",
    "stair",
    "mass",
    "casework",
    "other",
)


class ElementIdentity(BaseModel):
    """Identity and classification fields common to every element.

    Immutable once built.  Dumped with camelCase aliases for the UI layer::

        identity.model_dump(by_alias=True, exclude_none=True)
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    ifc_class: str
    express_id: int
    global_id: str | None = None
    name: str | None = None
    type_name: str | None = None
    """Revit type name, or the mapped identity Pset value."""

    type_mark: str | None = None
    instance_mark: str | None = None
    level_name: str | None = None
    phase: str | None = None
    is_external: bool | None = None
    ifc_predefined_type: str | None = None
    family_name: str | None = None
    category_name: str | None = None
    element_category: str | None = None
    """Normalized label, one of ``ELEMENT_CATEGORIES`` (None if unclassified)."""

    def identity_fields(self) -> dict[str, object]:
        """Return only the shared identity fields, by field name."""
        return {name: getattr(self, name) for name in ElementIdentity.model_fields}


class BaseQuantities(BaseModel):
    """Quantities some exporters write into a *property* set named BaseQuantities.

    Values are raw (unit unknown); they feed the same heuristics as proper
    quantity-set values and rank second behind them.
    """

    model_config = ConfigDict(frozen=True)

    gross_area: float | None = None
    net_area: float | None = None
    projected_area: float | None = None
    perimeter: float | None = None
    width: float | None = None
    depth: float | None = None
    length: float | None = None
    height: float | None = None
    thickness: float | None = None
    gross_volume: float | None = None
    net_volume: float | None = None
    volume: float | None = None
    source_name: str = "BaseQuantities"

    def has_values(self) -> bool:
        return any(
            getattr(self, name) is not None
            for name in type(self).model_fields
            if name != "source_name"
        )


class ExtractionTrace(BaseModel):
    """Debug side channel recording where each output field came from.

    Owned by the caller and passed alongside an extraction; the engine only
    writes into it when one is supplied.
    """

    property_sets_found: list[str] = Field(default_factory=list)
    quantity_sets_found: list[str] = Field(default_factory=list)
    sources: dict[str, str] = Field(default_factory=dict)
    adapter_found: bool = False
    adapter_fields: list[str] = Field(default_factory=list)
    base_quantities_source: str | None = None

    def record(self, field: str, source: str) -> None:
        self.sources[field] = source

    def saw_property_set(self, name: str) -> None:
        if name and name not in self.property_sets_found:
            self.property_sets_found.append(name)

    def saw_quantity_set(self, name: str) -> None:
        if name and name not in self.quantity_sets_found:
            self.quantity_sets_found.append(name)

    def saw_adapter_field(self, name: str) -> None:
        self.adapter_found = True
        if name not in self.adapter_fields:
            self.adapter_fields.append(name)
