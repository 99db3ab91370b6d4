"""Abstract MetricsExtractor interface and the per-element extraction context.

Every category extractor follows the same template: fetch the element's
views, build its identity, then collect category fields in descending
priority::

    named quantity set -> BaseQuantities pset -> adapter pset
        -> parsed from the display name -> derived

``extract`` never raises.  Any failure is logged with the element id and
category and the variant's minimal ``{ifc_class, express_id}`` record is
returned.
"""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass, field
from typing import Any

from aecmetrics.extraction.identity import extract_element_identity
from aecmetrics.extraction.resolver import (
    extract_base_quantities,
    find_property,
    find_property_text,
    find_quantity,
    normalize_name,
    note_sets,
    property_sets,
    quantity_sets,
    read_adapter,
    set_name,
)
from aecmetrics.graph.base import GraphAccess, PropertyView
from aecmetrics.models.element import BaseQuantities, ElementIdentity, ExtractionTrace
from aecmetrics.units import area_to_square_feet, length_to_feet, volume_to_cubic_feet

logger = logging.getLogger(__name__)


def feet(value: float | None) -> float | None:
    return None if value is None else length_to_feet(value)


def square_feet(value: float | None) -> float | None:
    return None if value is None else area_to_square_feet(value)


def cubic_feet(value: float | None) -> float | None:
    return None if value is None else volume_to_cubic_feet(value)


@dataclass
class ExtractionContext:
    """Everything one extractor needs about one element."""

    graph: GraphAccess
    ref: int
    identity: ElementIdentity
    base_view: PropertyView
    full_view: PropertyView
    qto_set: str | None = None
    trace: ExtractionTrace | None = None
    _base_quantities: BaseQuantities | None = field(default=None, init=False, repr=False)
    _base_loaded: bool = field(default=False, init=False, repr=False)

    # -- lookups ------------------------------------------------------------

    def quantity(self, name: str, set_name: str | None = None, exact: bool = False) -> float | None:
        """Quantity *name* from *set_name*, or the extractor's own Qto set.

        Pass ``set_name=""`` to search every quantity set.
        """
        scope = self.qto_set if set_name is None else set_name
        return find_quantity(self.graph, self.full_view, name, scope, exact=exact)

    def prop(self, name: str, set_name: str | None = None) -> float | None:
        return find_property(self.graph, self.full_view, name, set_name)

    def text(self, name: str, set_name: str | None = None) -> str | None:
        return find_property_text(self.graph, self.full_view, name, set_name)

    @property
    def base_quantities(self) -> BaseQuantities | None:
        if not self._base_loaded:
            base_q = extract_base_quantities(self.graph, property_sets(self.full_view), self.trace)
            if base_q is None:
                # Some exporters write BaseQuantities as a real quantity set
                qsets = [
                    s
                    for s in quantity_sets(self.full_view)
                    if normalize_name(set_name(s)) == "basequantities"
                ]
                base_q = extract_base_quantities(self.graph, qsets, self.trace)
            self._base_quantities = base_q
            self._base_loaded = True
        return self._base_quantities

    def base(self, name: str) -> float | None:
        """A field of the BaseQuantities record, if there is one."""
        base_q = self.base_quantities
        return None if base_q is None else getattr(base_q, name)

    def adapter(self, kind: str) -> dict[str, Any]:
        return read_adapter(self.graph, self.full_view, kind, self.trace)

    def volume(self) -> float | None:
        """Gross then net volume from the Qto set, then from BaseQuantities."""
        base = self.base_source
        qto = self.qto_set or "quantity set"
        return self.first(
            "volume_cu_ft",
            (f"{qto}.GrossVolume", self.quantity("GrossVolume")),
            (f"{qto}.NetVolume", self.quantity("NetVolume")),
            (f"{base}.GrossVolume", self.base("gross_volume")),
            (f"{base}.NetVolume", self.base("net_volume")),
            (f"{base}.Volume", self.base("volume")),
        )

    # -- provenance ---------------------------------------------------------

    def first(self, field_name: str, *candidates: tuple[str, Any]) -> Any:
        """Return the first non-None candidate value, recording where it came from."""
        for source, value in candidates:
            if value is not None:
                self.note(field_name, source)
                return value
        return None

    def note(self, field_name: str, source: str) -> None:
        if self.trace is not None:
            self.trace.record(field_name, source)
        logger.debug("#%s %s <- %s", self.ref, field_name, source)

    @property
    def base_source(self) -> str:
        base_q = self.base_quantities
        return base_q.source_name if base_q is not None else "BaseQuantities"

    @property
    def free_text(self) -> str:
        """Lower-cased name, type, family and category text."""
        identity = self.identity
        parts = (identity.name, identity.type_name, identity.family_name, identity.category_name)
        return " ".join(p for p in parts if p).lower()


class MetricsExtractor(abc.ABC):
    """Base class for all category extractors."""

    ifc_class: str = "IfcBuildingElement"
    """IFC class reported when the caller does not supply an identity."""

    qto_set: str | None = None
    """Standard quantity set searched first."""

    @property
    @abc.abstractmethod
    def category(self) -> str:
        """Element category this extractor produces."""

    @property
    @abc.abstractmethod
    def metrics_model(self) -> type[ElementIdentity]:
        """The StandardizedMetrics variant returned."""

    @property
    def categories(self) -> tuple[str, ...]:
        """Categories the variant can be tagged with."""
        return (self.category,)

    @abc.abstractmethod
    def collect(self, ctx: ExtractionContext) -> dict[str, Any]:
        """Return category-specific field values; None values are dropped."""

    def element_class(self, graph: GraphAccess, base_view: PropertyView) -> str:
        """IFC class to report for a direct call.  Override to inspect the element."""
        return self.ifc_class

    def extract(
        self,
        graph: GraphAccess,
        ref: int,
        base_view: PropertyView | None = None,
        full_view: PropertyView | None = None,
        identity: ElementIdentity | None = None,
        trace: ExtractionTrace | None = None,
    ) -> Any:
        ifc_class = identity.ifc_class if identity is not None else self.ifc_class
        try:
            if base_view is None:
                base_view = graph.get_properties(ref, False)
            if full_view is None:
                full_view = graph.get_properties(ref, True)
            if identity is None:
                ifc_class = self.element_class(graph, base_view)
                identity = extract_element_identity(
                    graph, ref, ifc_class, base_view, full_view, trace=trace
                )

            ctx = ExtractionContext(
                graph=graph,
                ref=ref,
                identity=identity,
                base_view=base_view,
                full_view=full_view,
                qto_set=self.qto_set,
                trace=trace,
            )
            note_sets(trace, full_view)
            values = {k: v for k, v in self.collect(ctx).items() if v is not None}

            fields = identity.identity_fields()
            fields["ifc_class"] = ifc_class
            fields["express_id"] = ref
            if fields.get("element_category") not in self.categories:
                fields["element_category"] = self.category
            fields.update(values)
            return self.metrics_model(**fields)
        except Exception:
            logger.error(
                "%s extraction failed for #%s (%s)", self.category, ref, ifc_class, exc_info=True
            )
            return self.metrics_model(ifc_class=ifc_class, express_id=ref)
