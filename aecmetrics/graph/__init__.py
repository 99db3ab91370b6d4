"""Graph-access implementations consumed by the extraction engine."""

from aecmetrics.graph.base import GraphAccess, PropertyView, type_code_fallback
from aecmetrics.graph.memory import InMemoryGraph

__all__ = ["GraphAccess", "InMemoryGraph", "PropertyView", "type_code_fallback"]
