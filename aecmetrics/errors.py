"""Exceptions raised inside the engine.

None of these escape a public entry point: they mark the seams where a
collaborator failure is caught, logged, and turned into a less complete
record.
"""

from __future__ import annotations


class MetricsError(Exception):
    """Base class for extraction errors."""


class GraphAccessError(MetricsError):
    """The graph-access collaborator failed to return a property view."""

    def __init__(self, ref: int, message: str = "") -> None:
        self.ref = ref
        super().__init__(message or f"Could not fetch properties for #{ref}")


class ReferenceResolutionError(GraphAccessError):
    """A second-hop lookup of a referenced property or quantity failed."""


class TypeCodeLookupError(MetricsError):
    """A numeric type code could not be mapped to an IFC class name."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"Unknown IFC type code {code}")
