"""
Custom exception classes for the fieldlink package.

The connection checker itself never raises; these cover the layers around it:
type declarations, the node-template registry and graph files.
"""

from typing import Any, Optional


class FieldlinkException(Exception):
    """Base exception class for all fieldlink exceptions."""

    pass


class FieldTypeError(FieldlinkException):
    """Raised when a declared field type violates the type invariants."""

    pass


class IncompatibleFieldTypesError(FieldTypeError):
    """
    Raised when an edge is committed between ports whose types do not connect.

    Carries both descriptors so callers can render a precise message.

    Example:
        >>> raise IncompatibleFieldTypesError(
        ...     source_type=FieldType("FloatField"),
        ...     target_type=FieldType("IntegerField"),
        ... )
    """

    def __init__(self, source_type: Any, target_type: Any, details: Optional[dict] = None):
        self.source_type = source_type
        self.target_type = target_type
        self.details = details or {}
        message = f"Cannot connect {source_type} to {target_type}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)


class NodeTemplateRegistryError(RuntimeError):
    """Raised on duplicate or missing node template registrations."""

    pass


class GraphConfigError(FieldlinkException):
    """Raised when a graph file cannot be located, read or parsed."""

    pass
