"""fieldlink.

Field type compatibility for node-graph editors.

Decides whether an edge from an output port to an input port is legal given
the two ports' declared field types, and checks whole graphs edge by edge.

Public API for editor backends and tooling.
"""

from fieldlink.compat.connection import (
    ConnectionVerdict,
    ensure_connectable,
    explain_connection,
    filter_connectable,
    is_connectable,
    validate_connection_types,
)
from fieldlink.compat.equality import are_types_equal
from fieldlink.core.contracts import Cardinality, FieldType, ReservedFieldName
from fieldlink.graph_checker import GraphChecker, GraphCheckReport, check_graph
from fieldlink.cli import main, validate_config

__version__ = "0.1.0"

__all__ = [
    "Cardinality",
    "ConnectionVerdict",
    "FieldType",
    "GraphCheckReport",
    "GraphChecker",
    "ReservedFieldName",
    "are_types_equal",
    "check_graph",
    "ensure_connectable",
    "explain_connection",
    "filter_connectable",
    "is_connectable",
    "main",
    "validate_config",
    "validate_connection_types",
]
