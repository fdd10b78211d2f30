from __future__ import annotations

from fieldlink.core.contracts import FieldType


def are_types_equal(first: FieldType, second: FieldType) -> bool:
    """True when both descriptors denote the same base name and plurality."""
    return (
        first.name == second.name
        and first.is_collection == second.is_collection
        and first.is_collection_or_scalar == second.is_collection_or_scalar
    )
