"""Connection rules between an output port (source) and an input port (target).

Equal types always connect. Otherwise one of these must hold:

- CollectionItem can connect to any non-Collection
- Non-Collections can connect to CollectionItem
- Anything (non-Collections, Collections, CollectionOrScalar) can connect to
  CollectionOrScalar of the same base type
- Generic Collection can connect to any other Collection or CollectionOrScalar
- Any Collection can connect to a Generic Collection
- Integer widens to Float and String, Float widens to String, when the
  pluralities line up
- Anything can connect to Any

Every function here is pure; the module keeps no state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Mapping, Tuple, TypeVar

from fieldlink.compat.equality import are_types_equal
from fieldlink.core.contracts import FieldType, ReservedFieldName
from fieldlink.core.exceptions import IncompatibleFieldTypesError

ConnectionRule = Callable[[FieldType, FieldType], bool]
K = TypeVar("K")

_WIDENING_PAIRS: frozenset = frozenset(
    {
        (ReservedFieldName.INTEGER, ReservedFieldName.FLOAT),
        (ReservedFieldName.INTEGER, ReservedFieldName.STRING),
        (ReservedFieldName.FLOAT, ReservedFieldName.STRING),
    }
)


def is_excluded(source: FieldType, target: FieldType) -> bool:
    # Generic collection to generic collection stays blocked while
    # Collect -> Iterate graphs misbehave (invoke-ai/InvokeAI#3956).
    return source.name == ReservedFieldName.COLLECTION and target.name == ReservedFieldName.COLLECTION


def is_collection_item_to_non_collection(source: FieldType, target: FieldType) -> bool:
    return source.name == ReservedFieldName.COLLECTION_ITEM and not target.is_collection


def is_non_collection_to_collection_item(source: FieldType, target: FieldType) -> bool:
    return (
        target.name == ReservedFieldName.COLLECTION_ITEM
        and not source.is_collection
        and not source.is_collection_or_scalar
    )


def is_anything_to_collection_or_scalar_of_same_base(source: FieldType, target: FieldType) -> bool:
    return target.is_collection_or_scalar and source.name == target.name


def is_generic_collection_to_collection_like(source: FieldType, target: FieldType) -> bool:
    return source.name == ReservedFieldName.COLLECTION and (
        target.is_collection or target.is_collection_or_scalar
    )


def is_collection_to_generic_collection(source: FieldType, target: FieldType) -> bool:
    return target.name == ReservedFieldName.COLLECTION and source.is_collection


def is_plurality_match(source: FieldType, target: FieldType) -> bool:
    """Plurality pairings under which a base-type widening may apply."""
    source_scalar = not source.is_collection and not source.is_collection_or_scalar
    target_scalar = not target.is_collection and not target.is_collection_or_scalar
    return (
        (source_scalar and target_scalar)
        or (source.is_collection and target.is_collection)
        or (source.is_collection and target.is_collection_or_scalar)
        or (source.is_collection_or_scalar and target.is_collection_or_scalar)
        or (source_scalar and target.is_collection_or_scalar)
    )


def is_subtype_widening(source: FieldType, target: FieldType) -> bool:
    return is_plurality_match(source, target) and (source.name, target.name) in _WIDENING_PAIRS


def is_target_any(source: FieldType, target: FieldType) -> bool:
    return target.name == ReservedFieldName.ANY


CONNECTION_RULES: Tuple[Tuple[str, ConnectionRule], ...] = (
    ("collection_item_to_non_collection", is_collection_item_to_non_collection),
    ("non_collection_to_collection_item", is_non_collection_to_collection_item),
    ("anything_to_collection_or_scalar_of_same_base", is_anything_to_collection_or_scalar_of_same_base),
    ("generic_collection_to_collection_like", is_generic_collection_to_collection_like),
    ("collection_to_generic_collection", is_collection_to_generic_collection),
    ("subtype_widening", is_subtype_widening),
    ("target_accepts_any", is_target_any),
)


def matching_rules(source: FieldType, target: FieldType) -> Tuple[str, ...]:
    """Names of every connection rule that holds, in table order."""
    return tuple(name for name, rule in CONNECTION_RULES if rule(source, target))


@dataclass(frozen=True)
class ConnectionVerdict:
    connectable: bool
    reason: str  # excluded|exact_match|rules_matched|no_rule_matched
    matched_rules: Tuple[str, ...] = ()


def explain_connection(source: FieldType, target: FieldType) -> ConnectionVerdict:
    """Same decision as :func:`is_connectable`, with the path that produced it."""
    if is_excluded(source, target):
        return ConnectionVerdict(connectable=False, reason="excluded")

    if are_types_equal(source, target):
        return ConnectionVerdict(connectable=True, reason="exact_match")

    matched = matching_rules(source, target)
    if matched:
        return ConnectionVerdict(connectable=True, reason="rules_matched", matched_rules=matched)
    return ConnectionVerdict(connectable=False, reason="no_rule_matched")


def is_connectable(source: FieldType, target: FieldType) -> bool:
    """
    Validates that the source and target types are compatible for a connection.

    Args:
        source: The type of the source (output) field.
        target: The type of the target (input) field.

    Returns:
        True if the connection is valid, False otherwise.
    """
    if is_excluded(source, target):
        return False

    if are_types_equal(source, target):
        return True

    # One of these must be true for the connection to be valid
    return len(matching_rules(source, target)) > 0


# Name used by the editor's edge-creation path.
validate_connection_types = is_connectable


def ensure_connectable(source: FieldType, target: FieldType) -> None:
    """Raise :class:`IncompatibleFieldTypesError` unless ``source`` may feed ``target``."""
    verdict = explain_connection(source, target)
    if not verdict.connectable:
        raise IncompatibleFieldTypesError(source, target, details={"reason": verdict.reason})


def filter_connectable(source: FieldType, targets: Mapping[K, FieldType]) -> List[K]:
    """Keys of ``targets`` whose type accepts ``source``, in mapping order."""
    return [key for key, target in targets.items() if is_connectable(source, target)]
