"""Field type descriptors shared by the checker, the declarations and the graph checker.

These are runtime-only value types; they carry no Pydantic config models so the
compatibility checker can be imported without pulling in the declaration layer.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class ReservedFieldName(str, Enum):
    """Base type names with special meaning to the connection rules."""

    COLLECTION = "CollectionField"           # generic collection of unspecified base type
    COLLECTION_ITEM = "CollectionItemField"  # element placeholder accepted by collections
    INTEGER = "IntegerField"
    FLOAT = "FloatField"
    STRING = "StringField"
    ANY = "AnyField"

    def __str__(self) -> str:
        return self.value


class Cardinality(str, Enum):
    SINGLE = "single"
    COLLECTION = "collection"
    SINGLE_OR_COLLECTION = "single_or_collection"


FieldName = Union[ReservedFieldName, str]

_RESERVED_BY_VALUE = {member.value: member for member in ReservedFieldName}


def normalize_field_name(name: FieldName) -> FieldName:
    """Map a plain string that spells a reserved name onto its enum member."""
    if isinstance(name, ReservedFieldName):
        return name
    return _RESERVED_BY_VALUE.get(name, name)


@dataclass(frozen=True)
class FieldType:
    """Declared type of a node port.

    A type is scalar when neither flag is set. Both flags set at once is
    malformed; upholding that is the job of whoever builds the descriptor
    (see ``fieldlink.models.field_type_config``), not of the checker.
    """

    name: FieldName
    is_collection: bool = False
    is_collection_or_scalar: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", normalize_field_name(self.name))

    @classmethod
    def single(cls, name: FieldName) -> "FieldType":
        return cls(name)

    @classmethod
    def collection(cls, name: FieldName) -> "FieldType":
        return cls(name, is_collection=True)

    @classmethod
    def collection_or_scalar(cls, name: FieldName) -> "FieldType":
        return cls(name, is_collection_or_scalar=True)

    @property
    def is_scalar(self) -> bool:
        return not self.is_collection and not self.is_collection_or_scalar

    @property
    def cardinality(self) -> Cardinality:
        if self.is_collection:
            return Cardinality.COLLECTION
        if self.is_collection_or_scalar:
            return Cardinality.SINGLE_OR_COLLECTION
        return Cardinality.SINGLE

    @property
    def is_reserved(self) -> bool:
        return isinstance(self.name, ReservedFieldName)

    def __str__(self) -> str:
        base = str(self.name)
        if self.is_collection:
            return f"{base}[]"
        if self.is_collection_or_scalar:
            return f"{base}|{base}[]"
        return base
