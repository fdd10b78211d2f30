from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fieldlink.core.contracts import FieldType


class FieldTypeConfig(BaseModel):
    """Port type as declared in a node template or graph file.

    Accepts a bare type name (a scalar) or an object using either the editor's
    camelCase flags or snake_case ones:

        "IntegerField"
        {"name": "IntegerField", "isCollection": true}
        {"name": "IntegerField", "is_collection_or_scalar": true}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    is_collection: bool = Field(default=False, alias="isCollection")
    is_collection_or_scalar: bool = Field(default=False, alias="isCollectionOrScalar")

    @model_validator(mode="before")
    @classmethod
    def _coerce_bare_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data

    @model_validator(mode="after")
    def _validate_plurality(self) -> "FieldTypeConfig":
        if self.is_collection and self.is_collection_or_scalar:
            raise ValueError(
                f"field type {self.name!r} cannot be both isCollection and isCollectionOrScalar"
            )
        return self

    def to_field_type(self) -> FieldType:
        return FieldType(
            name=self.name,
            is_collection=self.is_collection,
            is_collection_or_scalar=self.is_collection_or_scalar,
        )

    @classmethod
    def from_field_type(cls, field_type: FieldType) -> "FieldTypeConfig":
        return cls(
            name=str(field_type.name),
            is_collection=field_type.is_collection,
            is_collection_or_scalar=field_type.is_collection_or_scalar,
        )
