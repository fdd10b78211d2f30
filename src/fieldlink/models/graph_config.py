from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from fieldlink.core.contracts import FieldType
from fieldlink.models.field_type_config import FieldTypeConfig


class NodeTemplateConfig(BaseModel):
    """Port declarations of one node type: field name -> declared type."""

    inputs: Dict[str, FieldTypeConfig] = Field(default_factory=dict)
    outputs: Dict[str, FieldTypeConfig] = Field(default_factory=dict)

    def input_types(self) -> Dict[str, FieldType]:
        return {name: cfg.to_field_type() for name, cfg in self.inputs.items()}

    def output_types(self) -> Dict[str, FieldType]:
        return {name: cfg.to_field_type() for name, cfg in self.outputs.items()}


class NodeConfig(BaseModel):
    id: str = Field(min_length=1)
    type: str = Field(min_length=1)
    label: Optional[str] = None


class EdgeEndpointConfig(BaseModel):
    node_id: str
    field: str

    def __str__(self) -> str:
        return f"{self.node_id}.{self.field}"


class EdgeConfig(BaseModel):
    source: EdgeEndpointConfig
    destination: EdgeEndpointConfig

    def __str__(self) -> str:
        return f"{self.source} -> {self.destination}"


class GraphConfig(BaseModel):
    graph_id: Optional[str] = None

    # Inline templates take precedence over the NodeTemplateRegistry.
    templates: Dict[str, NodeTemplateConfig] = Field(default_factory=dict)

    nodes: List[NodeConfig] = Field(default_factory=list)
    edges: List[EdgeConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_unique_node_ids(self) -> "GraphConfig":
        seen = set()
        duplicates = []
        for node in self.nodes:
            if node.id in seen:
                duplicates.append(node.id)
            seen.add(node.id)
        if duplicates:
            raise ValueError(f"duplicate node ids: {sorted(set(duplicates))}")
        return self

    def node_by_id(self) -> Dict[str, NodeConfig]:
        return {node.id: node for node in self.nodes}
