from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Mapping, Optional, Type

from fieldlink.core.contracts import FieldType
from fieldlink.core.exceptions import NodeTemplateRegistryError


@dataclass(frozen=True)
class NodeTemplate:
    node_type: str
    inputs: Mapping[str, FieldType] = field(default_factory=dict)
    outputs: Mapping[str, FieldType] = field(default_factory=dict)
    title: Optional[str] = None


class NodeTemplateRegistry:
    _registry: ClassVar[Dict[str, NodeTemplate]] = {}

    @classmethod
    def register(
        cls,
        *,
        node_type: str,
        template: NodeTemplate,
        overwrite: bool = False,
    ) -> None:
        if not overwrite and node_type in cls._registry:
            existing = cls._registry[node_type]
            raise NodeTemplateRegistryError(
                f"Node template already registered for node_type={node_type!r}: {existing}"
            )
        cls._registry[node_type] = template

    @classmethod
    def get(cls, node_type: str) -> NodeTemplate:
        try:
            return cls._registry[node_type]
        except KeyError as exc:
            raise NodeTemplateRegistryError(f"No node template registered for node_type={node_type!r}") from exc

    @classmethod
    def try_get(cls, node_type: str) -> Optional[NodeTemplate]:
        return cls._registry.get(node_type)

    @classmethod
    def node_types(cls) -> List[str]:
        return sorted(cls._registry)

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_node(
    *,
    node_type: str,
    overwrite: bool = False,
) -> Callable[[Type[Any]], Type[Any]]:
    """Register a class declaring ``inputs``/``outputs`` mappings of :class:`FieldType`.

    Example:
        >>> @register_node(node_type="add")
        ... class AddNode:
        ...     inputs = {"a": FieldType("IntegerField"), "b": FieldType("IntegerField")}
        ...     outputs = {"value": FieldType("IntegerField")}
    """

    def decorator(node_class: Type[Any]) -> Type[Any]:
        template = NodeTemplate(
            node_type=node_type,
            inputs=dict(getattr(node_class, "inputs", {})),
            outputs=dict(getattr(node_class, "outputs", {})),
            title=getattr(node_class, "title", None) or node_class.__name__,
        )
        NodeTemplateRegistry.register(node_type=node_type, template=template, overwrite=overwrite)
        return node_class

    return decorator
