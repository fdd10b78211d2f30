"""Built-in node templates.

Importing this module registers the templates; use
``fieldlink.bootstrap.load_builtin_nodes`` rather than importing it directly.
"""
from __future__ import annotations

from fieldlink.core.contracts import FieldType, ReservedFieldName
from fieldlink.nodes.registry import register_node

INTEGER = FieldType.single(ReservedFieldName.INTEGER)
FLOAT = FieldType.single(ReservedFieldName.FLOAT)
STRING = FieldType.single(ReservedFieldName.STRING)


# -----------------
# Primitives
# -----------------


@register_node(node_type="integer")
class IntegerNode:
    title = "Integer Primitive"
    inputs = {"value": INTEGER}
    outputs = {"value": INTEGER}


@register_node(node_type="float")
class FloatNode:
    title = "Float Primitive"
    inputs = {"value": FLOAT}
    outputs = {"value": FLOAT}


@register_node(node_type="string")
class StringNode:
    title = "String Primitive"
    inputs = {"value": STRING}
    outputs = {"value": STRING}


@register_node(node_type="integer_collection")
class IntegerCollectionNode:
    title = "Integer Collection Primitive"
    inputs = {"collection": FieldType.collection(ReservedFieldName.INTEGER)}
    outputs = {"collection": FieldType.collection(ReservedFieldName.INTEGER)}


@register_node(node_type="float_collection")
class FloatCollectionNode:
    title = "Float Collection Primitive"
    inputs = {"collection": FieldType.collection(ReservedFieldName.FLOAT)}
    outputs = {"collection": FieldType.collection(ReservedFieldName.FLOAT)}


@register_node(node_type="string_collection")
class StringCollectionNode:
    title = "String Collection Primitive"
    inputs = {"collection": FieldType.collection(ReservedFieldName.STRING)}
    outputs = {"collection": FieldType.collection(ReservedFieldName.STRING)}


# -----------------
# Math and text
# -----------------


@register_node(node_type="add")
class AddNode:
    title = "Add Integers"
    inputs = {"a": INTEGER, "b": INTEGER}
    outputs = {"value": INTEGER}


@register_node(node_type="float_math")
class FloatMathNode:
    inputs = {"a": FLOAT, "b": FLOAT, "operation": STRING}
    outputs = {"value": FLOAT}


@register_node(node_type="string_join")
class StringJoinNode:
    # Accepts a single string or a list of strings on the left side.
    inputs = {
        "string_left": FieldType.collection_or_scalar(ReservedFieldName.STRING),
        "string_right": STRING,
    }
    outputs = {"value": STRING}


@register_node(node_type="range")
class RangeNode:
    title = "Integer Range"
    inputs = {"start": INTEGER, "stop": INTEGER, "step": INTEGER}
    outputs = {"collection": FieldType.collection(ReservedFieldName.INTEGER)}


# -----------------
# Collections
# -----------------


@register_node(node_type="collect")
class CollectNode:
    title = "Collect"
    inputs = {"item": FieldType.single(ReservedFieldName.COLLECTION_ITEM)}
    outputs = {"collection": FieldType.collection(ReservedFieldName.COLLECTION)}


@register_node(node_type="iterate")
class IterateNode:
    title = "Iterate"
    inputs = {"collection": FieldType.collection(ReservedFieldName.COLLECTION)}
    outputs = {
        "item": FieldType.single(ReservedFieldName.COLLECTION_ITEM),
        "index": INTEGER,
        "total": INTEGER,
    }


@register_node(node_type="show_value")
class ShowValueNode:
    title = "Show Value"
    inputs = {"value": FieldType.single(ReservedFieldName.ANY)}
    outputs = {}
