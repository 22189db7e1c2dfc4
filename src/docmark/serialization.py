"""Document serialization: JSON round-trip for docmark nodes.

Nodes become plain dicts tagged with their class name, and back. Handy for:
- Caching parsed doc comments alongside generated pages
- Handing documents to tooling written in other languages
- Debugging and inspection

Keys are written sorted, so equal documents always give identical JSON.

Example:
    from docmark import parse
    from docmark.serialization import to_json, from_json

    doc = parse("= Usage\\n\\nSome *bold* text")
    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure: safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from docmark.nodes import (
    Attribute,
    BlockData,
    Code,
    ComplexCell,
    ComplexItem,
    Document,
    Grouped,
    Link,
    List,
    Nested,
    Node,
    Paragraph,
    Raw,
    SectionHeader,
    SimpleCell,
    SimpleItem,
    Table,
    TableRow,
    TextAttr,
    TextBlock,
)

# Class name written under "_type" -> node class
_NODE_TYPES: dict[str, type] = {
    "Document": Document,
    "SectionHeader": SectionHeader,
    "BlockData": BlockData,
    "Attribute": Attribute,
    "Grouped": Grouped,
    "Code": Code,
    "List": List,
    "SimpleItem": SimpleItem,
    "ComplexItem": ComplexItem,
    "Table": Table,
    "TableRow": TableRow,
    "SimpleCell": SimpleCell,
    "ComplexCell": ComplexCell,
    "Paragraph": Paragraph,
    "TextBlock": TextBlock,
    "Raw": Raw,
    "Nested": Nested,
    "Link": Link,
}

_NODE_CLASSES: tuple[type, ...] = tuple(_NODE_TYPES.values())


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    The class name is stored under ``_type`` so from_dict can rebuild it.
    Recursively serializes child nodes; ``TextAttr`` becomes its string value.

    Args:
        node: Any docmark node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        value = getattr(node, f.name)
        result[f.name] = _serialize_value(value)

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, _NODE_CLASSES):
        return to_dict(value)
    if isinstance(value, TextAttr):
        return value.value
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    The ``_type`` entry picks the class; keys that are not fields of it are ignored.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown, or a text attribute
            value is not a known ``TextAttr``.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        raw = data[f.name]
        if node_cls is TextBlock and f.name == "attribute":
            kwargs[f.name] = None if raw is None else TextAttr(raw)
        else:
            kwargs[f.name] = _deserialize_value(raw)

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        if value.get("_type") is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Keys are sorted; pass ``indent`` for human-readable output.
    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    raw = json.loads(data)
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
