"""Document visitor and transformer for docmark.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen documents.

Example (collect all link targets):

    class LinkCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.targets: list[str] = []

        def visit_link(self, node: Link) -> None:
            self.targets.append(node.target)

    collector = LinkCollector()
    collector.visit(doc)

Example (drop hidden blocks):

    def drop_hidden(node: Node) -> Node | None:
        if isinstance(node, BlockData) and node.has_attribute("hidden"):
            return None
        return node

    new_doc = transform(doc, drop_hidden)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    is pure: safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable

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
    TextBlock,
)


class BaseVisitor[T]:
    """Base visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call, in source order.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Default returns None (suitable for ``BaseVisitor[None]``).
        """
        return None  # type: ignore[return-value]

    # -- Document structure ----------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_section_header(self, node: SectionHeader) -> T:
        return self.visit_default(node)

    def visit_block_data(self, node: BlockData) -> T:
        return self.visit_default(node)

    def visit_attribute(self, node: Attribute) -> T:
        return self.visit_default(node)

    # -- Block visitors --------------------------------------------------------

    def visit_grouped(self, node: Grouped) -> T:
        return self.visit_default(node)

    def visit_code(self, node: Code) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_simple_item(self, node: SimpleItem) -> T:
        return self.visit_default(node)

    def visit_complex_item(self, node: ComplexItem) -> T:
        return self.visit_default(node)

    def visit_table(self, node: Table) -> T:
        return self.visit_default(node)

    def visit_table_row(self, node: TableRow) -> T:
        return self.visit_default(node)

    def visit_simple_cell(self, node: SimpleCell) -> T:
        return self.visit_default(node)

    def visit_complex_cell(self, node: ComplexCell) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_text_block(self, node: TextBlock) -> T:
        return self.visit_default(node)

    def visit_raw(self, node: Raw) -> T:
        return self.visit_default(node)

    def visit_nested(self, node: Nested) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case SectionHeader():
                return self.visit_section_header(node)
            case BlockData():
                return self.visit_block_data(node)
            case Attribute():
                return self.visit_attribute(node)
            case Grouped():
                return self.visit_grouped(node)
            case Code():
                return self.visit_code(node)
            case List():
                return self.visit_list(node)
            case SimpleItem():
                return self.visit_simple_item(node)
            case ComplexItem():
                return self.visit_complex_item(node)
            case Table():
                return self.visit_table(node)
            case TableRow():
                return self.visit_table_row(node)
            case SimpleCell():
                return self.visit_simple_cell(node)
            case ComplexCell():
                return self.visit_complex_cell(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case TextBlock():
                return self.visit_text_block(node)
            case Raw():
                return self.visit_raw(node)
            case Nested():
                return self.visit_nested(node)
            case Link():
                return self.visit_link(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        """Recursively visit child nodes."""
        for child in _children(node):
            self.visit(child)


def _children(node: Node) -> tuple[Node, ...]:
    """Direct child nodes in source order."""
    match node:
        case Document(parts=parts):
            return parts
        case SectionHeader(text=text):
            return (text,)
        case BlockData(inner=inner, attributes=attributes):
            return (*attributes, inner)
        case Grouped(blocks=blocks):
            return blocks
        case List(items=items):
            return items
        case Table(rows=rows):
            return rows
        case TableRow(cols=cols):
            return cols
        case SimpleItem(text=text) | SimpleCell(text=text) | Paragraph(text=text):
            return (text,)
        case ComplexItem(block=block) | ComplexCell(block=block):
            return (block,)
        case TextBlock(inner=inner):
            return (inner,)
        case Nested(children=children):
            return children
        case Link(text=TextBlock() as text):
            return (text,)
        case _:
            return ()  # Leaf nodes: no children


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the tree, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children. This ensures ``fn``
    always receives nodes with already-transformed children.

    Return ``None`` from ``fn`` to remove a node from a sequence (document
    parts, grouped blocks, list items, rows, cells, nested spans, attributes).
    A node in a single-child slot cannot be removed; returning None there
    raises TypeError, and so does returning None for the root Document.

    Since all nodes are frozen dataclasses, this produces a new immutable tree.
    The original tree is untouched.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    transformed = _transform_children(node, fn)
    return fn(transformed)


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    """Produce a new node with children transformed; removed nodes are filtered out."""

    def _filtered(children: tuple) -> tuple:
        return tuple(
            result for c in children
            if (result := _transform_node(c, fn)) is not None
        )

    def _required(child: Node) -> Node:
        result = _transform_node(child, fn)
        if result is None:
            msg = (
                f"transform fn cannot remove the {type(child).__name__} "
                f"held by a {type(node).__name__}"
            )
            raise TypeError(msg)
        return result

    match node:
        case Document(parts=parts):
            changes = {"parts": _filtered(parts)}
        case SectionHeader(text=text):
            changes = {"text": _required(text)}
        case BlockData(inner=inner, attributes=attributes):
            changes = {"attributes": _filtered(attributes), "inner": _required(inner)}
        case Grouped(blocks=blocks):
            changes = {"blocks": _filtered(blocks)}
        case List(items=items):
            changes = {"items": _filtered(items)}
        case Table(rows=rows):
            changes = {"rows": _filtered(rows)}
        case TableRow(cols=cols):
            changes = {"cols": _filtered(cols)}
        case SimpleItem(text=text) | SimpleCell(text=text) | Paragraph(text=text):
            changes = {"text": _required(text)}
        case ComplexItem(block=block) | ComplexCell(block=block):
            changes = {"block": _required(block)}
        case TextBlock(inner=inner):
            changes = {"inner": _required(inner)}
        case Nested(children=children):
            changes = {"children": _filtered(children)}
        case Link(text=TextBlock() as text):
            changes = {"text": _required(text)}
        case _:
            return node  # Leaf nodes: return as-is

    if all(getattr(node, name) == value for name, value in changes.items()):
        return node
    return dataclasses.replace(node, **changes)


__all__ = ["BaseVisitor", "transform"]
