"""Typed document tree for docmark.

All nodes are frozen dataclasses with slots for:
- Immutability: a parsed Document is a value, safe to share and cache
- Structural equality: re-parsing identical input yields an equal tree
- Pattern matching: every union below is a plain ``type`` alias, so
  ``match`` statements dispatch on the variant class directly

Node Layout:
Document
└── Part
    ├── SectionHeader (depth, TextBlock)
    └── BlockData (attributes, Block)
        ├── Grouped   (BlockData, ...)
        ├── Code      (verbatim text)
        ├── List      (SimpleItem | ComplexItem, ...)
        ├── Table     (TableRow(SimpleCell | ComplexCell, ...), ...)
        └── Paragraph (TextBlock)

TextBlock (attribute: Raw | Bold | None)
└── Text
    ├── Raw    (plain run)
    ├── Nested (TextBlock, ...)
    └── Link   (target, TextBlock | None)

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# =============================================================================
# Inline Nodes
# =============================================================================


class TextAttr(Enum):
    """Formatting applied to a whole TextBlock."""

    RAW = "raw"  # `monospace`
    BOLD = "bold"  # *bold*


@dataclass(frozen=True, slots=True)
class Raw:
    """A run of plain text.

    Escapes have already been resolved; the content is literal.

    """

    content: str


@dataclass(frozen=True, slots=True)
class Nested:
    """An ordered sequence of spans."""

    children: tuple[TextBlock, ...]


@dataclass(frozen=True, slots=True)
class Link:
    """Hyperlink.

    Markup: link:target or link:target[text]

    The target is kept verbatim. Resolving schemes such as ``man:`` is
    the renderer's job.

    """

    target: str
    text: TextBlock | None = None


type Text = Raw | Nested | Link


@dataclass(frozen=True, slots=True)
class TextBlock:
    """Result of inline parsing: optional formatting around a Text."""

    inner: Text
    attribute: TextAttr | None = None

    def plain(self) -> str:
        """Flatten to plain text, dropping formatting.

        Links without explicit text contribute their target.
        """
        match self.inner:
            case Raw(content=content):
                return content
            case Nested(children=children):
                return "".join(child.plain() for child in children)
            case Link(target=target, text=None):
                return target
            case Link(text=text):
                return text.plain()  # type: ignore[union-attr]
        return ""


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Attribute:
    """A ``[name]`` or ``[name,args]`` line preceding a block.

    Purely syntactic. Names like ``hidden`` or ``argument`` only mean
    something to a renderer.

    """

    name: str
    args: str | None = None


@dataclass(frozen=True, slots=True)
class Grouped:
    """Blocks wrapped in ``{`` / ``}`` lines."""

    blocks: tuple[BlockData, ...]


@dataclass(frozen=True, slots=True)
class Code:
    """Verbatim lines between ``----`` delimiters, newline-joined."""

    code: str


@dataclass(frozen=True, slots=True)
class SimpleItem:
    """``* text`` list item, with two-space continuation lines."""

    text: TextBlock


@dataclass(frozen=True, slots=True)
class ComplexItem:
    """``**`` list item followed by one nested block."""

    block: BlockData


type ListEl = SimpleItem | ComplexItem


@dataclass(frozen=True, slots=True)
class List:
    items: tuple[ListEl, ...]


@dataclass(frozen=True, slots=True)
class SimpleCell:
    text: TextBlock


@dataclass(frozen=True, slots=True)
class ComplexCell:
    block: BlockData


type TableCol = SimpleCell | ComplexCell


@dataclass(frozen=True, slots=True)
class TableRow:
    cols: tuple[TableCol, ...]


@dataclass(frozen=True, slots=True)
class Table:
    """Rows between ``|===`` delimiters."""

    rows: tuple[TableRow, ...]


@dataclass(frozen=True, slots=True)
class Paragraph:
    """Consecutive non-blank lines, joined with single spaces."""

    text: TextBlock


type Block = Grouped | Code | List | Table | Paragraph


@dataclass(frozen=True, slots=True)
class BlockData:
    """A block together with the attribute lines directly above it."""

    inner: Block
    attributes: tuple[Attribute, ...] = ()

    def has_attribute(self, name: str) -> bool:
        """Whether an attribute with this name (whitespace-trimmed) is attached."""
        return any(attr.name.strip() == name for attr in self.attributes)

    def attribute_args(self, name: str) -> str | None:
        """Trimmed args of the first attribute named ``name``, if any."""
        for attr in self.attributes:
            if attr.name.strip() == name and attr.args is not None:
                return attr.args.strip()
        return None


@dataclass(frozen=True, slots=True)
class SectionHeader:
    """``= Title`` line; depth is the number of ``=`` characters."""

    depth: int
    text: TextBlock


type Part = SectionHeader | BlockData


@dataclass(frozen=True, slots=True)
class Document:
    """Parse result for one doc comment. Parts keep source order."""

    parts: tuple[Part, ...] = ()


type Node = (
    Document
    | SectionHeader
    | BlockData
    | Attribute
    | Grouped
    | Code
    | List
    | SimpleItem
    | ComplexItem
    | Table
    | TableRow
    | SimpleCell
    | ComplexCell
    | Paragraph
    | TextBlock
    | Raw
    | Nested
    | Link
)


__all__ = [
    "Attribute",
    "Block",
    "BlockData",
    "Code",
    "ComplexCell",
    "ComplexItem",
    "Document",
    "Grouped",
    "Link",
    "List",
    "ListEl",
    "Nested",
    "Node",
    "Paragraph",
    "Part",
    "Raw",
    "SectionHeader",
    "SimpleCell",
    "SimpleItem",
    "Table",
    "TableCol",
    "TableRow",
    "Text",
    "TextAttr",
    "TextBlock",
]
