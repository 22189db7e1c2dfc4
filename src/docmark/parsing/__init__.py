"""Parsing subsystem for docmark.

Two grammars, one per level:
- `BlockParsingMixin`: logical lines into grouped/code/table/list/paragraph
  blocks, tracked by a `ContainerStack` so enclosed text stops at an
  enclosing ``}`` or ``|===``
- `InlineParser`: one text run into bold/raw/link spans

Every text run goes through `substitute` (``{name}`` expansion) before the
inline parser sees it; `parse_text` does both.

Architecture:
The document loop lives in `docmark.parser.Parser`, which mixes in
`BlockParsingMixin` and owns the line source, the variable bindings and
the container stack.

"""

from docmark.parsing.blocks import BlockParsingMixin
from docmark.parsing.containers import ContainerStack, ContainerType
from docmark.parsing.inline import InlineParser, parse_inline, parse_text
from docmark.parsing.substitution import Bindings, lookup, substitute

__all__ = [
    "BlockParsingMixin",
    "ContainerStack",
    "ContainerType",
    "InlineParser",
    "parse_inline",
    "parse_text",
    "Bindings",
    "lookup",
    "substitute",
]
