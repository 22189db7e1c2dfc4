"""Immutable transform: strip [hidden] blocks before rendering."""

from docmark import parse, render, transform
from docmark.nodes import BlockData


def drop_hidden(node) -> object:
    if isinstance(node, BlockData) and node.has_attribute("hidden"):
        return None
    return node


source = """Public summary.

[hidden]
Implementation notes nobody should see.

{
[hidden]
Nested notes.

Visible nested text.
}
"""

doc = parse(source)
print(render(transform(doc, drop_hidden)))
