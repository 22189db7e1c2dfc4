"""Line classifiers for the block parser.

Pure functions over a single logical line: no position changes, no
lookahead. The parser peeks a line, classifies it, then decides whether
to consume it.

"""

from __future__ import annotations

from docmark.nodes import Attribute

# [A-Za-z_], ASCII only: shared by ":name:" definitions and "{name}" references
VARIABLE_NAME_CHARS: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
)

GROUP_START = "{"
GROUP_END = "}"
CODE_DELIMITER = "----"
TABLE_DELIMITER = "|==="
COMPLEX_ITEM_MARKER = "**"
SIMPLE_ITEM_MARKER = "* "
CONTINUATION_INDENT = "  "
CELL_SEPARATOR = "|"


def classify_section_header(line: str) -> int:
    """Return the header depth, or 0 if the line is not a section header.

    A header is one or more ``=`` immediately followed by a space:

        >>> classify_section_header("== Usage")
        2
        >>> classify_section_header("==Usage")
        0
    """
    depth = 0
    line_len = len(line)
    while depth < line_len and line[depth] == "=":
        depth += 1
    if depth == 0 or depth >= line_len or line[depth] != " ":
        return 0
    return depth


def classify_variable_definition(line: str) -> tuple[str, str] | None:
    """Split ``:name: value`` into ``(name, value)``.

    The name is one or more of ``[A-Za-z_]``; exactly one space separates
    the closing colon from the value (any further spaces belong to it).
    """
    if len(line) < 3 or line[0] != ":":
        return None
    end = 1
    line_len = len(line)
    while end < line_len and line[end] in VARIABLE_NAME_CHARS:
        end += 1
    if end == 1 or end + 1 >= line_len:
        return None
    if line[end] != ":" or line[end + 1] != " ":
        return None
    return line[1:end], line[end + 2 :]


def classify_attribute(line: str) -> Attribute | None:
    """Parse a ``[name]`` or ``[name,args]`` line.

    Only the first comma splits; the remainder is kept verbatim as args.
    """
    if len(line) < 2 or line[0] != "[" or line[-1] != "]":
        return None
    body = line[1:-1]
    name, comma, args = body.partition(",")
    if not comma:
        return Attribute(name=body)
    return Attribute(name=name, args=args)


def is_simple_item(line: str) -> bool:
    return line.startswith(SIMPLE_ITEM_MARKER)


def is_continuation(line: str) -> bool:
    return line.startswith(CONTINUATION_INDENT)


def is_simple_row(line: str) -> bool:
    """A ``|``-prefixed table line that is not the table delimiter."""
    return line.startswith(CELL_SEPARATOR) and line != TABLE_DELIMITER


def split_cells(line: str) -> list[str]:
    """Split a simple table row at unescaped ``|``.

    The leading ``|`` opens the first cell. ``\\|`` and ``\\\\`` are
    passed through untouched for the inline parser to resolve.

        >>> split_cells("|a|b\\\\|c")
        ['a', 'b\\\\|c']
    """
    cells: list[str] = []
    start = 1
    i = 1
    line_len = len(line)
    while i < line_len:
        char = line[i]
        if char == "\\" and i + 1 < line_len and line[i + 1] in "\\|":
            i += 2
            continue
        if char == CELL_SEPARATOR:
            cells.append(line[start:i])
            start = i + 1
        i += 1
    cells.append(line[start:])
    return cells


__all__ = [
    "CELL_SEPARATOR",
    "CODE_DELIMITER",
    "COMPLEX_ITEM_MARKER",
    "CONTINUATION_INDENT",
    "GROUP_END",
    "GROUP_START",
    "SIMPLE_ITEM_MARKER",
    "TABLE_DELIMITER",
    "VARIABLE_NAME_CHARS",
    "classify_attribute",
    "classify_section_header",
    "classify_variable_definition",
    "is_continuation",
    "is_simple_item",
    "is_simple_row",
    "split_cells",
]
