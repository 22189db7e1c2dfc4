"""Recursive descent parser producing a docmark Document.

Pulls logical lines from a LineSource and builds immutable nodes.

Architecture:
- `LineSource` (lexer): continuation joining and one-line lookahead
- `BlockParsingMixin`: grouped/code/table/list/paragraph blocks
- `Parser` (this module): the document loop, section headers and
  variable definitions

Document grammar:

    SectionHeader <- '='+ ' ' .* $
    VarDef        <- ':' [a-zA-Z_]+ ': ' .* $
    Document      <- ($* (SectionHeader / VarDef / Block))*

Thread Safety:
Parser instances are single-use and not thread-safe. Create one per
parse operation. Configuration is read from ContextVar (thread-local).
The resulting Document is immutable.

"""

from __future__ import annotations

from docmark.config import ParseConfig, get_parse_config
from docmark.lexer import LineSource
from docmark.lexer.classifiers import (
    classify_section_header,
    classify_variable_definition,
)
from docmark.nodes import Document, Part, SectionHeader
from docmark.parsing.blocks import BlockParsingMixin
from docmark.parsing.containers import ContainerStack
from docmark.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(BlockParsingMixin):
    """Parser for one doc comment.

    Usage:
        >>> Parser("== Title\\n").parse()
        Document(parts=(SectionHeader(depth=2, text=TextBlock(inner=Raw(content='Title'), attribute=None)),))

    Variable bindings live on the instance for the duration of one parse
    and are handed explicitly to every substitution call.

    """

    __slots__ = ("_lines", "_bindings", "_containers")

    def __init__(self, source: str) -> None:
        """Initialize parser with source text.

        Configuration is read from ContextVar, not passed as parameters.
        Use parse_config_context() before creating a Parser if you need
        non-default configuration.
        """
        self._lines = LineSource(source, text_transformer=self._config.text_transformer)
        self._bindings: list[tuple[str, str]] = []
        self._containers = ContainerStack()

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    @property
    def bindings(self) -> tuple[tuple[str, str], ...]:
        """Variable definitions seen so far, in definition order."""
        return tuple(self._bindings)

    def parse(self) -> Document:
        """Parse the whole source into a Document."""
        parts: list[Part] = []
        lines = self._lines
        while True:
            self._skip_blank_lines()
            if lines.exhausted:
                break
            if self._try_section_header(parts) or self._try_variable_definition():
                continue
            parts.append(self._parse_block())

        logger.debug(
            "Parsed doc comment: %d lines, %d parts, %d variables",
            lines.lineno,
            len(parts),
            len(self._bindings),
        )
        return Document(parts=tuple(parts))

    def _try_section_header(self, parts: list[Part]) -> bool:
        depth = classify_section_header(self._lines.peek())
        if not depth:
            return False
        line = self._lines.next()
        parts.append(SectionHeader(depth=depth, text=self._text(line[depth + 1 :])))
        return True

    def _try_variable_definition(self) -> bool:
        definition = classify_variable_definition(self._lines.peek())
        if definition is None:
            return False
        self._lines.next()
        self._bindings.append(definition)
        return True
