"""Block parsing for docmark.

Grammar (``$`` is a line end, ``.`` any character but a newline):

    SimpleListEl  <- '* ' .* $ ('  ' .* $)*
    BlockListEl   <- '**' $ Block
    ListBlock     <- (SimpleListEl / BlockListEl)+

    TableDelim    <- '|===' $
    SimpleRow     <- ('|' ColumnText)+ $
    Row           <- SimpleRow (SimpleRow / !$ Block)* / Block
    TableBlock    <- TableDelim ($* !TableDelim Row)* $* TableDelim?

    CodeDelim     <- '----' $
    CodeBlock     <- CodeDelim (!CodeDelim .* $)* CodeDelim?

    GroupedBlock  <- '{' $ ($* !'}' Block)* $* ('}' $)?

    TextBlock     <- (.+ $)* $?

    Attribute     <- '[' .* ']' $
    Block         <- Attribute* (GroupedBlock / CodeBlock / TableBlock /
                                 ListBlock / TextBlock)

Every alternative except TextBlock may decline; TextBlock always matches,
so ``_parse_block`` always returns a block.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docmark.lexer.classifiers import (
    CODE_DELIMITER,
    COMPLEX_ITEM_MARKER,
    GROUP_END,
    GROUP_START,
    TABLE_DELIMITER,
    classify_attribute,
    is_continuation,
    is_simple_item,
    is_simple_row,
    split_cells,
)
from docmark.nodes import (
    Attribute,
    Block,
    BlockData,
    Code,
    ComplexCell,
    ComplexItem,
    Grouped,
    List,
    ListEl,
    Paragraph,
    SimpleCell,
    SimpleItem,
    Table,
    TableCol,
    TableRow,
    TextBlock,
)
from docmark.parsing.containers import ContainerType
from docmark.parsing.inline import parse_text

if TYPE_CHECKING:
    from docmark.lexer import LineSource
    from docmark.parsing.containers import ContainerStack


class BlockParsingMixin:
    """Block-level parsing methods.

    Required Host Attributes:
        - _lines: LineSource
        - _bindings: list[tuple[str, str]]
        - _containers: ContainerStack

    """

    _lines: LineSource
    _bindings: list[tuple[str, str]]
    _containers: ContainerStack

    def _text(self, raw: str) -> TextBlock:
        """Substitute variables defined so far, then inline-parse."""
        return parse_text(raw, self._bindings, self._lines.lineno)

    def _skip_blank_lines(self) -> None:
        lines = self._lines
        while lines.peek() == "" and not lines.exhausted:
            lines.next()

    def _at_container_end(self) -> bool:
        """Input is exhausted or the next line closes an open container."""
        return self._lines.exhausted or self._containers.closes(self._lines.peek())

    def _parse_block(self) -> BlockData:
        attributes = self._parse_attributes()
        inner: Block = (
            self._try_grouped()
            or self._try_code()
            or self._try_table()
            or self._try_list()
            or self._parse_paragraph()
        )
        return BlockData(inner=inner, attributes=attributes)

    def _parse_attributes(self) -> tuple[Attribute, ...]:
        attributes: list[Attribute] = []
        while (attr := classify_attribute(self._lines.peek())) is not None:
            self._lines.next()
            attributes.append(attr)
        return tuple(attributes)

    def _try_grouped(self) -> Grouped | None:
        if self._lines.peek() != GROUP_START:
            return None
        self._lines.next()

        blocks: list[BlockData] = []
        self._containers.push(ContainerType.GROUP)
        try:
            while True:
                self._skip_blank_lines()
                if self._at_container_end():
                    break
                blocks.append(self._parse_block())
        finally:
            self._containers.pop()

        # A missing "}" (EOF or an outer container closing) is accepted
        if self._lines.peek() == GROUP_END:
            self._lines.next()
        return Grouped(blocks=tuple(blocks))

    def _try_code(self) -> Code | None:
        lines = self._lines
        if lines.peek() != CODE_DELIMITER:
            return None
        lines.next()

        code: list[str] = []
        while not lines.exhausted:
            line = lines.next()
            if line == CODE_DELIMITER:
                break
            code.append(line)
        return Code(code="\n".join(code))

    def _try_table(self) -> Table | None:
        if self._lines.peek() != TABLE_DELIMITER:
            return None
        self._lines.next()

        rows: list[TableRow] = []
        self._containers.push(ContainerType.TABLE)
        try:
            while True:
                self._skip_blank_lines()
                if self._at_container_end():
                    break
                rows.append(self._parse_row())
        finally:
            self._containers.pop()

        if self._lines.peek() == TABLE_DELIMITER:
            self._lines.next()
        return Table(rows=tuple(rows))

    def _parse_row(self) -> TableRow:
        """Parse one row, which runs up to the next blank line.

        A row opened by a ``|`` line collects cells from every ``|`` line
        and a complex cell for every other block until the blank line. A
        row opened by any other line is that single block.
        """
        lines = self._lines
        if not is_simple_row(lines.peek()):
            return TableRow(cols=(ComplexCell(block=self._parse_block()),))

        cols: list[TableCol] = []
        while lines.peek() != "" and not self._at_container_end():
            if is_simple_row(lines.peek()):
                for cell in split_cells(lines.next()):
                    cols.append(SimpleCell(text=self._text(cell)))
                continue
            cell_block = self._parse_block()
            cols.append(ComplexCell(block=cell_block))
            # A paragraph has already eaten the blank line ending the row
            if isinstance(cell_block.inner, Paragraph):
                break
        return TableRow(cols=tuple(cols))

    def _try_list(self) -> List | None:
        lines = self._lines
        items: list[ListEl] = []
        while True:
            line = lines.peek()
            if line == COMPLEX_ITEM_MARKER:
                lines.next()
                items.append(ComplexItem(block=self._parse_block()))
            elif is_simple_item(line):
                lines.next()
                text = [line[2:]]
                while is_continuation(lines.peek()):
                    text.append(lines.next()[2:])
                items.append(SimpleItem(text=self._text(" ".join(text))))
            else:
                break
        if not items:
            return None
        return List(items=tuple(items))

    def _parse_paragraph(self) -> Paragraph:
        """Join lines up to (and including) a blank line; always matches."""
        lines = self._lines
        text: list[str] = []
        while True:
            line = lines.peek()
            if line == "":
                lines.next()
                break
            if self._containers.closes(line):
                break
            text.append(lines.next())
        return Paragraph(text=self._text(" ".join(text)))
