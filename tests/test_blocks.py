"""Tests for block structure: headers, variables, attributes and block kinds."""

from docmark import parse
from docmark.nodes import (
    Attribute,
    BlockData,
    Code,
    ComplexCell,
    ComplexItem,
    Document,
    Grouped,
    List,
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


def text(content: str) -> TextBlock:
    return TextBlock(inner=Raw(content=content))


def para(content: str, *attributes: Attribute) -> BlockData:
    return BlockData(inner=Paragraph(text=text(content)), attributes=attributes)


def block(inner, *attributes: Attribute) -> BlockData:  # type: ignore[no-untyped-def]
    return BlockData(inner=inner, attributes=attributes)


class TestDocumentLoop:
    def test_empty_input(self) -> None:
        assert parse("") == Document()

    def test_only_blank_lines(self) -> None:
        assert parse("\n\n\n") == Document()

    def test_parts_keep_source_order(self) -> None:
        doc = parse("intro\n\n= One\n\nbody\n\n== Two\n")
        assert [type(p).__name__ for p in doc.parts] == [
            "BlockData",
            "SectionHeader",
            "BlockData",
            "SectionHeader",
        ]

    def test_continuation_lines_form_one_paragraph_line(self) -> None:
        assert parse("a \\\nb").parts == (para("a b"),)


class TestSectionHeaders:
    def test_depth_and_text(self) -> None:
        assert parse("== Title\n").parts == (SectionHeader(depth=2, text=text("Title")),)

    def test_header_text_is_inline_parsed(self) -> None:
        doc = parse("= *Bold* title")
        header = doc.parts[0]
        assert isinstance(header, SectionHeader)
        assert header.text.inner.children[0] == TextBlock(  # type: ignore[union-attr]
            inner=Raw(content="Bold"), attribute=TextAttr.BOLD
        )

    def test_missing_space_is_not_a_header(self) -> None:
        assert parse("==Title").parts == (para("==Title"),)

    def test_header_followed_directly_by_text(self) -> None:
        assert parse("= T\nbody").parts == (
            SectionHeader(depth=1, text=text("T")),
            para("body"),
        )


class TestVariables:
    def test_definition_is_substituted(self) -> None:
        assert parse(":name: World\n\nHello {name}\n").parts == (para("Hello World"),)

    def test_definitions_produce_no_parts(self) -> None:
        assert parse(":a: 1\n:b: 2\n") == Document()

    def test_only_earlier_definitions_apply(self) -> None:
        assert parse("{a}\n\n:a: x\n\n{a}").parts == (para("{a}"), para("x"))

    def test_first_definition_wins(self) -> None:
        assert parse(":a: first\n:a: second\n\n{a}").parts == (para("first"),)

    def test_value_is_not_substituted_at_definition(self) -> None:
        assert parse(":a: {b}\n:b: late\n\n{a}").parts == (para("late"),)

    def test_substituted_in_headers_items_and_cells(self) -> None:
        doc = parse(":v: X\n\n= {v}\n\n* {v}\n\n|===\n|{v}\n|===\n")
        assert doc.parts == (
            SectionHeader(depth=1, text=text("X")),
            block(List(items=(SimpleItem(text=text("X")),))),
            block(Table(rows=(TableRow(cols=(SimpleCell(text=text("X")),)),))),
        )


class TestAttributes:
    def test_attribute_decorates_next_block(self) -> None:
        assert parse("[hidden]\nsecret").parts == (para("secret", Attribute("hidden")),)

    def test_attributes_keep_order(self) -> None:
        doc = parse("[info]\n[argument, len]\nThe length.")
        assert doc.parts == (
            para("The length.", Attribute("info"), Attribute("argument", " len")),
        )

    def test_attribute_without_block(self) -> None:
        assert parse("[hidden]\n").parts == (para("", Attribute("hidden")),)

    def test_blank_line_after_attribute_ends_block(self) -> None:
        assert parse("[hidden]\n\ntext").parts == (
            para("", Attribute("hidden")),
            para("text"),
        )


class TestParagraphs:
    def test_lines_joined_with_space(self) -> None:
        assert parse("one\ntwo\nthree").parts == (para("one two three"),)

    def test_blank_line_separates(self) -> None:
        assert parse("one\n\ntwo").parts == (para("one"), para("two"))

    def test_stray_closer_at_top_level_is_text(self) -> None:
        assert parse("}").parts == (para("}"),)


class TestCodeBlocks:
    def test_lines_kept_verbatim(self) -> None:
        doc = parse("----\n  *not bold* {x}\n\nlink:y\n----\nafter")
        assert doc.parts == (
            block(Code(code="  *not bold* {x}\n\nlink:y")),
            para("after"),
        )

    def test_empty(self) -> None:
        assert parse("----\n----").parts == (block(Code(code="")),)

    def test_unterminated_runs_to_end(self) -> None:
        assert parse("----\na\nb").parts == (block(Code(code="a\nb")),)

    def test_unterminated_with_trailing_newline(self) -> None:
        assert parse("----\na\n").parts == (block(Code(code="a")),)


class TestLists:
    def test_simple_items_with_continuation(self) -> None:
        assert parse("* one\n  more\n* two").parts == (
            block(
                List(
                    items=(
                        SimpleItem(text=text("one more")),
                        SimpleItem(text=text("two")),
                    )
                )
            ),
        )

    def test_simple_and_complex_items(self) -> None:
        assert parse("* one\n**\nblock text\n").parts == (
            block(
                List(
                    items=(
                        SimpleItem(text=text("one")),
                        ComplexItem(block=para("block text")),
                    )
                )
            ),
        )

    def test_complex_item_holding_code(self) -> None:
        doc = parse("**\n----\ncode\n----\n* x")
        assert doc.parts == (
            block(
                List(
                    items=(
                        ComplexItem(block=block(Code(code="code"))),
                        SimpleItem(text=text("x")),
                    )
                )
            ),
        )

    def test_list_ends_at_other_line(self) -> None:
        assert parse("* a\nplain").parts == (
            block(List(items=(SimpleItem(text=text("a")),))),
            para("plain"),
        )

    def test_asterisk_without_space_is_text(self) -> None:
        (part,) = parse("*bold* start").parts
        assert isinstance(part, BlockData)
        assert isinstance(part.inner, Paragraph)


class TestTables:
    def test_simple_row(self) -> None:
        assert parse("|===\n|a|b|c\n|===\n").parts == (
            block(
                Table(
                    rows=(
                        TableRow(
                            cols=(
                                SimpleCell(text=text("a")),
                                SimpleCell(text=text("b")),
                                SimpleCell(text=text("c")),
                            )
                        ),
                    )
                )
            ),
        )

    def test_consecutive_lines_form_one_row(self) -> None:
        doc = parse("|===\n|a|b\n|c\n|===")
        table = doc.parts[0].inner  # type: ignore[union-attr]
        assert isinstance(table, Table)
        assert len(table.rows) == 1
        assert [c.text.plain() for c in table.rows[0].cols] == ["a", "b", "c"]  # type: ignore[union-attr]

    def test_blank_line_ends_row(self) -> None:
        table = parse("|===\n|a|b\n\n|c|d\n|===").parts[0].inner  # type: ignore[union-attr]
        assert isinstance(table, Table)
        assert len(table.rows) == 2

    def test_escaped_separator_in_cell(self) -> None:
        table = parse("|===\n|a\\|b|c\n|===").parts[0].inner  # type: ignore[union-attr]
        assert isinstance(table, Table)
        assert table.rows[0].cols == (
            SimpleCell(text=text("a|b")),
            SimpleCell(text=text("c")),
        )

    def test_complex_row(self) -> None:
        doc = parse("|===\n|a\n\n----\ncode\n----\n|===")
        assert doc.parts == (
            block(
                Table(
                    rows=(
                        TableRow(cols=(SimpleCell(text=text("a")),)),
                        TableRow(cols=(ComplexCell(block=block(Code(code="code"))),)),
                    )
                )
            ),
        )

    def test_block_after_simple_lines_joins_the_row(self) -> None:
        assert parse("|===\n|a\nfoo\n\n|===\n").parts == (
            block(
                Table(
                    rows=(
                        TableRow(
                            cols=(
                                SimpleCell(text=text("a")),
                                ComplexCell(block=para("foo")),
                            )
                        ),
                    )
                )
            ),
        )

    def test_row_mixes_cells_until_blank_line(self) -> None:
        doc = parse("|===\n|a\n----\nx\n----\n|b\n\n|c\n|===")
        table = doc.parts[0].inner  # type: ignore[union-attr]
        assert isinstance(table, Table)
        assert table.rows == (
            TableRow(
                cols=(
                    SimpleCell(text=text("a")),
                    ComplexCell(block=block(Code(code="x"))),
                    SimpleCell(text=text("b")),
                )
            ),
            TableRow(cols=(SimpleCell(text=text("c")),)),
        )

    def test_paragraph_cell_ends_the_row(self) -> None:
        table = parse("|===\n|a\nfoo\n\n|b\n|===").parts[0].inner  # type: ignore[union-attr]
        assert isinstance(table, Table)
        assert len(table.rows) == 2
        assert table.rows[1].cols == (SimpleCell(text=text("b")),)

    def test_paragraph_row_stops_at_delimiter(self) -> None:
        assert parse("|===\ntext\n|===\nafter").parts == (
            block(Table(rows=(TableRow(cols=(ComplexCell(block=para("text")),)),))),
            para("after"),
        )

    def test_unterminated(self) -> None:
        assert parse("|===\n|a").parts == (
            block(Table(rows=(TableRow(cols=(SimpleCell(text=text("a")),)),))),
        )

    def test_empty(self) -> None:
        assert parse("|===\n|===").parts == (block(Table(rows=())),)


class TestGroupedBlocks:
    def test_two_paragraphs(self) -> None:
        assert parse("{\nfoo\n\nbar\n}\n").parts == (
            block(Grouped(blocks=(para("foo"), para("bar")))),
        )

    def test_closer_ends_paragraph(self) -> None:
        assert parse("{\nfoo\n}\nafter").parts == (
            block(Grouped(blocks=(para("foo"),))),
            para("after"),
        )

    def test_nested_groups(self) -> None:
        assert parse("{\n{\na\n}\n}").parts == (
            block(Grouped(blocks=(block(Grouped(blocks=(para("a"),))),))),
        )

    def test_unterminated(self) -> None:
        assert parse("{\na\n\nb").parts == (
            block(Grouped(blocks=(para("a"), para("b")))),
        )

    def test_empty(self) -> None:
        assert parse("{\n}").parts == (block(Grouped(blocks=())),)

    def test_attributes_inside_group(self) -> None:
        doc = parse("[info]\n{\n[hidden]\nx\n}")
        assert doc.parts == (
            block(
                Grouped(blocks=(para("x", Attribute("hidden")),)),
                Attribute("info"),
            ),
        )

    def test_group_inside_list_item(self) -> None:
        doc = parse("**\n{\n* a\n}\n* b")
        assert doc.parts == (
            block(
                List(
                    items=(
                        ComplexItem(
                            block=block(
                                Grouped(blocks=(block(List(items=(SimpleItem(text=text("a")),))),))
                            )
                        ),
                        SimpleItem(text=text("b")),
                    )
                )
            ),
        )

    def test_table_inside_group(self) -> None:
        doc = parse("{\n|===\n|a\n|===\n}")
        assert doc.parts == (
            block(
                Grouped(
                    blocks=(
                        block(Table(rows=(TableRow(cols=(SimpleCell(text=text("a")),)),))),
                    )
                )
            ),
        )
