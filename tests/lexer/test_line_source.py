"""Tests for LineSource: logical lines, continuation and lookahead."""

from docmark.lexer import LineSource


def _drain(lines: LineSource) -> list[str]:
    out: list[str] = []
    while not lines.exhausted:
        out.append(lines.next())
    return out


class TestPhysicalLines:
    """Plain newline splitting."""

    def test_splits_on_newline(self) -> None:
        assert _drain(LineSource("a\nb\nc")) == ["a", "b", "c"]

    def test_trailing_newline_adds_no_empty_line(self) -> None:
        assert _drain(LineSource("a\nb\n")) == ["a", "b"]

    def test_blank_lines_are_empty_strings(self) -> None:
        assert _drain(LineSource("a\n\n\nb")) == ["a", "", "", "b"]

    def test_crlf_line_endings(self) -> None:
        assert _drain(LineSource("a\r\nb\r\n")) == ["a", "b"]

    def test_empty_source_is_exhausted(self) -> None:
        lines = LineSource("")
        assert lines.exhausted
        assert lines.peek() == ""
        assert lines.next() == ""


class TestContinuation:
    """Trailing backslash joins physical lines."""

    def test_backslash_joins_next_line(self) -> None:
        assert _drain(LineSource("foo \\\nbar")) == ["foo bar"]

    def test_joins_recursively(self) -> None:
        assert _drain(LineSource("a\\\nb\\\nc\nd")) == ["abc", "d"]

    def test_escaped_backslash_does_not_continue(self) -> None:
        assert _drain(LineSource("foo\\\\\nbar")) == ["foo\\\\", "bar"]

    def test_odd_backslash_run_continues(self) -> None:
        assert _drain(LineSource("foo\\\\\\\nbar")) == ["foo\\\\bar"]

    def test_continuation_at_end_of_input(self) -> None:
        assert _drain(LineSource("foo\\")) == ["foo"]

    def test_continuation_with_crlf(self) -> None:
        assert _drain(LineSource("a\\\r\nb\r\n")) == ["ab"]


class TestLookahead:
    """peek() caches, next() drains."""

    def test_peek_does_not_consume(self) -> None:
        lines = LineSource("first\nsecond")
        assert lines.peek() == "first"
        assert lines.peek() == "first"
        assert lines.next() == "first"
        assert lines.peek() == "second"

    def test_exhausted_after_last_line(self) -> None:
        lines = LineSource("only")
        assert not lines.exhausted
        lines.peek()
        assert not lines.exhausted
        lines.next()
        assert lines.exhausted

    def test_returns_empty_forever_at_end(self) -> None:
        lines = LineSource("x")
        lines.next()
        for _ in range(5):
            assert lines.peek() == ""
            assert lines.next() == ""
        assert lines.exhausted


class TestLineNumbers:
    """lineno tracks physical lines."""

    def test_starts_at_zero(self) -> None:
        assert LineSource("a").lineno == 0

    def test_counts_joined_lines(self) -> None:
        lines = LineSource("a \\\nb\nc")
        lines.next()
        assert lines.lineno == 2
        lines.next()
        assert lines.lineno == 3


class TestTextTransformer:
    """Optional per-line transformation."""

    def test_applied_to_logical_lines(self) -> None:
        lines = LineSource("ab\\\ncd\nef", text_transformer=str.upper)
        assert _drain(lines) == ["ABCD", "EF"]
