"""Property-based tests for LineSource invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from docmark.lexer import LineSource

# No backslashes or carriage returns: physical and logical lines coincide
plain_source = st.text(
    alphabet=st.characters(exclude_characters="\\\r", exclude_categories=("Cs",)),
    max_size=500,
)


def _drain(lines: LineSource) -> list[str]:
    out: list[str] = []
    while not lines.exhausted:
        out.append(lines.next())
    return out


class TestLineSourceInvariants:
    @given(plain_source)
    @settings(max_examples=200)
    def test_lines_match_newline_split(self, source: str) -> None:
        expected = source.split("\n")
        if expected[-1] == "":
            expected.pop()
        assert _drain(LineSource(source)) == expected

    @given(st.text(max_size=500))
    @settings(max_examples=200)
    def test_terminates_and_counts_every_physical_line(self, source: str) -> None:
        lines = LineSource(source)
        logical = _drain(lines)
        physical = source.count("\n") + (0 if source.endswith("\n") or not source else 1)
        assert lines.lineno == physical
        assert len(logical) <= physical

    @given(st.text(max_size=200))
    @settings(max_examples=100)
    def test_peek_agrees_with_next(self, source: str) -> None:
        lines = LineSource(source)
        while not lines.exhausted:
            peeked = lines.peek()
            assert lines.next() == peeked
        assert lines.peek() == lines.next() == ""

    @given(st.text(max_size=200))
    @settings(max_examples=100)
    def test_no_newlines_in_logical_lines(self, source: str) -> None:
        assert all("\n" not in line for line in _drain(LineSource(source)))
