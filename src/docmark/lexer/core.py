"""Logical line source with one-line lookahead.

Reads physical lines from an immutable source string using a window-based
scan (``str.find`` to the next newline, then commit), joining lines that
end in a continuation backslash into one logical line.

The block parser re-peeks freely before deciding what to consume, so the
source is pull-based: ``peek()`` fills a single cached slot and ``next()``
drains it.

Thread Safety:
LineSource instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Callable

CONTINUATION = "\\"


def _ends_with_continuation(line: str) -> bool:
    """Whether the line ends in an unescaped continuation backslash.

    A trailing run of backslashes continues the line only if its length is
    odd: ``foo\\`` continues, ``foo\\\\`` is an escaped backslash.
    """
    run = len(line) - len(line.rstrip(CONTINUATION))
    return run % 2 == 1


class LineSource:
    """Pull-style source of logical lines.

    Usage:
        >>> lines = LineSource("first \\\\\\nsecond\\nthird")
        >>> lines.peek()
        'first second'
        >>> lines.next()
        'first second'
        >>> lines.next()
        'third'
        >>> lines.next()
        ''
        >>> lines.exhausted
        True

    Once the input runs out, ``peek()`` and ``next()`` return ``""``
    forever; callers rely on that to terminate their loops.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_cached",
        "_text_transformer",
    )

    def __init__(
        self,
        source: str,
        text_transformer: Callable[[str], str] | None = None,
    ) -> None:
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 0
        self._cached: str | None = None
        self._text_transformer = text_transformer

    @property
    def exhausted(self) -> bool:
        """True once every physical line has been handed out."""
        return self._cached is None and self._pos >= self._source_len

    @property
    def lineno(self) -> int:
        """Physical line number (1-indexed) of the last line read, 0 before any."""
        return self._lineno

    def peek(self) -> str:
        """Return the next logical line without consuming it."""
        if self._cached is None:
            if self._pos >= self._source_len:
                return ""
            self._cached = self._read_logical_line()
        return self._cached

    def next(self) -> str:
        """Consume and return the next logical line."""
        if self._cached is not None:
            line = self._cached
            self._cached = None
            return line
        if self._pos >= self._source_len:
            return ""
        return self._read_logical_line()

    # =========================================================================
    # Window navigation helpers
    # =========================================================================

    def _read_physical_line(self) -> str:
        """Read up to the next newline and commit past it."""
        end = self._source.find("\n", self._pos)
        if end == -1:
            end = self._source_len
        line = self._source[self._pos : end]
        self._pos = end + 1
        self._lineno += 1
        if line.endswith("\r"):
            line = line[:-1]
        return line

    def _read_logical_line(self) -> str:
        """Read one logical line, joining continuation lines."""
        parts: list[str] = []
        while True:
            line = self._read_physical_line()
            if not _ends_with_continuation(line):
                parts.append(line)
                break
            parts.append(line[:-1])
            if self._pos >= self._source_len:
                break

        logical = "".join(parts)
        if self._text_transformer is not None:
            logical = self._text_transformer(logical)
        return logical
