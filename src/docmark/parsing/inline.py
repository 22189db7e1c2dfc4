"""Inline text parsing for docmark.

Grammar, tried at each position in priority order:

    EscapeSequence <- '\\' ('\\' / '`' / '*' / '{' / ']' / '|' / 'link:')
    Bold           <- '*' (!'*' ('\\*' / '\\\\' / .))* '*'?
    Raw            <- '`' (!'`' ('\\`' / '\\\\' / .))* '`'?
    Link           <- 'link:' (!' ' !'[' .)* ('[' (!']' ('\\]' / '\\\\' / .))* ']')?
    Text           <- (EscapeSequence / Bold / Raw / Link / .)*

Bold interiors and link text are parsed recursively; raw spans are
literal. Unterminated bold and raw spans run to the end of input. A link
text bracket without a closing ``]`` is not consumed; only the bare target
becomes the link and the ``[`` is read again as plain text.

Thread Safety:
InlineParser instances are single-use. All state is instance-local.

"""

from __future__ import annotations

from docmark.nodes import Link, Nested, Raw, TextAttr, TextBlock
from docmark.parsing.substitution import Bindings, substitute

LINK_PREFIX = "link:"

# Characters a backslash makes literal (plus the word "link:")
_ESCAPABLE: frozenset[str] = frozenset("\\`*{]|")


class InlineParser:
    """Single-pass recursive-descent parser for one text run.

    Usage:
        >>> InlineParser("*hi*").parse()
        TextBlock(inner=Raw(content='hi'), attribute=<TextAttr.BOLD: 'bold'>)

    """

    __slots__ = ("_text", "_pos", "_pending", "_spans")

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        # Plain characters not yet flushed into a Raw span
        self._pending: list[str] = []
        self._spans: list[TextBlock] = []

    def parse(self) -> TextBlock:
        """Scan the whole text and shape the result."""
        text_len = len(self._text)
        while self._pos < text_len:
            if (
                self._try_escape()
                or self._try_span("*", TextAttr.BOLD)
                or self._try_span("`", TextAttr.RAW)
                or self._try_link()
            ):
                continue
            self._pending.append(self._text[self._pos])
            self._pos += 1
        return self._finish()

    # =========================================================================
    # Constructs
    # =========================================================================

    def _try_escape(self) -> bool:
        text = self._text
        pos = self._pos
        if text[pos] != "\\" or pos + 1 >= len(text):
            return False
        if text[pos + 1] in _ESCAPABLE:
            literal = text[pos + 1]
        elif text.startswith(LINK_PREFIX, pos + 1):
            literal = LINK_PREFIX
        else:
            return False
        self._pending.append(literal)
        self._pos = pos + 1 + len(literal)
        return True

    def _try_span(self, delim: str, attr: TextAttr) -> bool:
        """Parse a bold (asterisk) or raw (backtick) span starting here."""
        text = self._text
        if text[self._pos] != delim:
            return False

        recursive = attr is TextAttr.BOLD
        interior: list[str] = []
        i = self._pos + 1
        text_len = len(text)
        while i < text_len:
            char = text[i]
            if char == delim:
                break
            if char == "\\" and i + 1 < text_len and text[i + 1] in ("\\", delim):
                if recursive:
                    # Keep the escape; the nested parse resolves it
                    interior.append(text[i : i + 2])
                else:
                    interior.append(text[i + 1])
                i += 2
                continue
            interior.append(char)
            i += 1

        self._pos = i + 1
        self._flush()
        body = "".join(interior)
        if recursive:
            block = InlineParser(body).parse()
            if block.attribute is not None:
                block = TextBlock(inner=Nested(children=(block,)))
            self._spans.append(TextBlock(inner=block.inner, attribute=attr))
        else:
            self._spans.append(TextBlock(inner=Raw(content=body), attribute=attr))
        return True

    def _try_link(self) -> bool:
        text = self._text
        if not text.startswith(LINK_PREFIX, self._pos):
            return False

        text_len = len(text)
        start = self._pos + len(LINK_PREFIX)
        end = start
        while end < text_len and text[end] not in " [":
            end += 1
        target = text[start:end]
        consumed = end

        label: TextBlock | None = None
        if end < text_len and text[end] == "[":
            chars: list[str] = []
            j = end + 1
            while j < text_len:
                char = text[j]
                if char == "\\" and j + 1 < text_len and text[j + 1] in "\\]":
                    chars.append(text[j + 1])
                    j += 2
                    continue
                if char == "]":
                    break
                chars.append(char)
                j += 1
            if j < text_len:
                label = InlineParser("".join(chars)).parse()
                consumed = j + 1

        self._flush()
        self._spans.append(TextBlock(inner=Link(target=target, text=label)))
        self._pos = consumed
        return True

    # =========================================================================
    # Output shaping
    # =========================================================================

    def _flush(self) -> None:
        if self._pending:
            self._spans.append(TextBlock(inner=Raw(content="".join(self._pending))))
            self._pending = []

    def _finish(self) -> TextBlock:
        if not self._spans:
            return TextBlock(inner=Raw(content="".join(self._pending)))
        if not self._pending and len(self._spans) == 1:
            return self._spans[0]
        self._flush()
        return TextBlock(inner=Nested(children=tuple(self._spans)))


def parse_inline(text: str) -> TextBlock:
    """Parse already-substituted text into a TextBlock.

    Example:
        >>> parse_inline("plain")
        TextBlock(inner=Raw(content='plain'), attribute=None)
    """
    return InlineParser(text).parse()


def parse_text(text: str, bindings: Bindings, lineno: int | None = None) -> TextBlock:
    """Expand variables, then parse inline markup."""
    return InlineParser(substitute(text, bindings, lineno=lineno)).parse()


__all__ = ["InlineParser", "LINK_PREFIX", "parse_inline", "parse_text"]
