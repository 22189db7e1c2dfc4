"""Reference HTML renderer for docmark documents.

The parser only records attributes and link targets; this renderer is
where they acquire meaning:

- Blocks tagged ``hidden``, ``argument``, ``return_value`` or ``field`` are
  left out of normal output. ``argument()``, ``field()`` and
  ``return_value()`` pick them out explicitly.
- ``info`` wraps a block in an "informative" box, ``quote`` in a blockquote.
- ``man:name(section)`` links point at man7.org; targets starting with the
  internal prefix link to a sibling page; anything else is used verbatim.

Thread Safety:
HtmlRenderer holds configuration only. Each call builds its own
StringBuilder, so one instance can be shared across threads.
"""

import html
from collections.abc import Callable

from docmark.errors import RenderError
from docmark.nodes import (
    BlockData,
    Code,
    ComplexCell,
    ComplexItem,
    Document,
    Grouped,
    Link,
    List,
    ListEl,
    Nested,
    Paragraph,
    Part,
    Raw,
    SectionHeader,
    SimpleCell,
    SimpleItem,
    Table,
    TableRow,
    TextAttr,
    TextBlock,
)
from docmark.stringbuilder import StringBuilder
from docmark.utils.logger import get_logger

logger = get_logger(__name__)

# Attributes that keep a block out of normal flow
HIDDEN_ATTRIBUTES: tuple[str, ...] = ("hidden", "argument", "return_value", "field")

MAN_URL_TEMPLATE = "http://man7.org/linux/man-pages/man{section}/{name}.{section}.html"

_INFO_BLOCK_HEAD = '<p class="info_head">This block is informative.</p>'
_INFO_SECTION_HEAD = '<p class="info_head">This section is informative.</p>'

_TEXT_TAGS = {TextAttr.RAW: "code", TextAttr.BOLD: "b"}


def html_escape(s: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for element content."""
    return html.escape(s, quote=False)


def _attr_escape(s: str) -> str:
    return html_escape(s).replace('"', "&quot;")


def _is_title(part: Part, title: str) -> bool:
    return (
        isinstance(part, SectionHeader)
        and part.depth == 1
        and part.text.attribute is None
        and part.text.inner == Raw(content=title)
    )


class HtmlRenderer:
    """Render a docmark Document to HTML.

    Usage:
        >>> from docmark import parse
        >>> HtmlRenderer().render(parse("Some *bold* text"))
        '<p>Some <b>bold</b> text</p>\\n'

    Args:
        internal_prefix: Link targets starting with this prefix are
            rendered as ``./<target>.html``.
        man_url_template: Format string for ``man:`` links, with
            ``{name}`` and ``{section}`` fields.
        link_resolver: Optional hook consulted first for every link target;
            return a URL to use it, or None to fall back to the built-in rules.

    """

    __slots__ = ("_internal_prefix", "_man_url_template", "_link_resolver")

    def __init__(
        self,
        *,
        internal_prefix: str = "lrs",
        man_url_template: str = MAN_URL_TEMPLATE,
        link_resolver: Callable[[str], str | None] | None = None,
    ) -> None:
        self._internal_prefix = internal_prefix
        self._man_url_template = man_url_template
        self._link_resolver = link_resolver

    # =========================================================================
    # Document-level entry points
    # =========================================================================

    def render(self, doc: Document) -> str:
        """Render every part of the document."""
        sb = StringBuilder()
        for part in doc.parts:
            self._render_part(part, sb)
        return sb.build()

    def short(self, doc: Document) -> str:
        """Render the summary: everything before the first ``= `` section."""
        sb = StringBuilder()
        for part in doc.parts:
            if isinstance(part, SectionHeader) and part.depth == 1:
                break
            self._render_part(part, sb)
        return sb.build()

    def section(self, doc: Document, title: str, *, informative: bool = False) -> str:
        """Render the depth-1 section whose header text is exactly ``title``.

        Returns an empty string when the document has no such section.
        """
        sb = StringBuilder()
        found = False
        for part in doc.parts:
            if isinstance(part, SectionHeader) and part.depth == 1:
                if found:
                    break
                if _is_title(part, title):
                    found = True
                    self._render_section_header(part, sb, informative=informative)
            elif found:
                self._render_part(part, sb)
        return sb.build()

    def description(self, doc: Document) -> str:
        return self.section(doc, "Description")

    def remarks(self, doc: Document) -> str:
        return self.section(doc, "Remarks", informative=True)

    def examples(self, doc: Document) -> str:
        return self.section(doc, "Examples", informative=True)

    def see_also(self, doc: Document) -> str:
        return self.section(doc, "See also")

    def argument(self, doc: Document, name: str) -> str:
        """Render the ``[argument, name]`` block describing one argument."""
        return self._render_selected(doc, "argument", name)

    def field(self, doc: Document, name: str) -> str:
        """Render the ``[field, name]`` block describing one struct field."""
        return self._render_selected(doc, "field", name)

    def return_value(self, doc: Document) -> str:
        """Render the ``[return_value]`` block."""
        return self._render_selected(doc, "return_value", None)

    def has_return_value(self, doc: Document) -> bool:
        return _find_selected(doc, "return_value", None) is not None

    def render_text(self, block: TextBlock) -> str:
        """Render a single inline TextBlock."""
        sb = StringBuilder()
        self._render_text_block(block, sb)
        return sb.build()

    def _render_selected(self, doc: Document, name: str, args: str | None) -> str:
        data = _find_selected(doc, name, args)
        if data is None:
            return ""
        sb = StringBuilder()
        self._render_block_data(data, sb, show_hidden=True)
        return sb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_part(self, part: Part, sb: StringBuilder) -> None:
        match part:
            case SectionHeader():
                self._render_section_header(part, sb)
            case BlockData():
                self._render_block_data(part, sb)
            case _:
                raise RenderError(f"not a document part: {type(part).__name__}")

    def _render_section_header(
        self, header: SectionHeader, sb: StringBuilder, *, informative: bool = False
    ) -> None:
        level = header.depth + 1
        sb.append(f"<h{level}>")
        self._render_text_block(header.text, sb)
        sb.append(f"</h{level}>\n")
        if informative:
            sb.append(_INFO_SECTION_HEAD).append("\n")

    def _render_block_data(
        self, data: BlockData, sb: StringBuilder, *, show_hidden: bool = False
    ) -> None:
        if not show_hidden and any(data.has_attribute(name) for name in HIDDEN_ATTRIBUTES):
            return

        is_info = data.has_attribute("info")
        is_quote = data.has_attribute("quote")
        if is_info:
            sb.append('<div class="informative">').append(_INFO_BLOCK_HEAD)
        if is_quote:
            sb.append("<blockquote>")

        match data.inner:
            case Grouped(blocks=blocks):
                for child in blocks:
                    self._render_block_data(child, sb)
            case Code(code=code):
                sb.append("<pre>").append(html_escape(code)).append("</pre>\n")
            case List(items=items):
                self._render_list(items, sb)
            case Table(rows=rows):
                self._render_table(rows, sb)
            case Paragraph(text=text):
                sb.append("<p>")
                self._render_text_block(text, sb)
                sb.append("</p>\n")
            case other:
                raise RenderError(f"not a block: {type(other).__name__}")

        if is_quote:
            sb.append("</blockquote>\n")
        if is_info:
            sb.append("</div>\n")

    def _render_list(self, items: tuple[ListEl, ...], sb: StringBuilder) -> None:
        sb.append("<ul>\n")
        for item in items:
            sb.append("<li>")
            match item:
                case SimpleItem(text=text):
                    sb.append("<p>")
                    self._render_text_block(text, sb)
                    sb.append("</p>")
                case ComplexItem(block=block):
                    self._render_block_data(block, sb)
            sb.append("</li>\n")
        sb.append("</ul>\n")

    def _render_table(self, rows: tuple[TableRow, ...], sb: StringBuilder) -> None:
        sb.append("<table>\n")
        for row in rows:
            sb.append("<tr>")
            for col in row.cols:
                sb.append("<td>")
                match col:
                    case SimpleCell(text=text):
                        self._render_text_block(text, sb)
                    case ComplexCell(block=block):
                        self._render_block_data(block, sb)
                sb.append("</td>")
            sb.append("</tr>\n")
        sb.append("</table>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_text_block(self, block: TextBlock, sb: StringBuilder) -> None:
        tag = _TEXT_TAGS.get(block.attribute)
        if tag:
            sb.append(f"<{tag}>")
        match block.inner:
            case Raw(content=content):
                sb.append(html_escape(content))
            case Nested(children=children):
                for child in children:
                    self._render_text_block(child, sb)
            case Link():
                self._render_link(block.inner, sb)
            case other:
                raise RenderError(f"not inline text: {type(other).__name__}")
        if tag:
            sb.append(f"</{tag}>")

    def _render_link(self, link: Link, sb: StringBuilder) -> None:
        href, default_text = self._resolve_link(link.target)
        sb.append(f'<a href="{_attr_escape(href)}">')
        if link.text is not None:
            self._render_text_block(link.text, sb)
        else:
            sb.append(html_escape(default_text))
        sb.append("</a>")

    def _resolve_link(self, target: str) -> tuple[str, str]:
        """Map a link target to ``(href, fallback text)``."""
        if self._link_resolver is not None:
            resolved = self._link_resolver(target)
            if resolved is not None:
                return resolved, target

        if target.startswith("man:"):
            page = target[4:]
            name, paren, rest = page.partition("(")
            if paren and rest.endswith(")"):
                section = rest[:-1]
                return self._man_url_template.format(name=name, section=section), page
            logger.debug("Malformed man page link %r, using it verbatim", target)

        if self._internal_prefix and target.startswith(self._internal_prefix):
            return f"./{target}.html", target

        return target, target


def _find_selected(doc: Document, name: str, args: str | None) -> BlockData | None:
    """First block before the first ``= `` section carrying ``[name, args]``.

    Names and args compare whitespace-trimmed; ``args=None`` matches on the
    name alone.
    """
    for part in doc.parts:
        if isinstance(part, SectionHeader):
            if part.depth == 1:
                break
            continue
        for attr in part.attributes:
            if attr.name.strip() != name:
                continue
            if args is None:
                return part
            if attr.args is not None and attr.args.strip() == args:
                return part
    return None
