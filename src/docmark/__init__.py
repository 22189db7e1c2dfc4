"""
docmark: doc-comment markup compiler

Turns the documentation attached to a declaration into a typed, immutable
Document: section headers, attributed blocks (grouped, code, list, table,
paragraph) and inline spans (bold, raw, links), with ``:name: value``
variables expanded along the way. The parser never fails; malformed input
degrades to the closest reasonable structure.

Quick Start:
    >>> from docmark import parse, render
    >>> doc = parse("Adds two numbers.\\n\\n= Remarks\\n\\nSee *also*.\\n")
    >>> print(render(doc))
    <p>Adds two numbers.</p>
    <h2>Remarks</h2>
    <p>See <b>also</b>.</p>

    >>> # Or use the high-level DocMark class
    >>> from docmark import DocMark
    >>> dm = DocMark()
    >>> html = dm("Some `code` here")

Doc Attributes:
    >>> from docmark import collect_doc_comment
    >>> doc = parse(collect_doc_comment([" Frees the buffer.", "", "[hidden]", "internal"]))

Installation:
    pip install docmark              # Core parser and renderer (zero deps)
"""

from collections.abc import Iterable
from typing import Any

from docmark.collect import collect_doc_comment, collect_from_attributes
from docmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from docmark.errors import DocMarkError, ParseError, RenderError, SubstitutionLimitError
from docmark.lexer import LineSource
from docmark.nodes import (
    Attribute,
    Block,
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
    Node,
    Paragraph,
    Part,
    Raw,
    SectionHeader,
    SimpleCell,
    SimpleItem,
    Table,
    TableCol,
    TableRow,
    Text,
    TextAttr,
    TextBlock,
)
from docmark.parser import Parser
from docmark.renderers.html import HtmlRenderer
from docmark.renderers.protocol import DocumentRenderer
from docmark.serialization import from_dict, from_json, to_dict, to_json
from docmark.utils.logger import get_logger
from docmark.visitor import BaseVisitor, transform

__version__ = "0.1.0"

# Undecodable bytes survive as lone surrogates instead of failing the parse
_SOURCE_ENCODING = "utf-8"
_SOURCE_ERRORS = "surrogateescape"


def _as_text(source: str | bytes) -> str:
    if isinstance(source, bytes):
        return source.decode(_SOURCE_ENCODING, _SOURCE_ERRORS)
    return source


def parse(source: str | bytes, *, config: ParseConfig | None = None) -> Document:
    """Parse a doc comment into a typed Document.

    Args:
        source: Doc-comment text. Bytes are decoded as UTF-8; invalid
            sequences are kept via ``surrogateescape``.
        config: Parse configuration (defaults to ``ParseConfig()``)

    Returns:
        Document root node

    Raises:
        SubstitutionLimitError: Only with ``config.strict_substitution`` set,
            when variable expansion does not settle.

    Example:
        >>> doc = parse(":who: World\\n\\nHello {who}")
        >>> doc.parts[0].inner.text.plain()
        'Hello World'
    """
    # Set config via ContextVar for thread-safety
    with parse_config_context(config or ParseConfig()):
        return Parser(_as_text(source)).parse()


def render(doc: Document, **renderer_options: Any) -> str:
    """Render a Document to HTML.

    Args:
        doc: Document to render
        **renderer_options: Keyword arguments for ``HtmlRenderer``
            (``internal_prefix``, ``man_url_template``, ``link_resolver``)

    Returns:
        HTML string

    Example:
        >>> render(parse("link:lrs_foo"))
        '<p><a href="./lrs_foo.html">lrs_foo</a></p>\\n'
    """
    return HtmlRenderer(**renderer_options).render(doc)


class DocMark:
    """High-level doc-comment processor combining parser and renderer.

    Usage:
        >>> dm = DocMark()
        >>> dm("= Remarks\\n\\n*Note*")
        '<h2>Remarks</h2>\\n<p><b>Note</b></p>\\n'

        >>> # Access the tree
        >>> doc = dm.parse("== Usage")
        >>> doc.parts[0].depth
        2

        >>> # Strict substitution and a custom renderer
        >>> dm = DocMark(
        ...     config=ParseConfig(strict_substitution=True),
        ...     renderer=HtmlRenderer(internal_prefix="mylib_"),
        ... )

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        DocMark instances concurrently from different threads.

    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        config: ParseConfig | None = None,
        renderer: DocumentRenderer | None = None,
    ) -> None:
        """Initialize the processor.

        Args:
            config: Parse configuration, built once and reused for every call
            renderer: Renderer used by ``__call__`` and ``render``
                (defaults to ``HtmlRenderer()``)
        """
        self._config = config or ParseConfig()
        self._renderer: DocumentRenderer = renderer or HtmlRenderer()

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str | bytes) -> str:
        """Parse and render a doc comment in one call."""
        return self.render(self.parse(source))

    def parse(self, source: str | bytes) -> Document:
        """Parse a doc comment into a Document.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        with parse_config_context(self._config):
            return Parser(_as_text(source)).parse()

    def parse_many(self, sources: Iterable[str | bytes]) -> list[Document]:
        """Parse several doc comments; each gets fresh variable bindings.

        Sets config once, parses all, restores once.

        Example:
            >>> dm = DocMark()
            >>> docs = dm.parse_many([":a: x\\n\\n{a}", "{a}"])
            >>> [d.parts[0].inner.text.plain() for d in docs]
            ['x', '{a}']
        """
        with parse_config_context(self._config):
            return [Parser(_as_text(source)).parse() for source in sources]

    def render(self, doc: Document) -> str:
        """Render a Document with this processor's renderer."""
        return self._renderer.render(doc)


__all__ = [
    # High-level API
    "parse",
    "render",
    "DocMark",
    "collect_doc_comment",
    "collect_from_attributes",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "DocMarkError",
    "ParseError",
    "SubstitutionLimitError",
    "RenderError",
    # Low-level API
    "LineSource",
    "Parser",
    "HtmlRenderer",
    "DocumentRenderer",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Visitor
    "BaseVisitor",
    "transform",
    # Nodes - Document structure
    "Document",
    "Node",
    "Part",
    "SectionHeader",
    "BlockData",
    "Attribute",
    # Nodes - Blocks
    "Block",
    "Grouped",
    "Code",
    "List",
    "ListEl",
    "SimpleItem",
    "ComplexItem",
    "Table",
    "TableRow",
    "TableCol",
    "SimpleCell",
    "ComplexCell",
    "Paragraph",
    # Nodes - Inline
    "TextBlock",
    "TextAttr",
    "Text",
    "Raw",
    "Nested",
    "Link",
    # Utilities
    "get_logger",
    # Version
    "__version__",
]
