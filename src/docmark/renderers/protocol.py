"""DocumentRenderer protocol: stable interface for docmark renderers.

Any renderer that implements ``render(doc) -> str`` conforms to this
protocol. The built-in ``HtmlRenderer`` is the reference implementation.

Example:
    from docmark.renderers.protocol import DocumentRenderer

    def render_page(renderer: DocumentRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from docmark.nodes import Document


class DocumentRenderer(Protocol):
    """Protocol for Document renderers."""

    def render(self, doc: Document) -> str:
        """Render a Document to a string."""
        ...
