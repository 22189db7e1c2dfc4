"""docmark renderers.

Renderers turn a parsed Document into an output format. The parser never
escapes or resolves anything; that all happens here.

Available Renderers:
- HtmlRenderer: HTML output with attribute-driven block selection

"""

from docmark.renderers.html import HtmlRenderer
from docmark.renderers.protocol import DocumentRenderer

__all__ = ["DocumentRenderer", "HtmlRenderer"]
