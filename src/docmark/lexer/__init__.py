"""Logical line source and line classifiers for docmark.

Architecture:
lexer/
├── __init__.py          # Re-exports LineSource
├── core.py              # LineSource (continuation joining + one-line lookahead)
└── classifiers.py       # Pure per-line classification (headers, vars, attributes,
                         # delimiters, list and table row shapes)

Usage:
    >>> from docmark.lexer import LineSource
    >>> lines = LineSource("= Title\\n\\nBody")
    >>> lines.next(), lines.next(), lines.next()
    ('= Title', '', 'Body')
"""

from docmark.lexer.core import LineSource

__all__ = ["LineSource"]
