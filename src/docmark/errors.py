"""Exception classes for docmark.

The markup grammar itself never fails: malformed constructs degrade to
best-effort output. These exceptions cover resource limits and renderer
misuse.
"""

from __future__ import annotations


class DocMarkError(Exception):
    """Base exception for all docmark errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(DocMarkError):
    """Error raised while turning a doc comment into a Document."""

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Physical line number of the offending line (1-indexed)
        """
        self.message = message
        self.lineno = lineno

        location = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{location}{message}")


class SubstitutionLimitError(ParseError):
    """Variable substitution hit a configured limit.

    Only raised when ``ParseConfig.strict_substitution`` is set; otherwise
    the partially expanded text is kept and a warning is logged.
    Cyclic definitions such as ``:a: {b}`` / ``:b: {a}`` exhaust the pass
    limit; self-multiplying ones such as ``:a: {a}{a}`` the length limit.
    """

    def __init__(
        self,
        *,
        passes: int | None = None,
        max_length: int | None = None,
        lineno: int | None = None,
    ) -> None:
        self.passes = passes
        self.max_length = max_length
        if max_length is not None:
            detail = f"added more than {max_length} characters"
        else:
            detail = f"still expanding after {passes} passes"
        super().__init__(
            f"variable substitution {detail} (cyclic definition?)",
            lineno=lineno,
        )


class RenderError(DocMarkError):
    """Error during HTML rendering.

    Raised when the renderer is handed something that is not a docmark node.
    """

    pass
