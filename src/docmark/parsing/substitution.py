"""Variable substitution for docmark text runs.

``:name: value`` lines define bindings; ``{name}`` references in headers,
cells, list items and paragraphs expand to the value before inline parsing.

Bindings are an ordered, append-only list of ``(name, value)`` pairs owned
by a single parse and passed in explicitly. Lookup always returns the
first binding with a matching name, so a later redefinition never shadows
an earlier one.

Expansion repeats over the whole text until a pass changes nothing, which
lets one variable refer to another. Cyclic definitions never settle; the
pass count is capped by ``ParseConfig.max_substitution_passes`` and the
characters expansion may add by ``ParseConfig.max_substitution_length``.

"""

from __future__ import annotations

from collections.abc import Sequence

from docmark.config import get_parse_config
from docmark.errors import SubstitutionLimitError
from docmark.lexer.classifiers import VARIABLE_NAME_CHARS
from docmark.utils.logger import get_logger

logger = get_logger(__name__)

type Bindings = Sequence[tuple[str, str]]


def lookup(bindings: Bindings, name: str) -> str | None:
    """Value of the first binding named ``name``, or None."""
    for var, value in bindings:
        if var == name:
            return value
    return None


def _substitute_once(
    text: str, bindings: Bindings, ceiling: int
) -> tuple[str, bool] | None:
    """Run one left-to-right expansion pass.

    Returns the new text and whether anything was replaced, or None as soon
    as the output would grow past ``ceiling`` characters. ``\\\\`` and
    ``\\{`` are copied through with their backslash; stripping it is the
    inline parser's job.
    """
    out: list[str] = []
    changed = False
    i = 0
    text_len = len(text)
    # Net length change of this pass
    growth = 0

    while i < text_len:
        char = text[i]

        if char == "\\" and i + 1 < text_len and text[i + 1] in "\\{":
            out.append(text[i : i + 2])
            i += 2
            continue

        if char == "{":
            j = i + 1
            while j < text_len and text[j] in VARIABLE_NAME_CHARS:
                j += 1
            if j > i + 1 and j < text_len and text[j] == "}":
                value = lookup(bindings, text[i + 1 : j])
                if value is not None:
                    growth += len(value) - (j + 1 - i)
                    if text_len + growth > ceiling:
                        return None
                    out.append(value)
                    changed = True
                    i = j + 1
                    continue

        out.append(char)
        i += 1

    return "".join(out), changed


def substitute(
    text: str,
    bindings: Bindings,
    *,
    max_passes: int | None = None,
    max_length: int | None = None,
    lineno: int | None = None,
) -> str:
    """Expand ``{name}`` references until the text stops changing.

    Args:
        text: Raw header/cell/item/paragraph text
        bindings: Ordered ``(name, value)`` pairs defined so far
        max_passes: Pass limit; defaults to the active ParseConfig
        max_length: How many characters expansion may add in total;
            defaults to the active ParseConfig
        lineno: Line number for diagnostics

    Returns:
        Expanded text. Unknown names are left as written.

    Raises:
        SubstitutionLimitError: If a limit is hit and the active config
            has ``strict_substitution`` set.

    Example:
        >>> substitute("Hello {who}", [("who", "{name}"), ("name", "World")])
        'Hello World'
    """
    if not bindings or "{" not in text:
        return text

    config = get_parse_config()
    limit = max_passes if max_passes is not None else config.max_substitution_passes
    budget = max_length if max_length is not None else config.max_substitution_length
    ceiling = len(text) + budget

    for _ in range(limit):
        result = _substitute_once(text, bindings, ceiling)
        if result is None:
            if config.strict_substitution:
                raise SubstitutionLimitError(max_length=budget, lineno=lineno)
            logger.warning(
                "Variable substitution added more than %d characters (line %s); "
                "keeping partial result",
                budget,
                lineno if lineno is not None else "?",
            )
            return text
        text, changed = result
        if not changed:
            return text

    # The last allowed pass may have been the one that settled it
    result = _substitute_once(text, bindings, ceiling)
    if result is not None and not result[1]:
        return text

    if config.strict_substitution:
        raise SubstitutionLimitError(passes=limit, lineno=lineno)
    logger.warning(
        "Variable substitution still expanding after %d passes (line %s); "
        "keeping partial result",
        limit,
        lineno if lineno is not None else "?",
    )
    return text


__all__ = ["Bindings", "lookup", "substitute"]
