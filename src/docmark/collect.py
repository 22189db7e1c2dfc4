"""Assemble doc-comment source text from declaration metadata.

A declaration carries its documentation as a sequence of ``doc`` attribute
values, one per comment line. The parser takes them as one buffer: every
value followed by a newline, in order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

DOC_ATTRIBUTE = "doc"


def collect_doc_comment(values: Iterable[str]) -> str:
    """Join doc-comment lines into one parser input.

    Example:
        >>> collect_doc_comment([" Adds two numbers.", "", "= Remarks"])
        ' Adds two numbers.\\n\\n= Remarks\\n'
    """
    return "".join(f"{value}\n" for value in values)


def collect_from_attributes(
    attributes: Iterable[Mapping[str, str] | tuple[str, str]],
    name: str = DOC_ATTRIBUTE,
) -> str:
    """Collect the values of every ``name = value`` attribute.

    Accepts ``(name, value)`` pairs or single-entry mappings such as
    ``{"doc": "..."}``; attributes with any other name are skipped.
    """
    values: list[str] = []
    for attr in attributes:
        if isinstance(attr, Mapping):
            if name in attr:
                values.append(attr[name])
        elif attr[0] == name:
            values.append(attr[1])
    return collect_doc_comment(values)


__all__ = ["DOC_ATTRIBUTE", "collect_doc_comment", "collect_from_attributes"]
