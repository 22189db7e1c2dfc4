"""Container stack for nested grouped and table blocks.

Tracks which delimited containers enclose the block being parsed, so that
open-ended constructs (paragraphs, simple list items) stop at a closing
line that belongs to an enclosing container instead of swallowing it:

    {
    some text
    }           <- ends the paragraph, then closes the group

An inner container also treats an outer closing line as an implicit close
of its own, matching the "unterminated constructs end at EOF" rule.

Usage:
    stack = ContainerStack()
    stack.push(ContainerType.GROUP)
    stack.closes("}")    # True
    stack.pop()
"""

from __future__ import annotations

from collections import Counter
from enum import Enum

from docmark.lexer.classifiers import GROUP_END, TABLE_DELIMITER


class ContainerType(Enum):
    """Delimited containers and the line that closes each."""

    GROUP = GROUP_END
    TABLE = TABLE_DELIMITER

    @property
    def closer(self) -> str:
        return self.value


class ContainerStack:
    """Stack of open containers, innermost last."""

    __slots__ = ("_frames", "_open_closers")

    def __init__(self) -> None:
        self._frames: list[ContainerType] = []
        self._open_closers: Counter[str] = Counter()

    def push(self, container: ContainerType) -> None:
        self._frames.append(container)
        self._open_closers[container.closer] += 1

    def pop(self) -> ContainerType:
        container = self._frames.pop()
        self._open_closers[container.closer] -= 1
        return container

    def closes(self, line: str) -> bool:
        """Whether ``line`` closes any open container."""
        return self._open_closers[line] > 0

    @property
    def depth(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)
