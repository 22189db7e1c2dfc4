"""Typed document tree: collect every link target for cross-referencing."""

from docmark import parse
from docmark.nodes import Link
from docmark.visitor import BaseVisitor


class LinkCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.targets: list[str] = []

    def visit_link(self, node: Link) -> None:
        self.targets.append(node.target)


source = """Opens a file. See link:lrs_close[*close*] and link:man:open(2).

= See also

* link:lrs_read
* link:lrs_write[writing]
"""

collector = LinkCollector()
collector.visit(parse(source))
for target in collector.targets:
    print(target)
