"""Walk the tree with a typed visitor and recover each tag's inner text."""

from scanmark import BaseVisitor, Node, ParseTree, inner_text, parse, token, unit_token
from scanmark.probes import regex_start, regex_stop


class TagCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.found: list[tuple[str, str]] = []

    def visit_tag(self, tree: ParseTree, node: Node) -> None:
        self.found.append((node.info, inner_text(tree, node)))


tokens = [
    token("tag", regex_start(r"\[(\w+)\]"), regex_stop(r"\[{info}\.\]")),
    unit_token("entity", regex_start(r"&(\w+);")),
]
tree = parse("[p]Hello [b]World[b.]&tm;[p.]", tokens)

collector = TagCollector()
collector.visit(tree)
for name, body in collector.found:
    print(f"{name}: {body!r}")
