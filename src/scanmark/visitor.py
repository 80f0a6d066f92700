"""Tree visitor for ParseTree.

Provides a base visitor class with per-token dispatch and a ``walk``
generator for flat, depth-annotated traversal.

Example — collect entity names:

    class EntityCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.names: list[str] = []

        def visit_entity(self, tree: ParseTree, node: Node) -> None:
            self.names.append(node.info)

    collector = EntityCollector()
    collector.visit(tree)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. ``walk`` only reads
    the tree.

"""

from collections.abc import Iterator
from typing import Generic, TypeVar

from scanmark.nodes import Node, ParseTree, Text

T = TypeVar("T")

# Token names that would shadow the generic hooks
_RESERVED = frozenset({"node", "text"})


class BaseVisitor(Generic[T]):
    """Base tree visitor with name-based dispatch.

    For a node of token ``tag`` the visitor calls ``visit_tag`` if it
    exists, otherwise ``visit_node``. Text children go to ``visit_text``.
    Children are walked automatically after the node's visit method, in
    document order.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, tree: ParseTree) -> None:
        """Visit every node and text child of ``tree`` in document order."""
        self._walk_children(tree, tree.root)

    def visit_node(self, tree: ParseTree, node: Node) -> T:
        """Called for nodes without a specific ``visit_<token>`` method."""
        return None  # type: ignore[return-value]

    def visit_text(self, tree: ParseTree, text: Text) -> T:
        return None  # type: ignore[return-value]

    def _dispatch(self, tree: ParseTree, node: Node) -> T:
        if node.token in _RESERVED:
            return self.visit_node(tree, node)
        method = getattr(self, f"visit_{node.token}", None)
        if method is not None and callable(method):
            return method(tree, node)
        return self.visit_node(tree, node)

    def _walk_children(self, tree: ParseTree, node: Node) -> None:
        stack = [iter(node.children)]
        while stack:
            for child in stack[-1]:
                if isinstance(child, Text):
                    self.visit_text(tree, child)
                    continue
                sub = tree.nodes[child]
                self._dispatch(tree, sub)
                stack.append(iter(sub.children))
                break
            else:
                stack.pop()


def walk(tree: ParseTree) -> Iterator[tuple[int, Text | Node]]:
    """Yield ``(depth, item)`` for every child in document order.

    Depth 0 is a direct child of the root.
    """
    pending: list[tuple[int, Text | int]] = [(0, c) for c in reversed(tree.root.children)]
    while pending:
        depth, child = pending.pop()
        if isinstance(child, Text):
            yield depth, child
            continue
        node = tree.nodes[child]
        yield depth, node
        pending.extend((depth + 1, c) for c in reversed(node.children))
