"""Recover text from a ParseTree.

Example:
    >>> tree = parser.parse("[p]Hello [b]World[b.][p.]\\n")
    >>> reconstruct(tree) == tree.text
    True
    >>> inner_text(tree, tree.children[0])
    'Hello World'
"""

from collections.abc import Iterator

from scanmark.nodes import Node, ParseTree, Text


def reconstruct(tree: ParseTree) -> str:
    """Rebuild the scanned input from the tree alone.

    Concatenates, in document order, every text child and every marker
    span recorded on the nodes. The only characters the tree does not
    carry are the single newlines stripped at END and FINISH; each such
    one-character gap is refilled with ``"\\n"``.

    Raises:
        ValueError: If the tree has a gap that is not a stripped newline
    """
    parts: list[str] = []
    cursor = 0

    def emit(start: int, stop: int) -> None:
        nonlocal cursor
        if start != cursor:
            gap = tree.text[cursor:start]
            if gap != "\n":
                msg = f"unexpected gap {gap!r} at [{cursor}, {start})"
                raise ValueError(msg)
            parts.append("\n")
        parts.append(tree.text[start:stop])
        cursor = stop

    # Each entry is a node whose closing marker is emitted once its children run out
    stack: list[tuple[Node, Iterator[Text | int]]] = [(tree.root, iter(tree.root.children))]
    while stack:
        node, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            close = node.close_span
            if close is not None:
                emit(close.start, close.stop)
            continue
        if isinstance(child, Text):
            emit(child.span.start, child.span.stop)
            continue
        sub = tree.nodes[child]
        assert sub.open_span is not None
        emit(sub.open_span.start, sub.open_span.stop)
        if not sub.unit:
            stack.append((sub, iter(sub.children)))

    emit(len(tree.text), len(tree.text))
    return "".join(parts)


def inner_text(tree: ParseTree, node: Node | None = None) -> str:
    """Concatenated text content of ``node``'s subtree (markers excluded)."""
    node = tree.root if node is None else node
    parts: list[str] = []
    pending: list[Text | int] = list(reversed(node.children))
    while pending:
        child = pending.pop()
        if isinstance(child, Text):
            parts.append(child.content)
        else:
            pending.extend(reversed(tree.nodes[child].children))
    return "".join(parts)
