"""Parse tree produced by the scanner.

The tree is stored as an arena: every Node lives in ``ParseTree.nodes``
and refers to its parent and child nodes by index. Index 0 is the root,
an implicit container with no token and no ranges. Text children are
stored inline as ``Text`` records.

Tree Shape:
ParseTree
└── nodes[0] (root)
    ├── Text
    ├── Node (paired token)
    │   ├── Text
    │   └── Node (unit token, never has children)
    └── Text

Ranges:
- ``open_span``: the opening marker (or the whole marker for units)
- ``outer_range``: opening marker through closing marker
- ``inner_range``: content strictly between the two markers

A paired node that was never closed keeps ``outer_range`` and
``inner_range`` set to None.

Thread Safety:
A ParseTree is built by exactly one parse call. Once returned it is not
mutated by the library and may be read from any thread.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, NamedTuple

ROOT_INDEX = 0


class Span(NamedTuple):
    """Half-open character range ``[start, stop)``."""

    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start

    def contains(self, other: Span) -> bool:
        """Whether ``other`` lies entirely within this span."""
        return self.start <= other.start and other.stop <= self.stop

    def slice(self, text: str) -> str:
        """The characters of ``text`` covered by this span."""
        return text[self.start : self.stop]


@dataclass(frozen=True, slots=True)
class Text:
    """Literal text between markers.

    ``span`` covers ``content`` exactly; a trailing newline removed during
    flushing lies just outside it.
    """

    content: str
    span: Span


@dataclass(slots=True)
class Node:
    """A matched token in the tree.

    Attributes:
        index: Position in the arena
        token: Token name (None for the root)
        info: Data captured by the opening probe
        parent: Arena index of the enclosing node (None for the root)
        children: Text records and arena indices of child nodes, in
            document order
        open_span: Span of the opening marker
        outer_range: Full span including both markers, once closed
        inner_range: Content span between the markers, once closed
        unit: True for unit tokens

    """

    index: int
    token: str | None = None
    info: Any = None
    parent: int | None = None
    children: list[Text | int] = field(default_factory=list)
    open_span: Span | None = None
    outer_range: Span | None = None
    inner_range: Span | None = None
    unit: bool = False

    @property
    def is_root(self) -> bool:
        return self.index == ROOT_INDEX

    @property
    def closed(self) -> bool:
        """True once the node has its outer range (units close at once)."""
        return self.outer_range is not None

    @property
    def close_span(self) -> Span | None:
        """Span of the closing marker, if the node is a closed pair."""
        if self.unit or self.outer_range is None or self.inner_range is None:
            return None
        return Span(self.inner_range.stop, self.outer_range.stop)

    def __repr__(self) -> str:
        if self.is_root:
            return f"Node(root, children={len(self.children)})"
        state = "unit" if self.unit else ("closed" if self.closed else "open")
        return f"Node({self.token!r}, info={self.info!r}, {state}, children={len(self.children)})"


class ParseTree:
    """Arena-backed tree returned by ``Parser.parse``.

    Example:
        >>> tree = parser.parse("[p]Hi[p.]")
        >>> tree.outline()
        [('p', ['Hi'])]
        >>> tree.children[0].inner_range
        Span(start=3, stop=5)

    """

    __slots__ = ("text", "nodes")

    def __init__(self, text: str, nodes: list[Node] | None = None) -> None:
        self.text = text
        self.nodes: list[Node] = nodes if nodes is not None else [Node(ROOT_INDEX)]

    # -- arena construction ----------------------------------------------------

    def new_node(self, parent: int, token: str, info: Any, open_span: Span, *, unit: bool) -> Node:
        """Create a node and append it to ``parent``'s children."""
        node = Node(
            index=len(self.nodes),
            token=token,
            info=info,
            parent=parent,
            open_span=open_span,
            unit=unit,
        )
        if unit:
            node.outer_range = open_span
        self.nodes.append(node)
        self.nodes[parent].children.append(node.index)
        return node

    def append_text(self, parent: int, content: str, start: int) -> Text:
        """Append a text child to ``parent``."""
        text = Text(content, Span(start, start + len(content)))
        self.nodes[parent].children.append(text)
        return text

    # -- access ----------------------------------------------------------------

    @property
    def root(self) -> Node:
        return self.nodes[ROOT_INDEX]

    @property
    def children(self) -> list[Text | Node]:
        """Resolved children of the root."""
        return self.children_of(self.root)

    def node(self, index: int) -> Node:
        return self.nodes[index]

    def children_of(self, node: Node) -> list[Text | Node]:
        """Children of ``node`` with arena indices resolved to Nodes."""
        return [self.nodes[c] if isinstance(c, int) else c for c in node.children]

    def parent_of(self, node: Node) -> Node | None:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def ancestors(self, node: Node) -> Iterator[Node]:
        """Enclosing nodes from the direct parent up to (excluding) the root."""
        current = self.parent_of(node)
        while current is not None and not current.is_root:
            yield current
            current = self.parent_of(current)

    def iter_nodes(self) -> Iterator[Node]:
        """All token nodes in document order (root excluded)."""
        stack = [iter(self.root.children)]
        while stack:
            for child in stack[-1]:
                if isinstance(child, int):
                    node = self.nodes[child]
                    yield node
                    stack.append(iter(node.children))
                    break
            else:
                stack.pop()

    def find_all(self, token: str) -> list[Node]:
        """Nodes of one token kind, in document order."""
        return [n for n in self.iter_nodes() if n.token == token]

    def open_nodes(self) -> list[Node]:
        """Paired nodes that never met their closing marker."""
        return [n for n in self.iter_nodes() if not n.closed]

    def outline(self, node: Node | None = None) -> list[Any]:
        """Plain nested representation, handy for tests and debugging.

        Text becomes its string content and a node becomes
        ``(token, [children...])``.
        """
        node = self.root if node is None else node
        result: list[Any] = []
        stack: list[tuple[Iterator[Text | int], list[Any]]] = [(iter(node.children), result)]
        while stack:
            children, out = stack[-1]
            for child in children:
                if isinstance(child, Text):
                    out.append(child.content)
                    continue
                sub = self.nodes[child]
                nested: list[Any] = []
                out.append((sub.token, nested))
                stack.append((iter(sub.children), nested))
                break
            else:
                stack.pop()
        return result

    def __len__(self) -> int:
        """Number of token nodes (root excluded)."""
        return len(self.nodes) - 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseTree):
            return NotImplemented
        return self.text == other.text and self.nodes == other.nodes

    def __repr__(self) -> str:
        return f"ParseTree(nodes={len(self)}, text_length={len(self.text)})"
