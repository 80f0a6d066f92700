"""Per-parse scan state.

ScanState owns everything that changes while one text is scanned: the
cursor, the stack of open nodes and the most recently resolved event. It
is created by ``Parser.parse`` and discarded when the call returns.

Probes receive the NodeStack view and hooks receive the ScanState itself.
Neither should mutate them.

Thread Safety:
A ScanState belongs to exactly one parse call and is never shared.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from scanmark.nodes import ROOT_INDEX, Node, ParseTree

if TYPE_CHECKING:
    from scanmark.tokens import TokenDescriptor


class EventKind(Enum):
    """Boundaries the resolver can report."""

    START = auto()
    END = auto()
    UNIT = auto()


@dataclass(frozen=True, slots=True)
class Event:
    """The nearest upcoming boundary.

    Attributes:
        kind: START, END or UNIT
        token: Descriptor whose probe produced the match
        begin: Start of the matched marker
        end: End of the matched marker
        info: Captured data (START/UNIT); None for END

    """

    kind: EventKind
    token: TokenDescriptor
    begin: int
    end: int
    info: Any = None


class NodeStack:
    """Read-only view over the indices of currently open nodes.

    The stack always equals the path from the root to the innermost open
    node (root excluded). Stop probes use ``top()`` to read what the
    innermost opener captured.
    Only the parser moves it, through ``_push`` and ``_pop``.
    """

    __slots__ = ("_indices", "_tree")

    def __init__(self, tree: ParseTree) -> None:
        self._tree = tree
        self._indices: list[int] = []

    def top(self) -> Node | None:
        """Innermost open node, or None when nothing is open."""
        if not self._indices:
            return None
        return self._tree.nodes[self._indices[-1]]

    def _push(self, index: int) -> None:
        self._indices.append(index)

    def _pop(self) -> Node:
        return self._tree.nodes[self._indices.pop()]

    @property
    def indices(self) -> tuple[int, ...]:
        return tuple(self._indices)

    @property
    def depth(self) -> int:
        return len(self._indices)

    def names(self) -> list[str]:
        """Token names from outermost to innermost."""
        return [self._tree.nodes[i].token or "" for i in self._indices]

    def __iter__(self) -> Iterator[Node]:
        return (self._tree.nodes[i] for i in self._indices)

    def __len__(self) -> int:
        return len(self._indices)

    def __bool__(self) -> bool:
        return bool(self._indices)

    def __getitem__(self, position: int) -> Node:
        return self._tree.nodes[self._indices[position]]


class ScanState:
    """Mutable state of one scan.

    Attributes:
        text: The input, fixed for the parse
        offset: Cursor; only ever increases, bounded by ``len(text)``
        tree: Tree under construction
        stack: Open nodes
        event: Event being applied (None between iterations)
        finished: True once FINISH has been reached

    """

    __slots__ = ("text", "offset", "tree", "stack", "event", "finished")

    def __init__(self, text: str) -> None:
        self.text = text
        self.offset = 0
        self.tree = ParseTree(text)
        self.stack = NodeStack(self.tree)
        self.event: Event | None = None
        self.finished = False

    @property
    def current(self) -> Node:
        """Node that receives new children: innermost open node or root."""
        top = self.stack.top()
        return top if top is not None else self.tree.nodes[ROOT_INDEX]

    @property
    def remaining(self) -> int:
        return len(self.text) - self.offset

    def advance(self, position: int) -> None:
        """Move the cursor forward to ``position``."""
        if position < self.offset or position > len(self.text):
            msg = f"cursor cannot move from {self.offset} to {position}"
            raise ValueError(msg)
        self.offset = position

    def clear_event(self) -> None:
        self.event = None

    def __repr__(self) -> str:
        return (
            f"ScanState(offset={self.offset}, depth={self.stack.depth}, "
            f"event={self.event.kind.name if self.event else None})"
        )
