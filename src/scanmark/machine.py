"""Callback hooks invoked during a scan.

A *machine* is any object the caller hands to the parser to observe the
scan as it happens. All hooks are optional:

- ``flush(text, state)``: every literal text span, as it is appended
- ``finish(state)``: once, when the scan completes
- ``start_<token>(info, state)``: on START/UNIT events of ``<token>``
- ``end_<token>(info, state)``: on END events of ``<token>``

Per-token hooks may also live on the descriptor itself (``on_start`` /
``on_end``); the descriptor's callback runs first, then the machine's
method. Hooks are resolved once when the parser is built, not per event.

Example:
    >>> class Printer(BaseMachine):
    ...     def flush(self, text, state):
    ...         print(text, end="")
    ...     def start_tag(self, info, state):
    ...         print(f"<{info}>", end="")
    ...     def end_tag(self, info, state):
    ...         print(f"</{info}>", end="")

Thread Safety:
The engine makes no claim about hooks. A machine that keeps state (for
instance a stack of tag names) is owned by the caller; do not share it
across concurrent parses.

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from scanmark.registry import TokenRegistry
    from scanmark.state import ScanState


@runtime_checkable
class Machine(Protocol):
    """Protocol for scan observers."""

    def flush(self, text: str, state: ScanState) -> None:
        """Called with each literal text span appended to the tree."""
        ...

    def finish(self, state: ScanState) -> None:
        """Called exactly once when no further boundary exists."""
        ...


class BaseMachine:
    """Machine with no-op hooks; subclass and override what you need."""

    def flush(self, text: str, state: ScanState) -> None:
        pass

    def finish(self, state: ScanState) -> None:
        pass


_Hook: TypeAlias = "Callable[[Any, ScanState], object]"


class CallbackDispatcher:
    """Resolved hook table for one parser.

    Built once from a registry and an optional machine. Dispatch methods
    are then plain lookups; a missing hook costs a dict miss.
    Exceptions raised by hooks propagate unchanged and abort the parse.
    """

    __slots__ = ("_flush", "_finish", "_start", "_end")

    def __init__(self, registry: TokenRegistry, machine: object | None = None) -> None:
        self._flush: Callable[[str, ScanState], object] | None = _method(machine, "flush")
        self._finish: Callable[[ScanState], object] | None = _method(machine, "finish")
        self._start: dict[str, tuple[_Hook, ...]] = {}
        self._end: dict[str, tuple[_Hook, ...]] = {}

        for descriptor in registry:
            starts = [descriptor.on_start, _method(machine, f"start_{descriptor.name}")]
            self._start[descriptor.name] = tuple(h for h in starts if h is not None)
            if descriptor.unit:
                continue
            ends = [descriptor.on_end, _method(machine, f"end_{descriptor.name}")]
            self._end[descriptor.name] = tuple(h for h in ends if h is not None)

    def flush(self, text: str, state: ScanState) -> None:
        if self._flush is not None:
            self._flush(text, state)

    def start(self, token: str, info: Any, state: ScanState) -> None:
        for hook in self._start.get(token, ()):
            hook(info, state)

    def end(self, token: str, info: Any, state: ScanState) -> None:
        for hook in self._end.get(token, ()):
            hook(info, state)

    def finish(self, state: ScanState) -> None:
        if self._finish is not None:
            self._finish(state)


def _method(machine: object | None, name: str) -> Any:
    """Bound method ``name`` of ``machine`` if it is callable, else None."""
    if machine is None:
        return None
    hook = getattr(machine, name, None)
    return hook if callable(hook) else None
