"""Token descriptors for the scanmark engine.

A token descriptor bundles everything the engine needs to know about one
kind of marker under a single name:

- ``start``: probe locating the next opening marker (required)
- ``stop``: probe locating the closing marker of the innermost open node
  (required unless the token is a unit)
- ``on_start`` / ``on_end``: optional callbacks fired during the scan

Probes are plain callables ``(text, offset, stack) -> match | None``. A
match is a ``Match`` or any ``(begin, end)`` / ``(begin, end, info)``
tuple, where ``begin`` is the leftmost occurrence at or after ``offset``.
``info`` is opaque caller data captured at open time and handed back to
the stop probe (through ``stack.top().info``) and to the callbacks.

Thread Safety:
TokenDescriptor is frozen. A descriptor is safe to share across threads
as long as its probes and callbacks hold no shared mutable state.

Example:
    >>> import re
    >>> from scanmark.tokens import token
    >>> def start(text, offset, stack):
    ...     m = re.compile(r"\\[(\\w+)\\]").search(text, offset)
    ...     return (m.start(), m.end(), m[1]) if m else None
    >>> def stop(text, offset, stack):
    ...     m = re.compile(rf"\\[{stack.top().info}\\.\\]").search(text, offset)
    ...     return (m.start(), m.end()) if m else None
    >>> tag = token("tag", start, stop)

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple, TypeAlias

if TYPE_CHECKING:
    from scanmark.state import NodeStack, ScanState


class Match(NamedTuple):
    """A located marker: ``text[begin:end]`` plus captured ``info``."""

    begin: int
    end: int
    info: Any = None


ProbeResult: TypeAlias = "Match | tuple[int, int] | tuple[int, int, Any] | None"
StartProbe: TypeAlias = "Callable[[str, int, NodeStack], ProbeResult]"
StopProbe: TypeAlias = "Callable[[str, int, NodeStack], ProbeResult]"
Callback: TypeAlias = "Callable[[Any, ScanState], object]"


@dataclass(frozen=True, slots=True)
class TokenDescriptor:
    """Immutable description of one kind of marker.

    Attributes:
        name: Token identity, unique within a registry
        start: Start probe
        stop: Stop probe (None for unit tokens)
        unit: True if the token closes in the same event it opens
        raw: True if the content between open and close is not tokenized
        on_start: Called with ``(info, state)`` on START and UNIT events
        on_end: Called with ``(info, state)`` on END events

    Use ``token()`` and ``unit_token()`` rather than building descriptors
    directly; the registry validates the combination either way.

    """

    name: str
    start: StartProbe | None
    stop: StopProbe | None = None
    unit: bool = False
    raw: bool = False
    on_start: Callback | None = None
    on_end: Callback | None = None

    def __repr__(self) -> str:
        kind = "unit" if self.unit else ("raw" if self.raw else "pair")
        return f"TokenDescriptor({self.name!r}, {kind})"


def token(
    name: str,
    start: StartProbe,
    stop: StopProbe,
    *,
    on_start: Callback | None = None,
    on_end: Callback | None = None,
    raw: bool = False,
) -> TokenDescriptor:
    """Create a paired token (opening marker, content, closing marker).

    Args:
        name: Token identity
        start: Probe for the opening marker
        stop: Probe for the closing marker; receives the live stack
        on_start: Optional callback for START events
        on_end: Optional callback for END events
        raw: Collect the content verbatim instead of tokenizing it

    Returns:
        TokenDescriptor
    """
    return TokenDescriptor(
        name=name,
        start=start,
        stop=stop,
        unit=False,
        raw=raw,
        on_start=on_start,
        on_end=on_end,
    )


def unit_token(
    name: str,
    start: StartProbe,
    *,
    on_start: Callback | None = None,
) -> TokenDescriptor:
    """Create a unit token (a standalone marker with no content).

    Args:
        name: Token identity
        start: Probe for the marker
        on_start: Optional callback for UNIT events

    Returns:
        TokenDescriptor
    """
    return TokenDescriptor(name=name, start=start, unit=True, on_start=on_start)


def as_match(result: ProbeResult) -> Match | None:
    """Normalize a probe result into a Match.

    Raises:
        TypeError: If the result is not None, a 2-tuple or a 3-tuple
    """
    if result is None:
        return None
    if isinstance(result, Match):
        return result
    if isinstance(result, tuple) and len(result) in (2, 3):
        return Match(*result)
    msg = f"Probe must return None or a (begin, end[, info]) tuple, got {result!r}"
    raise TypeError(msg)


__all__ = [
    "Callback",
    "Match",
    "ProbeResult",
    "StartProbe",
    "StopProbe",
    "TokenDescriptor",
    "as_match",
    "token",
    "unit_token",
]
