"""Event resolution: find the nearest upcoming boundary.

Each scan iteration asks, in order:

1. The stop probe of the innermost open token. A match becomes a pending
   END event and its begin index becomes the bound.
2. Every start probe, in registry order. A match replaces the pending
   event only if it begins strictly before the current bound.

Because replacement needs a strictly smaller index, an END wins ties
against any START/UNIT at the same offset, and among starts at the same
offset the earliest registered token wins. While the innermost open
token is raw, step 2 is skipped.

Every match is checked against the probe contract before it is used; a
zero-width match, a match before the cursor or past the end of the text
would stall or corrupt the scan and raises ProbeContractViolation.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from scanmark.errors import ProbeContractViolation
from scanmark.location import SourceLocation
from scanmark.state import Event, EventKind, ScanState
from scanmark.tokens import Match, ProbeResult, as_match

if TYPE_CHECKING:
    from scanmark.registry import TokenRegistry
    from scanmark.tokens import TokenDescriptor


def resolve_event(registry: TokenRegistry, state: ScanState) -> Event | None:
    """Determine the next event, or None for FINISH.

    Args:
        registry: Tokens in precedence order
        state: Current scan state (not modified)

    Returns:
        Nearest Event, or None if no probe matches in the remaining text

    Raises:
        ProbeContractViolation: If a probe breaks its contract
    """
    text = state.text
    offset = state.offset
    stack = state.stack
    bound = len(text)
    pending: Event | None = None

    top = stack.top()
    if top is not None:
        # The registry guarantees every open (non-unit) token has a stop probe.
        descriptor = registry.get(top.token or "")
        assert descriptor is not None and descriptor.stop is not None
        match = _checked(descriptor, descriptor.stop(text, offset, stack), state)
        if match is not None:
            pending = Event(EventKind.END, descriptor, match.begin, match.end)
            bound = match.begin
        if descriptor.raw:
            return pending

    for descriptor in registry:
        assert descriptor.start is not None
        match = _checked(descriptor, descriptor.start(text, offset, stack), state)
        if match is not None and match.begin < bound:
            kind = EventKind.UNIT if descriptor.unit else EventKind.START
            pending = Event(kind, descriptor, match.begin, match.end, match.info)
            bound = match.begin

    return pending


def _checked(descriptor: TokenDescriptor, result: ProbeResult, state: ScanState) -> Match | None:
    """Normalize a probe result and enforce forward progress."""
    try:
        match = as_match(result)
    except TypeError as e:
        raise _violation(descriptor, str(e), state, state.offset) from e
    if match is None:
        return None

    begin, end = match.begin, match.end
    if not isinstance(begin, int) or not isinstance(end, int):
        msg = f"non-integer match bounds {begin!r}, {end!r}"
        raise _violation(descriptor, msg, state, state.offset)
    if begin < state.offset:
        msg = f"match begins at {begin}, before the cursor at {state.offset}"
        raise _violation(descriptor, msg, state, begin)
    if end <= begin:
        msg = f"empty or inverted match [{begin}, {end})"
        raise _violation(descriptor, msg, state, begin)
    if end > len(state.text):
        msg = f"match ends at {end}, past the end of the text ({len(state.text)})"
        raise _violation(descriptor, msg, state, begin)
    return match


def _violation(
    descriptor: TokenDescriptor,
    message: str,
    state: ScanState,
    offset: int,
) -> ProbeContractViolation:
    loc = SourceLocation.from_offset(state.text, offset)
    return ProbeContractViolation(
        descriptor.name,
        message,
        offset=offset,
        lineno=loc.lineno,
        col_offset=loc.col_offset,
    )
