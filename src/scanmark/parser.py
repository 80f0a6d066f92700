"""Scan driver producing a ParseTree.

The parser loops over two steps until no boundary is left:

1. Resolve the nearest event (see ``scanmark.resolver``).
2. Apply it to the tree and fire the matching hooks.

Transitions:
- START: flush text up to the marker, open a node, push it on the stack
- END: flush text (minus one trailing newline), pop the innermost node
  and record its outer and inner ranges
- UNIT: flush text, append a closed leaf node; the stack is untouched
- FINISH: flush the rest of the text (minus one trailing newline), call
  the finish hook and stop

Every non-terminal transition moves the cursor strictly forward (the
resolver rejects empty matches), so the loop always terminates.

Unterminated tokens:
By default a token still open at FINISH stays in the tree with its
``open_span`` set and ``outer_range``/``inner_range`` left as None, and a
warning is logged. With ``ScanConfig(strict=True)`` the parse raises
UnterminatedTokenError instead.

Thread Safety:
A Parser holds only its immutable registry and resolved hooks. Parsing
different texts with one parser from several threads is safe when the
probes and hooks are. Each parse() call builds its own ScanState.

"""

from __future__ import annotations

from collections.abc import Iterable

from scanmark.config import ScanConfig, get_scan_config
from scanmark.errors import NestingDepthError, UnterminatedTokenError
from scanmark.location import SourceLocation
from scanmark.machine import CallbackDispatcher
from scanmark.nodes import ParseTree, Span
from scanmark.profiling import get_scan_accumulator
from scanmark.registry import TokenRegistry
from scanmark.resolver import resolve_event
from scanmark.state import Event, EventKind, ScanState
from scanmark.tokens import TokenDescriptor
from scanmark.utils.logger import get_logger

logger = get_logger(__name__)


class Parser:
    """Stack-based scanner for caller-defined tokens.

    Usage:
            >>> parser = Parser([tag, entity])
            >>> tree = parser.parse("[p]Hello &tm;[p.]")
            >>> tree.outline()
        [('p', ['Hello ', ('entity', [])])]

    Args:
        tokens: A TokenRegistry, or descriptors in precedence order
        machine: Optional object with hook methods (see scanmark.machine)

    Raises:
        RegistrationError: If a descriptor is invalid

    """

    __slots__ = ("_registry", "_machine", "_dispatch")

    def __init__(
        self,
        tokens: TokenRegistry | Iterable[TokenDescriptor],
        machine: object | None = None,
    ) -> None:
        if isinstance(tokens, TokenRegistry):
            self._registry = tokens
        else:
            self._registry = TokenRegistry.from_tokens(*tokens)
        self._machine = machine
        self._dispatch = CallbackDispatcher(self._registry, machine)

    @property
    def registry(self) -> TokenRegistry:
        return self._registry

    @property
    def machine(self) -> object | None:
        return self._machine

    def parse(self, text: str) -> ParseTree:
        """Scan ``text`` once, left to right, and build its tree.

        Args:
            text: Complete input

        Returns:
            The finished ParseTree

        Raises:
            ProbeContractViolation: If a probe breaks its contract
            UnterminatedTokenError: In strict mode, if tokens remain open
            NestingDepthError: If ``max_depth`` is exceeded
        """
        config = get_scan_config()
        state = ScanState(text)
        accumulator = get_scan_accumulator()

        while not state.finished:
            state.clear_event()
            event = resolve_event(self._registry, state)
            if event is None:
                self._finish(state, config)
                break

            state.event = event
            if accumulator is not None:
                accumulator.record_event(event.kind.name)
            logger.debug(
                "%s %r at [%d, %d) depth=%d",
                event.kind.name,
                event.token.name,
                event.begin,
                event.end,
                state.stack.depth,
            )

            match event.kind:
                case EventKind.START:
                    self._start(state, event, config)
                case EventKind.END:
                    self._end(state, event, config)
                case EventKind.UNIT:
                    self._unit(state, event, config)

        if accumulator is not None:
            accumulator.record_parse(len(text), len(state.tree))
        return state.tree

    # -- transitions -----------------------------------------------------------

    def _start(self, state: ScanState, event: Event, config: ScanConfig) -> None:
        if config.max_depth is not None and state.stack.depth >= config.max_depth:
            loc = SourceLocation.from_offset(state.text, event.begin)
            raise NestingDepthError(
                event.token.name,
                config.max_depth,
                offset=event.begin,
                lineno=loc.lineno,
                col_offset=loc.col_offset,
            )

        self._flush(state, state.text[state.offset : event.begin], config, strip=False)
        node = state.tree.new_node(
            state.current.index,
            event.token.name,
            event.info,
            Span(event.begin, event.end),
            unit=False,
        )
        state.stack._push(node.index)
        state.advance(event.end)
        self._dispatch.start(event.token.name, event.info, state)

    def _end(self, state: ScanState, event: Event, config: ScanConfig) -> None:
        self._flush(state, state.text[state.offset : event.begin], config, strip=True)
        node = state.stack._pop()
        assert node.open_span is not None
        node.outer_range = Span(node.open_span.start, event.end)
        node.inner_range = Span(node.open_span.stop, event.begin)
        state.advance(event.end)
        self._dispatch.end(event.token.name, node.info, state)

    def _unit(self, state: ScanState, event: Event, config: ScanConfig) -> None:
        self._flush(state, state.text[state.offset : event.begin], config, strip=False)
        state.tree.new_node(
            state.current.index,
            event.token.name,
            event.info,
            Span(event.begin, event.end),
            unit=True,
        )
        state.advance(event.end)
        self._dispatch.start(event.token.name, event.info, state)

    def _finish(self, state: ScanState, config: ScanConfig) -> None:
        self._flush(state, state.text[state.offset :], config, strip=True)
        state.advance(len(state.text))
        self._dispatch.finish(state)
        state.finished = True

        if state.stack:
            names = state.stack.names()
            if config.strict:
                first = state.stack[0]
                assert first.open_span is not None
                loc = SourceLocation.from_offset(state.text, first.open_span.start)
                raise UnterminatedTokenError(
                    names,
                    offset=first.open_span.start,
                    lineno=loc.lineno,
                    col_offset=loc.col_offset,
                )
            logger.warning("Scan finished with unterminated token(s): %s", ", ".join(names))

    def _flush(
        self,
        state: ScanState,
        chunk: str,
        config: ScanConfig,
        *,
        strip: bool,
    ) -> None:
        """Append a literal text span to the current node and report it."""
        start = state.offset
        if strip and config.strip_trailing_newline and chunk.endswith("\n"):
            chunk = chunk[:-1]
        if chunk:
            state.tree.append_text(state.current.index, chunk, start)
        if chunk or config.flush_empty:
            self._dispatch.flush(chunk, state)
