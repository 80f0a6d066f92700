"""
scanmark — Markup-Agnostic Scanning Engine

Declare a priority-ordered set of token descriptors and scanmark scans a
text once, left to right, building a nested tree of text spans and
matched tokens while calling your hooks at each boundary. Bespoke inline
markup (tag-like pairs, entity-like units) without a grammar compiler.

Quick Start:
    >>> from scanmark import parse, token, unit_token
    >>> from scanmark.probes import regex_start, regex_stop
    >>> tag = token("tag", regex_start(r"\\[(\\w+)\\]"), regex_stop(r"\\[{info}\\.\\]"))
    >>> entity = unit_token("entity", regex_start(r"&(\\w+);"))
    >>> tree = parse("[p]Hello [b]World[b.]&tm;[p.]", [tag, entity])
    >>> tree.outline()
    [('tag', ['Hello ', ('tag', ['World']), ('entity', [])])]

    >>> # Or build a reusable parser with hooks
    >>> from scanmark import Parser, BaseMachine
    >>> parser = Parser([tag, entity], machine=BaseMachine())
    >>> tree = parser.parse("[b]bold[b.]")

Precedence:
    Registration order decides ties: at equal offsets a closing marker
    beats any opener, and an earlier-registered opener beats a later one.

Installation:
    pip install scanmark            # zero runtime dependencies
"""

from collections.abc import Iterable

from scanmark.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from scanmark.errors import (
    NestingDepthError,
    ProbeContractViolation,
    RegistrationError,
    ScanError,
    ScanmarkError,
    UnterminatedTokenError,
)
from scanmark.location import SourceLocation
from scanmark.machine import BaseMachine, CallbackDispatcher, Machine
from scanmark.nodes import Node, ParseTree, Span, Text
from scanmark.parser import Parser
from scanmark.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from scanmark.registry import TokenRegistry, TokenRegistryBuilder
from scanmark.resolver import resolve_event
from scanmark.serialization import from_dict, from_json, to_dict, to_json
from scanmark.state import Event, EventKind, NodeStack, ScanState
from scanmark.text import inner_text, reconstruct
from scanmark.tokens import Match, TokenDescriptor, token, unit_token
from scanmark.visitor import BaseVisitor, walk

__version__ = "0.1.0"


def parse(
    text: str,
    tokens: TokenRegistry | Iterable[TokenDescriptor],
    *,
    machine: object | None = None,
) -> ParseTree:
    """Scan ``text`` with ``tokens`` and return its tree.

    Convenience wrapper that builds a one-off Parser. Build a Parser
    yourself to reuse the registry and resolved hooks across calls.

    Args:
        text: Complete input
        tokens: A TokenRegistry, or descriptors in precedence order
        machine: Optional hook object (see scanmark.machine)

    Returns:
        ParseTree root and arena

    Example:
        >>> parse("abc\\n", []).outline()
        ['abc']

    """
    return Parser(tokens, machine=machine).parse(text)


__all__ = [
    # Core API
    "parse",
    "Parser",
    "token",
    "unit_token",
    "TokenDescriptor",
    "Match",
    "TokenRegistry",
    "TokenRegistryBuilder",
    # Tree
    "ParseTree",
    "Node",
    "Text",
    "Span",
    # Scan internals
    "ScanState",
    "NodeStack",
    "Event",
    "EventKind",
    "resolve_event",
    # Hooks
    "Machine",
    "BaseMachine",
    "CallbackDispatcher",
    # Configuration
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
    # Errors
    "ScanmarkError",
    "RegistrationError",
    "ScanError",
    "ProbeContractViolation",
    "UnterminatedTokenError",
    "NestingDepthError",
    "SourceLocation",
    # Utilities
    "reconstruct",
    "inner_text",
    "BaseVisitor",
    "walk",
    "to_dict",
    "to_json",
    "from_dict",
    "from_json",
    # Profiling
    "ScanAccumulator",
    "get_scan_accumulator",
    "profiled_scan",
]
