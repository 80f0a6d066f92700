"""Ready-made probe factories.

Most markup is described with regular expressions. These helpers turn a
pattern into a probe that honours the engine contract: search from
``offset`` and report the leftmost match.

Context-sensitive closing is handled by ``regex_stop``: its template is
formatted per call with the escaped ``info`` of the innermost open node,
so a closer can be required to repeat whatever the opener captured.

Example:
    >>> from scanmark.probes import regex_start, regex_stop
    >>> from scanmark.tokens import token
    >>> tag = token(
    ...     "tag",
    ...     regex_start(r"\\[(\\w+)\\]"),
    ...     regex_stop(r"\\[ *{info}\\.\\]"),
    ... )

Thread Safety:
Probes built here only read their arguments and a compiled pattern.
Patterns built by ``regex_stop`` are cached per info value behind
functools.lru_cache, which is thread-safe.

"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING

from scanmark.tokens import Match, StartProbe, StopProbe

if TYPE_CHECKING:
    from scanmark.state import NodeStack


def regex_start(
    pattern: str | re.Pattern[str],
    *,
    group: int | str | None = 1,
    flags: int = 0,
) -> StartProbe:
    """Build a start probe from a regular expression.

    Args:
        pattern: Pattern source or compiled pattern
        group: Group captured as ``info``. ``None`` captures the
            ``groupdict()`` of the match instead. With the default group 1
            a pattern without groups captures the whole match.
        flags: Regex flags (ignored for compiled patterns)

    Returns:
        Start probe

    Raises:
        ValueError: If ``group`` does not exist in the pattern
    """
    compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, flags)
    if group == 1 and compiled.groups == 0:
        group = 0
    elif isinstance(group, int) and not 0 <= group <= compiled.groups:
        msg = f"pattern {compiled.pattern!r} has no group {group}"
        raise ValueError(msg)
    elif isinstance(group, str) and group not in compiled.groupindex:
        msg = f"pattern {compiled.pattern!r} has no group {group!r}"
        raise ValueError(msg)

    def probe(text: str, offset: int, stack: NodeStack) -> Match | None:
        m = compiled.search(text, offset)
        if m is None:
            return None
        info = m.groupdict() if group is None else m.group(group)
        return Match(m.start(), m.end(), info)

    return probe


def regex_stop(template: str, *, flags: int = 0) -> StopProbe:
    """Build a context-sensitive stop probe.

    ``template`` is a pattern with a ``{info}`` placeholder that is filled
    with ``re.escape(str(info))`` of the innermost open node on each call.
    Literal braces in the pattern must be doubled (``{{2}}``).

    Args:
        template: Pattern template
        flags: Regex flags

    Returns:
        Stop probe
    """

    @lru_cache(maxsize=256)
    def compile_for(info: str) -> re.Pattern[str]:
        return re.compile(template.format(info=re.escape(info)), flags)

    def probe(text: str, offset: int, stack: NodeStack) -> Match | None:
        top = stack.top()
        info = "" if top is None or top.info is None else str(top.info)
        m = compile_for(info).search(text, offset)
        if m is None:
            return None
        return Match(m.start(), m.end())

    return probe


def literal_start(literal: str, info: object = None) -> StartProbe:
    """Build a start probe that finds a fixed string."""
    if not literal:
        msg = "literal_start requires a non-empty literal"
        raise ValueError(msg)

    def probe(text: str, offset: int, stack: NodeStack) -> Match | None:
        i = text.find(literal, offset)
        if i < 0:
            return None
        return Match(i, i + len(literal), info)

    return probe


def literal_stop(literal: str) -> StopProbe:
    """Build a stop probe that finds a fixed string."""
    if not literal:
        msg = "literal_stop requires a non-empty literal"
        raise ValueError(msg)

    def probe(text: str, offset: int, stack: NodeStack) -> Match | None:
        i = text.find(literal, offset)
        if i < 0:
            return None
        return Match(i, i + len(literal))

    return probe


__all__ = [
    "literal_start",
    "literal_stop",
    "regex_start",
    "regex_stop",
]
