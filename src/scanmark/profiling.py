"""ScanAccumulator: opt-in profiling for scans.

This module provides accumulated metrics during parsing:
- Total elapsed time
- Text length scanned
- Node count in resulting trees
- Event counts by kind

Zero overhead when disabled (get_scan_accumulator() returns None).

Example:
    from scanmark.profiling import profiled_scan

    with profiled_scan() as metrics:
        tree = parser.parse(text)

    print(metrics.summary())
    # {"total_ms": 0.4, "text_length": 28, "node_count": 3, ...}

"""

from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ScanAccumulator:
    """Accumulated metrics during scanning.

    Attributes:
        start_time: Profiling start timestamp.
        text_length: Total length of texts scanned.
        node_count: Total token nodes produced.
        parse_calls: Number of parse() calls recorded.
        events: Event counts keyed by kind name (START, END, UNIT).

    """

    start_time: float = field(default_factory=perf_counter)
    text_length: int = 0
    node_count: int = 0
    parse_calls: int = 0
    events: Counter[str] = field(default_factory=Counter)

    def record_event(self, kind: str) -> None:
        self.events[kind] += 1

    def record_parse(self, text_length: int, node_count: int) -> None:
        """Record a completed parse call.

        Args:
            text_length: Length of the text scanned.
            node_count: Number of token nodes in the result.

        """
        self.parse_calls += 1
        self.text_length += text_length
        self.node_count += node_count

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "text_length": self.text_length,
            "node_count": self.node_count,
            "parse_calls": self.parse_calls,
            "events": dict(sorted(self.events.items())),
        }


_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Creates a ScanAccumulator and makes it available via
    get_scan_accumulator() for the duration of the with block.

    Yields:
        ScanAccumulator that will be populated during parse calls.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
