"""ContextVar-based scan configuration for scanmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The parser reads the active config once at the start of every parse.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    from scanmark.config import ScanConfig, scan_config_context

    with scan_config_context(ScanConfig(strict=True)):
        tree = parser.parse(text)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Immutable scan configuration.

    Attributes:
        strip_trailing_newline: Drop one trailing newline from text flushed
            at END and FINISH events. Only ``"\\n"`` is dropped; the ``"\\r"``
            of a ``"\\r\\n"`` ending stays in the text.
        flush_empty: Call the flush hook for empty text slices too
        strict: Raise UnterminatedTokenError when tokens are still open at
            FINISH instead of leaving them open in the tree
        max_depth: Maximum number of simultaneously open tokens (None for
            unlimited)

    """

    strip_trailing_newline: bool = True
    flush_empty: bool = False
    strict: bool = False
    max_depth: int | None = None

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ScanConfig":
        """Create ScanConfig from dictionary.

        Only includes keys that are valid ScanConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> ScanConfig.from_dict({"strict": True, "unknown_key": 1}).strict
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ScanConfig = ScanConfig()

_scan_config: ContextVar[ScanConfig] = ContextVar(
    "scan_config",
    default=_DEFAULT_CONFIG,
)


def get_scan_config() -> ScanConfig:
    """Get current scan configuration (thread-local)."""
    return _scan_config.get()


def set_scan_config(config: ScanConfig) -> None:
    """Set scan configuration for current context.

    Args:
        config: ScanConfig instance to use for this context.

    """
    _scan_config.set(config)


def reset_scan_config() -> None:
    """Reset to default configuration."""
    _scan_config.set(_DEFAULT_CONFIG)


@contextmanager
def scan_config_context(config: ScanConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Properly restores the previous config even if an exception is raised.

    Example:
        >>> with scan_config_context(ScanConfig(strict=True)):
        ...     tree = parser.parse("[p]open")
        Traceback (most recent call last):
        ...
        scanmark.errors.UnterminatedTokenError: ...

    """
    previous = _scan_config.get()
    _scan_config.set(config)
    try:
        yield
    finally:
        _scan_config.set(previous)


__all__ = [
    "ScanConfig",
    "get_scan_config",
    "reset_scan_config",
    "scan_config_context",
    "set_scan_config",
]
