"""Exception classes for scanmark.

Two families exist. RegistrationError is raised while building a token
registry and never surfaces mid-scan. ScanError and its subclasses
terminate a parse immediately; nothing is retried.
"""

from __future__ import annotations

from collections.abc import Iterable


class ScanmarkError(Exception):
    """Base exception for all scanmark errors.

    Subclass this for specific error categories.
    """

    pass


class RegistrationError(ScanmarkError):
    """A token descriptor was rejected by the registry.

    Raised when a descriptor lacks a required probe, carries options that
    contradict its kind, or reuses a registered name.
    """

    def __init__(self, token_name: str | None, message: str) -> None:
        """Initialize registration error.

        Args:
            token_name: Name of the offending token (None if unknown)
            message: Description of the problem
        """
        self.token_name = token_name
        if token_name:
            super().__init__(f"Token '{token_name}': {message}")
        else:
            super().__init__(message)


class ScanError(ScanmarkError):
    """Error raised while a text is being scanned.

    Carries the offset at which the problem was detected and, when known,
    the matching 1-indexed line and column.
    """

    def __init__(
        self,
        message: str,
        offset: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
    ) -> None:
        """Initialize scan error with optional location.

        Args:
            message: Error description
            offset: Absolute character offset (0-indexed)
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
        """
        self.message = message
        self.offset = offset
        self.lineno = lineno
        self.col_offset = col_offset

        location = ""
        if lineno is not None:
            location = f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class ProbeContractViolation(ScanError):
    """A probe returned a match that would break forward progress.

    Raised when ``end <= begin``, ``begin < offset`` or the match runs
    past the end of the text.
    """

    def __init__(
        self,
        token_name: str,
        message: str,
        offset: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
    ) -> None:
        self.token_name = token_name
        super().__init__(
            f"Probe for token '{token_name}': {message}",
            offset=offset,
            lineno=lineno,
            col_offset=col_offset,
        )


class UnterminatedTokenError(ScanError):
    """Tokens were still open when the scan finished.

    Only raised when ``ScanConfig.strict`` is enabled. In the default
    lenient mode open nodes stay in the tree without ranges.
    """

    def __init__(
        self,
        token_names: Iterable[str],
        offset: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
    ) -> None:
        self.token_names = tuple(token_names)
        names = ", ".join(repr(name) for name in self.token_names)
        super().__init__(
            f"Unterminated token(s): {names}",
            offset=offset,
            lineno=lineno,
            col_offset=col_offset,
        )


class NestingDepthError(ScanError):
    """Opening another token would exceed ``ScanConfig.max_depth``."""

    def __init__(
        self,
        token_name: str,
        max_depth: int,
        offset: int | None = None,
        lineno: int | None = None,
        col_offset: int | None = None,
    ) -> None:
        self.token_name = token_name
        self.max_depth = max_depth
        super().__init__(
            f"Token '{token_name}' exceeds maximum nesting depth {max_depth}",
            offset=offset,
            lineno=lineno,
            col_offset=col_offset,
        )
