"""Source location tracking for error messages and debugging.

The scanner works purely in character offsets. SourceLocation converts an
offset into a human-readable line/column pair when an error needs to be
reported.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    All positions are 1-indexed (lineno and col_offset start at 1).
    ``offset`` is the absolute 0-indexed character offset in the input.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset (1-indexed)
        offset: Absolute offset in the scanned text
        source_file: Source file path (optional)

    Examples:
        >>> SourceLocation.from_offset("ab\\ncd", 4)
        SourceLocation(lineno=2, col_offset=2, offset=4, source_file=None)

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.txt:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(
        cls,
        text: str,
        offset: int,
        source_file: str | None = None,
    ) -> SourceLocation:
        """Resolve an absolute offset into line and column numbers.

        Offsets past the end of ``text`` are clamped to its length.

        Args:
            text: The scanned text
            offset: 0-indexed character offset
            source_file: Optional path for display

        Returns:
            SourceLocation for the offset
        """
        offset = max(0, min(offset, len(text)))
        lineno = text.count("\n", 0, offset) + 1
        line_start = text.rfind("\n", 0, offset) + 1
        return cls(
            lineno=lineno,
            col_offset=offset - line_start + 1,
            offset=offset,
            source_file=source_file,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location."""
        return cls(lineno=0, col_offset=0)
