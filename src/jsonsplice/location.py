"""Source location tracking for located JSON values.

Provides SourceLocation dataclass for tracking spans in original text.
The minimal-edit machinery relies on ``offset`` / ``end_offset`` to
replace exactly one value and nothing around it.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Span of a token or value in source text.

    Line and column are 1-indexed; offsets are 0-indexed and the end
    offset is exclusive, so ``text[loc.offset:loc.end_offset]`` is the
    spanned text.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in source buffer
        end_offset: Absolute end offset in source buffer (exclusive)
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column offset (optional)

    Examples:
        >>> loc = SourceLocation(lineno=2, col_offset=3, offset=10, end_offset=14)
        >>> str(loc)
        '2:3'
        >>> loc.length
        4

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None

    def __str__(self) -> str:
        return f"{self.lineno}:{self.col_offset}"

    @property
    def length(self) -> int:
        """Number of characters spanned."""
        return self.end_offset - self.offset

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Create a new location spanning from this location to end.

        Args:
            end: Ending location

        Returns:
            New SourceLocation with this start and end's end positions
        """
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=end.end_offset or end.offset,
            end_lineno=end.end_lineno or end.lineno,
            end_col_offset=end.end_col_offset or end.col_offset,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location."""
        return cls(lineno=0, col_offset=0)
