"""Value objects for the Diff domain."""

from dataclasses import dataclass
from enum import Enum


class LineType(str, Enum):
    """Classification of a line inside a diff hunk."""

    CONTEXT = "context"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class DiffLine:
    """One line within a hunk, prefix character stripped."""

    line_type: LineType
    content: str
    old_line_number: int | None  # None for added lines
    new_line_number: int | None  # None for removed lines


@dataclass(frozen=True)
class DiffHunk:
    """One contiguous change region delimited by an ``@@`` header.

    Attributes:
        old_start: First pre-image line number
        old_lines: Pre-image line count
        new_start: First post-image line number
        new_lines: Post-image line count
        added_line_numbers: Post-image numbers of added lines, in encounter order
        removed_line_numbers: Pre-image numbers of removed lines, in encounter order
        lines: All lines of the hunk in order
    """

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    added_line_numbers: tuple[int, ...] = ()
    removed_line_numbers: tuple[int, ...] = ()
    lines: tuple[DiffLine, ...] = ()


@dataclass(frozen=True)
class FileDiff:
    """One file's change within one commit."""

    path: str
    hunks: tuple[DiffHunk, ...]
    new_content: str | None  # Only set when the full file is displayed
    language: str
