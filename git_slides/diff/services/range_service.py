"""Compress line numbers into reveal.js highlight ranges."""

from collections.abc import Iterable, Sequence

from git_slides.diff.domain.value_objects import DiffHunk

STEPPED_SEPARATOR = "|"
ALL_SEPARATOR = ","


def compress_to_ranges(line_numbers: Iterable[int]) -> list[str]:
    """
    Compress line numbers into contiguous ranges.

    [1, 2, 3, 5, 7, 8, 9] -> ["1-3", "5", "7-9"]

    Input order does not matter. Duplicates are not removed and split a run.

    Args:
        line_numbers: Line numbers in any order

    Returns:
        Ranges in ascending order, ``"n"`` or ``"start-end"``
    """
    ordered = sorted(line_numbers)
    if not ordered:
        return []

    ranges: list[str] = []
    start = end = ordered[0]
    for current in ordered[1:]:
        if current == end + 1:
            end = current
            continue
        ranges.append(_format_range(start, end))
        start = end = current

    ranges.append(_format_range(start, end))
    return ranges


def _format_range(start: int, end: int) -> str:
    return str(start) if start == end else f"{start}-{end}"


def join_ranges(ranges: Sequence[str], mode: str) -> str:
    """Join ranges with ``|`` for stepped reveal or ``,`` for all at once."""
    separator = STEPPED_SEPARATOR if mode == "stepped" else ALL_SEPARATOR
    return separator.join(ranges)


def generate_highlight_string(hunks: Sequence[DiffHunk], mode: str) -> str:
    """
    Generate a reveal.js highlight string from hunks' added line numbers.

    All hunks' added lines are flattened before compressing, so numerically
    adjacent lines of different hunks merge into one range.

    Args:
        hunks: Parsed hunks
        mode: ``stepped`` ("1-3|5-7") or ``all`` ("1-3,5-7")

    Returns:
        Highlight string, empty when nothing was added
    """
    added = [number for hunk in hunks for number in hunk.added_line_numbers]
    if not added:
        return ""
    return join_ranges(compress_to_ranges(added), mode)
