"""Render parsed hunks into display text."""

import re
from collections.abc import Sequence

from git_slides.diff.domain.value_objects import DiffHunk, LineType
from git_slides.diff.services.range_service import compress_to_ranges, join_ranges

HUNK_SEPARATOR = "// ..."

LINE_PREFIXES: dict[LineType, str] = {
    LineType.CONTEXT: "  ",
    LineType.REMOVED: "- ",
    LineType.ADDED: "+ ",
}

_LEADING_WHITESPACE_RE = re.compile(r"^\s*")


def deindent(text: str) -> str:
    """
    Remove the common leading whitespace of all non-blank lines.

    Blank lines do not count towards the minimum and are left as they are.
    """
    lines = text.split("\n")
    indents = [
        len(_LEADING_WHITESPACE_RE.match(line).group(0))  # type: ignore[union-attr]
        for line in lines
        if line.strip()
    ]
    if not indents:
        return text

    min_indent = min(indents)
    if min_indent == 0:
        return text

    return "\n".join(line[min_indent:] if line.strip() else line for line in lines)


def format_diff_content(
    hunks: Sequence[DiffHunk],
    include_removed: bool = False,
    line_change_display: str | None = None,
) -> str:
    """
    Render hunks as code text.

    Hunks are separated by a ``// ...`` line. In ``full-diff`` display every
    line gets a ``"  "``, ``"- "`` or ``"+ "`` prefix; otherwise raw content
    is emitted. The result is deindented.

    Args:
        hunks: Hunks to render
        include_removed: Whether removed lines are emitted
        line_change_display: ``additions-only`` or ``full-diff``

    Returns:
        Rendered text, empty for no hunks
    """
    with_prefixes = line_change_display == "full-diff"
    output: list[str] = []

    for index, hunk in enumerate(hunks):
        for line in hunk.lines:
            if line.line_type is LineType.REMOVED and not include_removed:
                continue
            if with_prefixes:
                output.append(LINE_PREFIXES[line.line_type] + line.content)
            else:
                output.append(line.content)

        if index < len(hunks) - 1:
            output.append(HUNK_SEPARATOR)

    return deindent("\n".join(output))


def extracted_added_positions(
    hunks: Sequence[DiffHunk], include_removed: bool = False
) -> list[int]:
    """
    Find the 1-based positions of added lines in ``format_diff_content`` output.

    Replays the same skipping and separator insertion, so the positions match
    the extracted text rather than the post-image line numbers.
    """
    positions: list[int] = []
    current = 1

    for index, hunk in enumerate(hunks):
        for line in hunk.lines:
            if line.line_type is LineType.REMOVED and not include_removed:
                continue
            if line.line_type is LineType.ADDED:
                positions.append(current)
            current += 1

        if index < len(hunks) - 1:
            current += 1  # separator line

    return positions


def calculate_diff_highlights(
    hunks: Sequence[DiffHunk], include_removed: bool, mode: str
) -> str:
    """
    Build the highlight string for diff-extracted content.

    Args:
        hunks: Hunks rendered by ``format_diff_content``
        include_removed: Same flag passed to ``format_diff_content``
        mode: ``stepped`` or ``all``

    Returns:
        Highlight string, empty when no added lines are shown
    """
    positions = extracted_added_positions(hunks, include_removed)
    if not positions:
        return ""
    return join_ranges(compress_to_ranges(positions), mode)
