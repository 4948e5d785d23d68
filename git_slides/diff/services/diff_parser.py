"""Parse unified diff text into structured hunks."""

import re
from dataclasses import dataclass, field

from git_slides.diff.domain.value_objects import DiffHunk, DiffLine, LineType

# @@ -10,5 +12,7 @@ (counts are optional and default to 1)
HUNK_HEADER_RE = re.compile(r"^@@ -(\d+),?(\d*) \+(\d+),?(\d*) @@")

METADATA_PREFIXES = ("diff ", "index ", "--- ", "+++ ", "Binary ")


@dataclass
class _HunkState:
    """Hunk under construction plus the running line counters."""

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    old_line_num: int
    new_line_num: int
    added: list[int] = field(default_factory=list)
    removed: list[int] = field(default_factory=list)
    lines: list[DiffLine] = field(default_factory=list)

    def consume(self, line: str) -> None:
        if line.startswith("+"):
            self.added.append(self.new_line_num)
            self.lines.append(DiffLine(LineType.ADDED, line[1:], None, self.new_line_num))
            self.new_line_num += 1
        elif line.startswith("-"):
            self.removed.append(self.old_line_num)
            self.lines.append(DiffLine(LineType.REMOVED, line[1:], self.old_line_num, None))
            self.old_line_num += 1
        elif line.startswith(" ") or line == "":
            content = line[1:] if line.startswith(" ") else line
            self.lines.append(
                DiffLine(LineType.CONTEXT, content, self.old_line_num, self.new_line_num)
            )
            self.old_line_num += 1
            self.new_line_num += 1

    def freeze(self) -> DiffHunk:
        return DiffHunk(
            old_start=self.old_start,
            old_lines=self.old_lines,
            new_start=self.new_start,
            new_lines=self.new_lines,
            added_line_numbers=tuple(self.added),
            removed_line_numbers=tuple(self.removed),
            lines=tuple(self.lines),
        )


def _open_hunk(match: re.Match[str]) -> _HunkState:
    old_start = int(match.group(1))
    new_start = int(match.group(3))
    return _HunkState(
        old_start=old_start,
        old_lines=int(match.group(2) or "1"),
        new_start=new_start,
        new_lines=int(match.group(4) or "1"),
        old_line_num=old_start,
        new_line_num=new_start,
    )


def parse_diff_hunks(diff_text: str) -> list[DiffHunk]:
    """
    Parse unified diff output into structured hunks.

    Lines before the first hunk header and metadata lines (``diff``,
    ``index``, ``---``, ``+++``, ``Binary``) are skipped. Unrecognized lines
    such as ``\\ No newline at end of file`` are ignored. Never raises.

    Args:
        diff_text: Unified diff text

    Returns:
        Hunks in the order they appear
    """
    if not diff_text:
        return []

    lines = diff_text.split("\n")
    if diff_text.endswith("\n"):
        # Terminator of the last line, not an empty context line
        lines.pop()

    hunks: list[DiffHunk] = []
    current: _HunkState | None = None

    for line in lines:
        header = HUNK_HEADER_RE.match(line)
        if header:
            if current is not None:
                hunks.append(current.freeze())
            current = _open_hunk(header)
            continue

        if current is None:
            continue

        if line.startswith(METADATA_PREFIXES):
            continue

        current.consume(line)

    if current is not None:
        hunks.append(current.freeze())

    return hunks
