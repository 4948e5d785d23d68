"""Derive template variables and code fences for slides."""

import re
from collections.abc import Sequence
from datetime import datetime

from git_slides.diff.domain.value_objects import FileDiff
from git_slides.git.domain.entities import Commit
from git_slides.slides.domain.value_objects import CommitVariables

SUBJECT_SOFT_LIMIT = 72
PERIOD_SPLIT_LIMIT = 100
MAX_SUMMARY_FILES = 5

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
FULL_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_PARAGRAPH_BREAK_RE = re.compile(r"^(.+?)\n\s*\n([\s\S]*)$")
_AUTHOR_RE = re.compile(r"^(.+?)\s*<(.+)>$")
_BACKTICK_RUN_RE = re.compile(r"`+")


def parse_commit_message(message: str) -> tuple[str, str]:
    """
    Split a commit message into title and body.

    In order of preference: the first line followed by a blank line; the
    first line followed by any newline; for a single line over 72
    characters, up to and including the first ". " if it starts before
    index 100; otherwise the whole message is the title.

    Returns:
        Tuple of (title, body)
    """
    if not message:
        return "", ""

    paragraph = _PARAGRAPH_BREAK_RE.match(message)
    if paragraph:
        return paragraph.group(1).strip(), paragraph.group(2).strip()

    newline_index = message.find("\n")
    if newline_index != -1:
        return message[:newline_index].strip(), message[newline_index + 1 :].strip()

    if len(message) > SUBJECT_SOFT_LIMIT:
        period_index = message.find(". ")
        if period_index != -1 and period_index < PERIOD_SPLIT_LIMIT:
            return message[: period_index + 1].strip(), message[period_index + 2 :].strip()

    return message.strip(), ""


def parse_author(author: str) -> tuple[str, str]:
    """Split ``"Name <email>"`` into (name, email); a bare name has no email."""
    match = _AUTHOR_RE.match(author)
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return author, ""


def format_date(date: datetime, date_format: str) -> str:
    """
    Format a date with ``yyyy yy MMMM MMM MM dd d HH mm`` tokens.

    Each token replaces its first occurrence, longest tokens first, so
    ``MMMM`` is never read as two ``MM``.
    """
    replacements = (
        ("yyyy", str(date.year)),
        ("yy", str(date.year)[-2:]),
        ("MMMM", FULL_MONTHS[date.month - 1]),
        ("MMM", MONTHS[date.month - 1]),
        ("MM", f"{date.month:02d}"),
        ("dd", f"{date.day:02d}"),
        ("d", str(date.day)),
        ("HH", f"{date.hour:02d}"),
        ("mm", f"{date.minute:02d}"),
    )
    result = date_format
    for token, value in replacements:
        result = result.replace(token, value, 1)
    return result


def get_file_name(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def build_commit_variables(commit: Commit, date_format: str) -> CommitVariables:
    """Compute the commit-level template variables."""
    title, body = parse_commit_message(commit.message)
    author_name, author_email = parse_author(commit.author)
    return CommitVariables(
        author_name=author_name,
        author_email=author_email,
        commit_date=format_date(commit.date, date_format),
        message_title=title,
        message_body=body,
        commit_hash=commit.hash,
        commit_hash_short=commit.short_hash,
    )


def build_file_summary(diff: FileDiff, all_diffs: Sequence[FileDiff]) -> str:
    """
    Summarize the other files of the same slide set.

    Returns:
        ``"Also changed: a, b and N more"``, or an empty string for a
        single file
    """
    if len(all_diffs) <= 1:
        return ""

    others = [get_file_name(d.path) for d in all_diffs if d.path != diff.path][:MAX_SUMMARY_FILES]
    if not others:
        return ""

    summary = f"Also changed: {', '.join(others)}"
    more_count = len(all_diffs) - 1 - len(others)
    if more_count > 0:
        summary += f" and {more_count} more"
    return summary


def create_safe_code_block(content: str, lang_spec: str) -> str:
    """
    Wrap content in a code fence that no backtick run inside it can close.

    The fence is one backtick longer than the longest run in the content,
    and at least three.
    """
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(content)), default=0)
    fence = "`" * max(3, longest + 1)
    return f"{fence}{lang_spec}\n{content.rstrip()}\n{fence}"
