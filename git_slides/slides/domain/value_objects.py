"""Value objects for the Slides domain."""

from dataclasses import dataclass
from enum import Enum


class SlideOrganization(str, Enum):
    """How slides are organized."""

    FLAT = "flat"
    GROUPED = "grouped"
    PROGRESSIVE = "progressive"
    PER_HUNK = "per-hunk"


class HighlightMode(str, Enum):
    """How highlighted line ranges are revealed."""

    ALL = "all"
    STEPPED = "stepped"


class LineChangeDisplay(str, Enum):
    """How removed lines are displayed."""

    ADDITIONS_ONLY = "additions-only"
    FULL_DIFF = "full-diff"


class SlideTitle(str, Enum):
    """What a slide's bookkeeping title is made of."""

    COMMIT = "commit"
    FILE = "file"
    BOTH = "both"


@dataclass(frozen=True)
class SlideFormatOptions:
    """Slide generation configuration.

    Instances are never mutated; use ``dataclasses.replace`` to derive
    changed options.
    """

    commit_details_template: str
    slide_template: str
    show_line_numbers: bool = True
    highlight_added_lines: bool = True
    highlight_mode: HighlightMode = HighlightMode.STEPPED
    line_change_display: LineChangeDisplay = LineChangeDisplay.ADDITIONS_ONLY
    include_commit_message: bool = True
    include_file_summary: bool = True
    include_author_date: bool = True
    show_full_file: bool = False
    context_lines: int = 3
    slide_organization: SlideOrganization = SlideOrganization.FLAT
    slide_title: SlideTitle = SlideTitle.BOTH
    date_format: str = "MMM d, yyyy"
    message_body_as_speaker_notes: bool = False

    def __post_init__(self) -> None:
        """Validate the options."""
        if self.context_lines < 0:
            raise ValueError(f"context_lines must be >= 0, got {self.context_lines}")


@dataclass(frozen=True)
class GeneratedSlide:
    """One rendered slide.

    Attributes:
        title: Title for bookkeeping, not rendered
        content: Final markdown body
        notes: Speaker notes, if any
    """

    title: str
    content: str
    notes: str | None = None


@dataclass(frozen=True)
class CommitVariables:
    """Template variables derived from a commit."""

    author_name: str
    author_email: str
    commit_date: str
    message_title: str
    message_body: str
    commit_hash: str
    commit_hash_short: str

    def as_template_vars(self) -> dict[str, str]:
        """Map to the placeholder names used in templates."""
        return {
            "authorName": self.author_name,
            "authorEmail": self.author_email,
            "commitDate": self.commit_date,
            "messageTitle": self.message_title,
            "messageBody": self.message_body,
            "commitHash": self.commit_hash,
            "commitHashShort": self.commit_hash_short,
        }
