"""Generate reveal.js markdown slides from commits and their file diffs."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from git_slides.diff.domain.value_objects import DiffHunk, FileDiff
from git_slides.diff.services.content_formatter import (
    calculate_diff_highlights,
    deindent,
    format_diff_content,
)
from git_slides.diff.services.range_service import generate_highlight_string
from git_slides.git.domain.entities import Commit
from git_slides.slides.domain.value_objects import (
    CommitVariables,
    GeneratedSlide,
    LineChangeDisplay,
    SlideFormatOptions,
    SlideOrganization,
    SlideTitle,
)
from git_slides.slides.services.slide_variables import (
    build_commit_variables,
    build_file_summary,
    create_safe_code_block,
    get_file_name,
)
from git_slides.slides.services.template_service import render_template
from git_slides.slides.templates import DEFAULT_COMMIT_ONLY_TEMPLATE_PATH, load_template

HORIZONTAL_SEPARATOR = "\n\n---\n\n"
VERTICAL_SEPARATOR = "\n\n--\n\n"

FileDiffsByCommit = Mapping[str, Sequence[FileDiff]]


@dataclass(frozen=True)
class _FileHistoryEntry:
    commit: Commit
    diff: FileDiff


class SlideGenerator:
    """Generate markdown slides under one of the slide organizations."""

    def __init__(
        self, options: SlideFormatOptions, commit_only_template: str | None = None
    ) -> None:
        """
        Initialize SlideGenerator.

        Args:
            options: Slide format options
            commit_only_template: Template for commits without files.
                                  Defaults to the built-in template.
        """
        self._options = options
        self._commit_only_template = (
            commit_only_template
            if commit_only_template is not None
            else load_template(DEFAULT_COMMIT_ONLY_TEMPLATE_PATH)
        )

    @property
    def options(self) -> SlideFormatOptions:
        return self._options

    def generate_slides(self, commits: Sequence[Commit], file_diffs: FileDiffsByCommit) -> str:
        """
        Generate the whole slide deck.

        Commits must already be in chronological order (oldest first).

        Args:
            commits: Selected commits
            file_diffs: Selected file diffs keyed by commit hash

        Returns:
            Markdown with slides separated by ``---``; empty for no commits
        """
        slides = self.build_slides(commits, file_diffs)
        return HORIZONTAL_SEPARATOR.join(self._format_slide(slide) for slide in slides)

    def build_slides(
        self, commits: Sequence[Commit], file_diffs: FileDiffsByCommit
    ) -> list[GeneratedSlide]:
        """Build the top-level slides without joining them."""
        match self._options.slide_organization:
            case SlideOrganization.GROUPED:
                return self._grouped_slides(commits, file_diffs)
            case SlideOrganization.PROGRESSIVE:
                return self._progressive_slides(commits, file_diffs)
            case SlideOrganization.PER_HUNK:
                return self._per_hunk_slides(commits, file_diffs)
            case _:
                return self._flat_slides(commits, file_diffs)

    def _flat_slides(
        self, commits: Sequence[Commit], file_diffs: FileDiffsByCommit
    ) -> list[GeneratedSlide]:
        """One horizontal slide per file, commit-only slides for commits without files."""
        slides: list[GeneratedSlide] = []
        for commit in commits:
            diffs = file_diffs.get(commit.hash) or ()
            if not diffs:
                slides.append(self._commit_only_slide(commit))
                continue
            for diff in diffs:
                slides.append(self._file_slide(commit, diff, diffs))
        return slides

    def _grouped_slides(
        self, commits: Sequence[Commit], file_diffs: FileDiffsByCommit
    ) -> list[GeneratedSlide]:
        """One slide per commit with a vertical sub-slide per file."""
        slides: list[GeneratedSlide] = []
        for commit in commits:
            diffs = file_diffs.get(commit.hash) or ()
            if not diffs:
                slides.append(self._commit_only_slide(commit))
                continue
            slides.append(self._commit_with_subslides(commit, diffs))
        return slides

    def _progressive_slides(
        self, commits: Sequence[Commit], file_diffs: FileDiffsByCommit
    ) -> list[GeneratedSlide]:
        """The same file shown evolving across commits, file by file."""
        history: dict[str, list[_FileHistoryEntry]] = {}
        for commit in commits:
            for diff in file_diffs.get(commit.hash) or ():
                history.setdefault(diff.path, []).append(_FileHistoryEntry(commit, diff))

        slides: list[GeneratedSlide] = []
        for entries in history.values():
            for index, entry in enumerate(entries):
                step_label = f" ({index + 1}/{len(entries)})" if len(entries) > 1 else ""
                slides.append(
                    self._file_slide(entry.commit, entry.diff, [entry.diff], label=step_label)
                )
        return slides

    def _per_hunk_slides(
        self, commits: Sequence[Commit], file_diffs: FileDiffsByCommit
    ) -> list[GeneratedSlide]:
        """One slide per diff hunk."""
        slides: list[GeneratedSlide] = []
        for commit in commits:
            diffs = file_diffs.get(commit.hash) or ()
            if not diffs:
                slides.append(self._commit_only_slide(commit))
                continue

            commit_vars = build_commit_variables(commit, self._options.date_format)
            commit_details = self._render_commit_details(commit_vars)
            for diff in diffs:
                total = len(diff.hunks)
                for index, hunk in enumerate(diff.hunks):
                    hunk_label = f" (hunk {index + 1}/{total})" if total > 1 else ""
                    variables = {
                        **commit_vars.as_template_vars(),
                        "fileName": get_file_name(diff.path) + hunk_label,
                        "filePath": diff.path,
                        "fileSummary": "",
                        "code": self._hunk_code_block(diff, hunk),
                        "commitDetails": commit_details,
                    }
                    slides.append(
                        GeneratedSlide(
                            title=self._slide_title(commit_vars, diff),
                            content=render_template(self._options.slide_template, variables),
                            notes=self._speaker_notes(commit_vars),
                        )
                    )
        return slides

    def _commit_only_slide(self, commit: Commit) -> GeneratedSlide:
        """A slide for a commit with no files selected, ignoring the slide template."""
        commit_vars = build_commit_variables(commit, self._options.date_format)
        return GeneratedSlide(
            title=commit_vars.message_title,
            content=render_template(self._commit_only_template, commit_vars.as_template_vars()),
            notes=self._speaker_notes(commit_vars),
        )

    def _file_slide(
        self,
        commit: Commit,
        diff: FileDiff,
        all_diffs: Sequence[FileDiff],
        label: str = "",
    ) -> GeneratedSlide:
        commit_vars = build_commit_variables(commit, self._options.date_format)
        variables = {
            **commit_vars.as_template_vars(),
            **self._file_variables(diff, all_diffs),
            "code": self._code_block(diff),
            "commitDetails": self._render_commit_details(commit_vars),
        }
        variables["fileName"] += label
        return GeneratedSlide(
            title=self._slide_title(commit_vars, diff),
            content=render_template(self._options.slide_template, variables),
            notes=self._speaker_notes(commit_vars),
        )

    def _commit_with_subslides(self, commit: Commit, diffs: Sequence[FileDiff]) -> GeneratedSlide:
        commit_vars = build_commit_variables(commit, self._options.date_format)
        commit_details = self._render_commit_details(commit_vars)
        parts = [f"## {commit_vars.message_title}\n\n{commit_details}"]

        for diff in diffs:
            variables = {
                **commit_vars.as_template_vars(),
                **self._file_variables(diff, diffs),
                "code": self._code_block(diff),
                # Already shown on the commit slide
                "commitDetails": "",
            }
            parts.append(render_template(self._options.slide_template, variables))

        return GeneratedSlide(
            title=commit_vars.message_title,
            content=VERTICAL_SEPARATOR.join(parts),
            notes=self._speaker_notes(commit_vars),
        )

    def _file_variables(self, diff: FileDiff, all_diffs: Sequence[FileDiff]) -> dict[str, str]:
        return {
            "fileName": get_file_name(diff.path),
            "filePath": diff.path,
            "fileSummary": build_file_summary(diff, all_diffs),
        }

    def _render_commit_details(self, commit_vars: CommitVariables) -> str:
        return render_template(
            self._options.commit_details_template, commit_vars.as_template_vars()
        )

    def _include_removed(self) -> bool:
        return self._options.line_change_display != LineChangeDisplay.ADDITIONS_ONLY

    def _code_block(self, diff: FileDiff) -> str:
        """Render a file's code with a ``lang [highlights]`` fence annotation."""
        options = self._options
        highlights = ""

        if options.show_full_file and diff.new_content:
            content = deindent(diff.new_content)
            if options.highlight_added_lines and diff.hunks:
                highlights = generate_highlight_string(diff.hunks, options.highlight_mode)
        else:
            include_removed = self._include_removed()
            content = format_diff_content(
                diff.hunks, include_removed, options.line_change_display
            )
            if options.highlight_added_lines and diff.hunks:
                # Positions within the extracted text, not post-image line numbers
                highlights = calculate_diff_highlights(
                    diff.hunks, include_removed, options.highlight_mode
                )

        return create_safe_code_block(content, self._lang_spec(diff.language, highlights))

    def _hunk_code_block(self, diff: FileDiff, hunk: DiffHunk) -> str:
        include_removed = self._include_removed()
        content = format_diff_content(
            [hunk], include_removed, self._options.line_change_display
        )
        highlights = ""
        if self._options.highlight_added_lines and hunk.added_line_numbers:
            highlights = calculate_diff_highlights(
                [hunk], include_removed, self._options.highlight_mode
            )
        return create_safe_code_block(content, self._lang_spec(diff.language, highlights))

    @staticmethod
    def _lang_spec(language: str, highlights: str) -> str:
        return f"{language} [{highlights}]" if highlights else language

    def _slide_title(self, commit_vars: CommitVariables, diff: FileDiff) -> str:
        match self._options.slide_title:
            case SlideTitle.FILE:
                return get_file_name(diff.path)
            case SlideTitle.BOTH:
                return f"{commit_vars.commit_hash_short}: {get_file_name(diff.path)}"
            case _:
                return commit_vars.message_title

    def _speaker_notes(self, commit_vars: CommitVariables) -> str | None:
        if self._options.message_body_as_speaker_notes and commit_vars.message_body:
            return commit_vars.message_body
        return None

    @staticmethod
    def _format_slide(slide: GeneratedSlide) -> str:
        if slide.notes:
            return f"{slide.content}\n\nnote: {slide.notes}"
        return slide.content
