"""Tests for slide generation across organizations."""

import dataclasses

import pytest

from git_slides.diff.domain.value_objects import DiffLine, LineType
from git_slides.slides.domain.value_objects import (
    HighlightMode,
    LineChangeDisplay,
    SlideOrganization,
    SlideTitle,
)
from git_slides.slides.services.slide_generator import SlideGenerator

from tests.conftest import make_commit, make_diff, make_hunk

HORIZONTAL = "\n\n---\n\n"
VERTICAL = "\n\n--\n\n"

EXPECTED_CODE = "```typescript [2]\nline 1\nnew line\nline 2\nline 3\n```"


def generator_for(options, **changes):
    return SlideGenerator(dataclasses.replace(options, **changes))


class TestFlatMode:
    """Test flat organization."""

    def test_file_slide_exact_output(self, default_options):
        commit = make_commit()
        diffs = {commit.hash: [make_diff(hunks=(make_hunk(),))]}

        result = SlideGenerator(default_options).generate_slides([commit], diffs)

        assert result == (
            "## test.ts\n\n"
            "> **Test commit message**\n\n"
            "*Test Author • Jan 15, 2024*\n\n" + EXPECTED_CODE
        )

    def test_commit_only_slide(self, default_options):
        commit = make_commit(message="Commit without files")

        result = SlideGenerator(default_options).generate_slides([commit], {})

        assert result == (
            "## Commit without files\n\n"
            "*Test Author <test@example.com> • Jan 15, 2024 • abc123d*"
        )

    def test_commit_only_slide_ignores_slide_template(self, default_options):
        generator = generator_for(default_options, slide_template="CUSTOM {{fileName}}")

        result = generator.generate_slides([make_commit()], {})

        assert "CUSTOM" not in result
        assert result.startswith("## Test commit message")

    def test_mixed_commits_slide_and_separator_count(self, default_options):
        commits = [make_commit(hash=f"hash{i}", message=f"Commit {i}") for i in range(4)]
        diffs = {
            "hash1": [make_diff(path="one.ts", hunks=(make_hunk(),))],
            "hash3": [make_diff(path="three.ts", hunks=(make_hunk(),))],
        }

        result = SlideGenerator(default_options).generate_slides(commits, diffs)
        slides = result.split(HORIZONTAL)

        assert result.count(HORIZONTAL) == 3
        assert slides[0].startswith("## Commit 0")
        assert slides[1].startswith("## one.ts")
        assert slides[2].startswith("## Commit 2")
        assert slides[3].startswith("## three.ts")

    def test_one_slide_per_file(self, default_options):
        commit = make_commit()
        diffs = {
            commit.hash: [
                make_diff(path="a.ts", hunks=(make_hunk(),)),
                make_diff(path="b.ts", hunks=(make_hunk(),)),
            ]
        }

        result = SlideGenerator(default_options).generate_slides([commit], diffs)

        assert result.count(HORIZONTAL) == 1
        assert result.count("> **Test commit message**") == 2

    def test_no_commits_gives_empty_string(self, default_options):
        assert SlideGenerator(default_options).generate_slides([], {}) == ""


class TestGroupedMode:
    """Test grouped organization."""

    def test_vertical_subslides(self, default_options):
        commit = make_commit()
        diffs = {
            commit.hash: [
                make_diff(path="file1.ts", hunks=(make_hunk(),)),
                make_diff(path="file2.ts", hunks=(make_hunk(),)),
            ]
        }
        generator = generator_for(default_options, slide_organization=SlideOrganization.GROUPED)

        result = generator.generate_slides([commit], diffs)
        parts = result.split(VERTICAL)

        assert HORIZONTAL not in result
        assert len(parts) == 3
        assert parts[0] == (
            "## Test commit message\n\n"
            "> **Test commit message**\n\n"
            "*Test Author • Jan 15, 2024*"
        )
        assert parts[1] == "## file1.ts\n\n" + EXPECTED_CODE
        assert parts[2] == "## file2.ts\n\n" + EXPECTED_CODE

    def test_commits_joined_horizontally(self, default_options):
        commits = [make_commit(hash="h1"), make_commit(hash="h2"), make_commit(hash="h3")]
        diffs = {
            "h1": [make_diff(hunks=(make_hunk(),))],
            "h3": [make_diff(hunks=(make_hunk(),))],
        }
        generator = generator_for(default_options, slide_organization=SlideOrganization.GROUPED)

        result = generator.generate_slides(commits, diffs)

        assert result.count(HORIZONTAL) == 2
        assert result.split(HORIZONTAL)[1].startswith("## Test commit message\n\n*Test Author <")


class TestProgressiveMode:
    """Test progressive organization."""

    def test_file_history_with_step_labels(self, default_options):
        first = make_commit(hash="h1", message="First")
        second = make_commit(hash="h2", message="Second")
        diffs = {
            "h1": [make_diff(path="src/a.ts", hunks=(make_hunk(),))],
            "h2": [
                make_diff(path="src/a.ts", hunks=(make_hunk(),)),
                make_diff(path="src/b.ts", hunks=(make_hunk(),)),
            ],
        }
        generator = generator_for(
            default_options, slide_organization=SlideOrganization.PROGRESSIVE
        )

        slides = generator.generate_slides([first, second], diffs).split(HORIZONTAL)

        assert len(slides) == 3
        assert slides[0].startswith("## a.ts (1/2)\n\n> **First**")
        assert slides[1].startswith("## a.ts (2/2)\n\n> **Second**")
        assert slides[2].startswith("## b.ts\n\n> **Second**")
        assert VERTICAL not in slides[0]

    def test_commits_without_files_are_skipped(self, default_options):
        generator = generator_for(
            default_options, slide_organization=SlideOrganization.PROGRESSIVE
        )

        assert generator.generate_slides([make_commit()], {}) == ""


class TestPerHunkMode:
    """Test per-hunk organization."""

    def test_one_slide_per_hunk_with_local_highlights(self, default_options):
        commit = make_commit()
        diffs = {commit.hash: [make_diff(hunks=(make_hunk(), make_hunk()))]}
        generator = generator_for(default_options, slide_organization=SlideOrganization.PER_HUNK)

        slides = generator.generate_slides([commit], diffs).split(HORIZONTAL)

        assert len(slides) == 2
        assert slides[0].startswith("## test.ts (hunk 1/2)")
        assert slides[1].startswith("## test.ts (hunk 2/2)")
        for slide in slides:
            assert slide.endswith(EXPECTED_CODE)
            assert "// ..." not in slide

    def test_single_hunk_has_no_label(self, default_options):
        commit = make_commit()
        diffs = {commit.hash: [make_diff(hunks=(make_hunk(),))]}
        generator = generator_for(default_options, slide_organization=SlideOrganization.PER_HUNK)

        result = generator.generate_slides([commit], diffs)

        assert result.startswith("## test.ts\n\n")

    def test_hunk_without_additions_has_no_highlight(self, default_options):
        commit = make_commit()
        hunk = make_hunk(
            added_line_numbers=(),
            lines=(DiffLine(LineType.CONTEXT, "same", 1, 1),),
        )
        generator = generator_for(default_options, slide_organization=SlideOrganization.PER_HUNK)

        result = generator.generate_slides([commit], {commit.hash: [make_diff(hunks=(hunk,))]})

        assert result.endswith("```typescript\nsame\n```")

    def test_commit_without_files_gets_commit_only_slide(self, default_options):
        empty = make_commit(hash="h1", message="Empty")
        changed = make_commit(hash="h2")
        generator = generator_for(default_options, slide_organization=SlideOrganization.PER_HUNK)

        slides = generator.generate_slides(
            [empty, changed], {"h2": [make_diff(hunks=(make_hunk(),))]}
        ).split(HORIZONTAL)

        assert len(slides) == 2
        assert slides[0] == (
            "## Empty\n\n*Test Author <test@example.com> • Jan 15, 2024 • abc123d*"
        )
        assert slides[1].startswith("## test.ts\n\n")

    def test_full_diff_hunk_highlight_counts_removed_lines(self, default_options):
        commit = make_commit()
        hunk = make_hunk(
            added_line_numbers=(2,),
            removed_line_numbers=(2,),
            lines=(
                DiffLine(LineType.CONTEXT, "keep", 1, 1),
                DiffLine(LineType.REMOVED, "old", 2, None),
                DiffLine(LineType.ADDED, "new", None, 2),
            ),
        )
        generator = generator_for(
            default_options,
            slide_organization=SlideOrganization.PER_HUNK,
            line_change_display=LineChangeDisplay.FULL_DIFF,
        )

        slides = generator.generate_slides(
            [commit], {commit.hash: [make_diff(hunks=(hunk, hunk))]}
        ).split(HORIZONTAL)

        assert len(slides) == 2
        for slide in slides:
            assert slide.endswith("```typescript [3]\n  keep\n- old\n+ new\n```")


class TestCodeBlocks:
    """Test code body rendering options."""

    def stepped_hunk(self):
        return make_hunk(
            added_line_numbers=(1, 3),
            lines=(
                DiffLine(LineType.ADDED, "line 1", None, 1),
                DiffLine(LineType.CONTEXT, "line 2", 1, 2),
                DiffLine(LineType.ADDED, "line 3", None, 3),
            ),
        )

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [(HighlightMode.STEPPED, "[1|3]"), (HighlightMode.ALL, "[1,3]")],
    )
    def test_highlight_modes(self, default_options, mode, expected):
        commit = make_commit()
        diffs = {commit.hash: [make_diff(hunks=(self.stepped_hunk(),))]}

        result = generator_for(default_options, highlight_mode=mode).generate_slides(
            [commit], diffs
        )

        assert f"```typescript {expected}\n" in result

    def test_highlight_disabled(self, default_options):
        commit = make_commit()
        diffs = {commit.hash: [make_diff(hunks=(make_hunk(),))]}

        result = generator_for(default_options, highlight_added_lines=False).generate_slides(
            [commit], diffs
        )

        assert "```typescript\nline 1" in result
        assert "[" not in result.split("```typescript")[1].split("\n")[0]

    def test_highlights_follow_extracted_positions(self, default_options):
        commit = make_commit()
        second = make_hunk(
            old_start=20,
            new_start=21,
            added_line_numbers=(22,),
            lines=(
                DiffLine(LineType.CONTEXT, "ctx", 20, 21),
                DiffLine(LineType.ADDED, "added", None, 22),
            ),
        )
        diffs = {commit.hash: [make_diff(hunks=(make_hunk(), second))]}

        result = SlideGenerator(default_options).generate_slides([commit], diffs)

        assert result.endswith(
            "```typescript [2|7]\nline 1\nnew line\nline 2\nline 3\n// ...\nctx\nadded\n```"
        )

    def test_full_diff_display(self, default_options):
        commit = make_commit()
        hunk = make_hunk(
            added_line_numbers=(2,),
            removed_line_numbers=(2,),
            lines=(
                DiffLine(LineType.CONTEXT, "keep", 1, 1),
                DiffLine(LineType.REMOVED, "old", 2, None),
                DiffLine(LineType.ADDED, "new", None, 2),
            ),
        )
        generator = generator_for(
            default_options, line_change_display=LineChangeDisplay.FULL_DIFF
        )

        result = generator.generate_slides([commit], {commit.hash: [make_diff(hunks=(hunk,))]})

        assert result.endswith("```typescript [3]\n  keep\n- old\n+ new\n```")

    def test_full_file_uses_post_image_line_numbers(self, default_options):
        commit = make_commit()
        diff = make_diff(hunks=(make_hunk(),), new_content="    a\n    b\n    c\n    d\n")
        generator = generator_for(default_options, show_full_file=True)

        result = generator.generate_slides([commit], {commit.hash: [diff]})

        assert result.endswith("```typescript [2]\na\nb\nc\nd\n```")

    def test_full_file_without_content_falls_back_to_diff(self, default_options):
        commit = make_commit()
        diff = make_diff(hunks=(make_hunk(),), new_content=None)
        generator = generator_for(default_options, show_full_file=True)

        result = generator.generate_slides([commit], {commit.hash: [diff]})

        assert result.endswith(EXPECTED_CODE)

    def test_backticks_in_code_lengthen_fence(self, default_options):
        commit = make_commit()
        hunk = make_hunk(
            lines=(DiffLine(LineType.ADDED, "s = '```'", None, 1),),
            added_line_numbers=(1,),
        )
        diffs = {commit.hash: [make_diff(language="python", hunks=(hunk,))]}

        result = SlideGenerator(default_options).generate_slides([commit], diffs)

        assert result.endswith("````python [1]\ns = '```'\n````")


class TestTemplates:
    """Test template variables reaching the output."""

    def test_file_summary_and_paths(self, default_options):
        commit = make_commit()
        diffs = {
            commit.hash: [
                make_diff(path="src/a.ts", hunks=(make_hunk(),)),
                make_diff(path="src/b.ts", hunks=(make_hunk(),)),
            ]
        }
        generator = generator_for(
            default_options, slide_template="{{fileName}}\n{{fileSummary}}\n{{filePath}}"
        )

        slides = generator.generate_slides([commit], diffs).split(HORIZONTAL)

        assert slides[0] == "a.ts\nAlso changed: b.ts\nsrc/a.ts"
        assert slides[1] == "b.ts\nAlso changed: a.ts\nsrc/b.ts"

    def test_single_file_summary_line_is_elided(self, default_options):
        commit = make_commit()
        diffs = {commit.hash: [make_diff(hunks=(make_hunk(),))]}
        generator = generator_for(
            default_options, slide_template="{{fileName}}\n{{fileSummary}}\n{{filePath}}"
        )

        assert generator.generate_slides([commit], diffs) == "test.ts\n\nsrc/test.ts"

    def test_custom_commit_details_template(self, default_options):
        commit = make_commit(
            hash="fullhash1234",
            short_hash="fullhas",
            message="Add feature\n\nLonger explanation.",
            author="Jane Smith <jane@test.com>",
        )
        generator = generator_for(
            default_options,
            commit_details_template=(
                "{{authorName}} ({{authorEmail}}) {{commitHashShort}} {{commitHash}}\n"
                "{{messageTitle}}: {{messageBody}}"
            ),
            slide_template="{{commitDetails}}",
        )

        result = generator.generate_slides(
            [commit], {commit.hash: [make_diff(hunks=(make_hunk(),))]}
        )

        assert result == (
            "Jane Smith (jane@test.com) fullhas fullhash1234\n"
            "Add feature: Longer explanation."
        )

    def test_author_without_email(self, default_options):
        commit = make_commit(author="Just A Name")

        result = SlideGenerator(default_options).generate_slides([commit], {})

        assert "*Just A Name <> • Jan 15, 2024 • abc123d*" in result


class TestSpeakerNotesAndTitles:
    """Test speaker notes and bookkeeping titles."""

    def test_body_as_speaker_notes(self, default_options):
        commit = make_commit(message="Title\n\nThis is the body that should be in notes")
        diffs = {commit.hash: [make_diff(hunks=(make_hunk(),))]}
        generator = generator_for(default_options, message_body_as_speaker_notes=True)

        result = generator.generate_slides([commit], diffs)

        assert result.endswith("\n\nnote: This is the body that should be in notes")

    def test_no_notes_by_default(self, default_options):
        commit = make_commit(message="Title\n\nBody content")
        diffs = {commit.hash: [make_diff(hunks=(make_hunk(),))]}

        result = SlideGenerator(default_options).generate_slides([commit], diffs)

        assert "note:" not in result

    def test_no_notes_without_body(self, default_options):
        generator = generator_for(default_options, message_body_as_speaker_notes=True)

        slides = generator.build_slides([make_commit(message="Only a title")], {})

        assert slides[0].notes is None

    @pytest.mark.parametrize(
        ("policy", "expected"),
        [
            (SlideTitle.BOTH, "abc123d: test.ts"),
            (SlideTitle.FILE, "test.ts"),
            (SlideTitle.COMMIT, "Test commit message"),
        ],
    )
    def test_title_policy(self, default_options, policy, expected):
        commit = make_commit()
        diffs = {commit.hash: [make_diff(hunks=(make_hunk(),))]}

        slides = generator_for(default_options, slide_title=policy).build_slides([commit], diffs)

        assert slides[0].title == expected
