"""Shared fixtures and builders for slide tests."""

import subprocess
from datetime import datetime
from pathlib import Path

import pytest

from git_slides.diff.domain.value_objects import DiffHunk, DiffLine, FileDiff, LineType
from git_slides.git.domain.entities import Commit
from git_slides.git.domain.value_objects import CommitFilter, FileChange, FileChangeType
from git_slides.git.repositories.interfaces import GitRepository
from git_slides.slides.repositories.factory import create_default_format_options


def make_commit(**overrides) -> Commit:
    values = {
        "hash": "abc123def456",
        "short_hash": "abc123d",
        "message": "Test commit message",
        "author": "Test Author <test@example.com>",
        "date": datetime(2024, 1, 15, 10, 30),
    }
    values.update(overrides)
    return Commit(**values)


def make_hunk(**overrides) -> DiffHunk:
    values = {
        "old_start": 1,
        "old_lines": 3,
        "new_start": 1,
        "new_lines": 4,
        "added_line_numbers": (2,),
        "removed_line_numbers": (),
        "lines": (
            DiffLine(LineType.CONTEXT, "line 1", 1, 1),
            DiffLine(LineType.ADDED, "new line", None, 2),
            DiffLine(LineType.CONTEXT, "line 2", 2, 3),
            DiffLine(LineType.CONTEXT, "line 3", 3, 4),
        ),
    }
    values.update(overrides)
    return DiffHunk(**values)


def hunk_with_added(numbers: list[int]) -> DiffHunk:
    lines = tuple(DiffLine(LineType.ADDED, f"line {n}", None, n) for n in numbers)
    return make_hunk(
        new_start=numbers[0] if numbers else 1,
        added_line_numbers=tuple(numbers),
        lines=lines,
    )


def make_diff(**overrides) -> FileDiff:
    values = {
        "path": "src/test.ts",
        "hunks": (),
        "new_content": None,
        "language": "typescript",
    }
    values.update(overrides)
    return FileDiff(**values)


@pytest.fixture
def default_options():
    """Default slide format options with the built-in templates."""
    return create_default_format_options()


class FakeGitRepository(GitRepository):
    """In-memory git repository that records diff and content requests."""

    def __init__(
        self,
        commits: tuple[Commit, ...] = (),
        files: dict[str, tuple[str, ...]] | None = None,
        diffs: dict[str, str] | None = None,
        contents: dict[str, str] | None = None,
    ) -> None:
        self.commits = commits
        self.files = files or {}
        self.diffs = diffs or {}
        self.contents = contents or {}
        self.diff_calls: list[tuple[str, str, int]] = []
        self.content_calls: list[tuple[str, str]] = []

    def is_valid_repo(self, repo_path: Path) -> bool:
        return True

    def list_branches(self, repo_path: Path) -> tuple[str, ...]:
        return ("main",)

    def list_local_branches(self, repo_path: Path) -> tuple[str, ...]:
        return ("main",)

    def get_current_branch(self, repo_path: Path) -> str:
        return "main"

    def list_commits(self, repo_path: Path, commit_filter: CommitFilter) -> tuple[Commit, ...]:
        return self.commits

    def list_file_changes(self, repo_path: Path, commit_hash: str) -> tuple[FileChange, ...]:
        return tuple(
            FileChange(file_path=path, change_type=FileChangeType.MODIFIED)
            for path in self.files.get(commit_hash, ())
        )

    def list_file_changes_with_stats(
        self, repo_path: Path, commit_hash: str
    ) -> tuple[FileChange, ...]:
        return tuple(
            FileChange(file_path=path, change_type=FileChangeType.MODIFIED, additions=1)
            for path in self.files.get(commit_hash, ())
        )

    def get_file_diff(
        self, repo_path: Path, commit_hash: str, file_path: str, context_lines: int = 3
    ) -> str:
        self.diff_calls.append((commit_hash, file_path, context_lines))
        return self.diffs.get(file_path, "")

    def get_file_content(self, repo_path: Path, commit_hash: str, file_path: str) -> str | None:
        self.content_calls.append((commit_hash, file_path))
        return self.contents.get(file_path)


def git(repo: Path, *args: str) -> str:
    """Run git in a test repository with a fixed identity."""
    result = subprocess.run(
        [
            "git",
            "-c",
            "user.name=Test Author",
            "-c",
            "user.email=test@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout
