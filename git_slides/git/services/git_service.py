"""Git service for coordinating Git operations."""

import dataclasses
import logging
import re
from pathlib import Path

from git_slides.git.domain.entities import Commit
from git_slides.git.domain.value_objects import CommitFilter, FileChange
from git_slides.git.repositories.interfaces import GitRepository

logger = logging.getLogger(__name__)


class GitService:
    """Service for Git operations."""

    def __init__(self, git_repository: GitRepository) -> None:
        """
        Initialize GitService.

        Args:
            git_repository: Repository implementation for Git operations
        """
        self._git_repository = git_repository

    def is_valid_repo(self, repo_path: Path) -> bool:
        """Check whether a path is inside a git work tree."""
        return self._git_repository.is_valid_repo(repo_path)

    def list_branches(self, repo_path: Path) -> tuple[str, ...]:
        """List local and remote branches."""
        return self._git_repository.list_branches(repo_path)

    def list_local_branches(self, repo_path: Path) -> tuple[str, ...]:
        """List local branches."""
        return self._git_repository.list_local_branches(repo_path)

    def get_current_branch(self, repo_path: Path) -> str:
        """Get the name of the checked out branch."""
        return self._git_repository.get_current_branch(repo_path)

    def list_commits(self, repo_path: Path, commit_filter: CommitFilter) -> tuple[Commit, ...]:
        """
        List commits matching a filter, oldest first, with their changed files.

        When the filter carries a file regex, only commits touching at least
        one matching file are kept and their file list is narrowed to the
        matches. An invalid regex is ignored and the filter behaves as unset.

        Args:
            repo_path: Path to the git repository
            commit_filter: Selection criteria

        Returns:
            Tuple of commits ordered from oldest to newest
        """
        commits = self._git_repository.list_commits(repo_path, commit_filter)
        file_pattern = self._compile_file_regex(commit_filter.file_regex)

        selected: list[Commit] = []
        for commit in commits:
            files = self._git_repository.list_file_changes_with_stats(repo_path, commit.hash)
            if file_pattern is not None:
                files = tuple(f for f in files if file_pattern.search(f.file_path))
                if not files:
                    continue
            selected.append(dataclasses.replace(commit, files=files))

        return tuple(selected)

    def list_file_changes(self, repo_path: Path, commit_hash: str) -> tuple[FileChange, ...]:
        """List files changed by a commit."""
        return self._git_repository.list_file_changes(repo_path, commit_hash)

    def list_file_changes_with_stats(
        self, repo_path: Path, commit_hash: str
    ) -> tuple[FileChange, ...]:
        """List files changed by a commit with addition/deletion counts."""
        return self._git_repository.list_file_changes_with_stats(repo_path, commit_hash)

    def get_file_diff(
        self, repo_path: Path, commit_hash: str, file_path: str, context_lines: int = 3
    ) -> str:
        """
        Get the unified diff of one file in a commit.

        Args:
            repo_path: Path to the git repository
            commit_hash: Hash of the commit
            file_path: Path to the file relative to repository root
            context_lines: Number of context lines around each change

        Returns:
            Unified diff text for the file
        """
        return self._git_repository.get_file_diff(repo_path, commit_hash, file_path, context_lines)

    def get_file_content(self, repo_path: Path, commit_hash: str, file_path: str) -> str | None:
        """Get the content of a file at a commit, or None if absent."""
        return self._git_repository.get_file_content(repo_path, commit_hash, file_path)

    @staticmethod
    def _compile_file_regex(file_regex: str | None) -> re.Pattern[str] | None:
        if not file_regex:
            return None
        try:
            return re.compile(file_regex)
        except re.error as e:
            logger.warning("Ignoring invalid file regex %r: %s", file_regex, e)
            return None
