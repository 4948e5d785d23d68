"""Repository interfaces for Git operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from git_slides.git.domain.entities import Commit
from git_slides.git.domain.value_objects import CommitFilter, FileChange


class GitRepository(ABC):
    """Interface for Git repository operations."""

    @abstractmethod
    def is_valid_repo(self, repo_path: Path) -> bool:
        """
        Check whether a path is inside a git work tree.

        Args:
            repo_path: Path to check

        Returns:
            True if git recognizes the path as a work tree
        """
        ...

    @abstractmethod
    def list_branches(self, repo_path: Path) -> tuple[str, ...]:
        """
        List local and remote branches.

        Args:
            repo_path: Path to the git repository

        Returns:
            Tuple of branch names
        """
        ...

    @abstractmethod
    def list_local_branches(self, repo_path: Path) -> tuple[str, ...]:
        """
        List local branches only.

        Args:
            repo_path: Path to the git repository

        Returns:
            Tuple of branch names
        """
        ...

    @abstractmethod
    def get_current_branch(self, repo_path: Path) -> str:
        """
        Get the name of the checked out branch.

        Args:
            repo_path: Path to the git repository

        Returns:
            Branch name
        """
        ...

    @abstractmethod
    def list_commits(self, repo_path: Path, commit_filter: CommitFilter) -> tuple[Commit, ...]:
        """
        List commits matching a filter.

        The file regex of the filter is not applied here.

        Args:
            repo_path: Path to the git repository
            commit_filter: Branch, date window and count limits

        Returns:
            Tuple of commits ordered from oldest to newest
        """
        ...

    @abstractmethod
    def list_file_changes(self, repo_path: Path, commit_hash: str) -> tuple[FileChange, ...]:
        """
        List files modified and their change types for a specific commit.

        Args:
            repo_path: Path to the git repository
            commit_hash: Hash of the commit

        Returns:
            Tuple of file changes with zero addition/deletion counts
        """
        ...

    @abstractmethod
    def list_file_changes_with_stats(
        self, repo_path: Path, commit_hash: str
    ) -> tuple[FileChange, ...]:
        """
        List files modified in a commit with addition/deletion counts.

        Args:
            repo_path: Path to the git repository
            commit_hash: Hash of the commit

        Returns:
            Tuple of file changes
        """
        ...

    @abstractmethod
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
        ...

    @abstractmethod
    def get_file_content(self, repo_path: Path, commit_hash: str, file_path: str) -> str | None:
        """
        Get the full content of a file at a commit.

        Args:
            repo_path: Path to the git repository
            commit_hash: Hash of the commit
            file_path: Path to the file relative to repository root

        Returns:
            File content, or None if the file does not exist at that commit
        """
        ...
