"""Concrete implementation of Git repository operations."""

import logging
import subprocess
from datetime import datetime
from pathlib import Path

from git_slides.git.domain.entities import Commit
from git_slides.git.domain.value_objects import CommitFilter, FileChange, FileChangeType
from git_slides.git.repositories.interfaces import GitRepository

logger = logging.getLogger(__name__)

# Field and record separators for `git log` output, so that multi-line
# messages survive parsing.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = "%H%x1f%h%x1f%an%x1f%ae%x1f%aI%x1f%B%x1e"


class GitRepositoryImpl(GitRepository):
    """Concrete implementation of Git repository operations using git commands."""

    def is_valid_repo(self, repo_path: Path) -> bool:
        """
        Check whether a path is inside a git work tree.

        Args:
            repo_path: Path to check

        Returns:
            True if git recognizes the path as a work tree
        """
        try:
            output = self._run_git(repo_path, ["rev-parse", "--is-inside-work-tree"])
        except (RuntimeError, OSError):
            return False
        return output.strip() == "true"

    def list_branches(self, repo_path: Path) -> tuple[str, ...]:
        """
        List local and remote branches.

        Args:
            repo_path: Path to the git repository

        Returns:
            Tuple of branch names
        """
        output = self._run_git(
            repo_path, ["branch", "-a", "--format=%(refname:short)"]
        )
        return self._split_lines(output)

    def list_local_branches(self, repo_path: Path) -> tuple[str, ...]:
        """
        List local branches only.

        Args:
            repo_path: Path to the git repository

        Returns:
            Tuple of branch names
        """
        output = self._run_git(repo_path, ["branch", "--format=%(refname:short)"])
        return self._split_lines(output)

    def get_current_branch(self, repo_path: Path) -> str:
        """
        Get the name of the checked out branch.

        Args:
            repo_path: Path to the git repository

        Returns:
            Branch name
        """
        return self._run_git(repo_path, ["rev-parse", "--abbrev-ref", "HEAD"]).strip()

    def list_commits(self, repo_path: Path, commit_filter: CommitFilter) -> tuple[Commit, ...]:
        """
        List commits matching a filter.

        Args:
            repo_path: Path to the git repository
            commit_filter: Branch, date window and count limits

        Returns:
            Tuple of commits ordered from oldest to newest
        """
        args = [
            "log",
            f"--format={_LOG_FORMAT}",
            f"-n{commit_filter.max_commits or 50}",
        ]

        if commit_filter.since_date is not None:
            args.append(f"--since={commit_filter.since_date.isoformat()}")

        until_date = commit_filter.until_date()
        if until_date is not None:
            args.append(f"--until={until_date.isoformat()}")

        if commit_filter.branch:
            args.append(commit_filter.branch)

        output = self._run_git(repo_path, args)

        commits: list[Commit] = []
        for record in output.split(_RECORD_SEP):
            record = record.lstrip("\n")
            if not record:
                continue
            parts = record.split(_FIELD_SEP, 5)
            if len(parts) != 6:
                logger.debug("Skipping malformed log record: %r", record)
                continue
            commit_hash, short_hash, author_name, author_email, date_str, message = parts
            author = f"{author_name} <{author_email}>" if author_email else author_name
            commits.append(
                Commit(
                    hash=commit_hash,
                    short_hash=short_hash,
                    message=message.strip(),
                    author=author,
                    date=datetime.fromisoformat(date_str),
                )
            )

        # git log lists newest first
        commits.reverse()
        return tuple(commits)

    def list_file_changes(self, repo_path: Path, commit_hash: str) -> tuple[FileChange, ...]:
        """
        List files modified and their change types for a specific commit.

        Args:
            repo_path: Path to the git repository
            commit_hash: Hash of the commit

        Returns:
            Tuple of file changes with zero addition/deletion counts
        """
        output = self._run_git(
            repo_path,
            ["diff-tree", "--no-commit-id", "--name-status", "-r", "--root", commit_hash],
        )

        file_changes: list[FileChange] = []
        for line in self._split_lines(output):
            parts = line.split("\t")
            if len(parts) == 2:
                status, file_path = parts
                file_changes.append(
                    FileChange(
                        file_path=file_path,
                        change_type=self._parse_status_to_change_type(status),
                    )
                )
            elif len(parts) >= 3:  # Renamed or copied files
                status, old_path, new_path = parts[0], parts[1], parts[2]
                file_changes.append(
                    FileChange(
                        file_path=new_path,
                        change_type=self._parse_status_to_change_type(status),
                        old_path=old_path,
                    )
                )

        return tuple(file_changes)

    def list_file_changes_with_stats(
        self, repo_path: Path, commit_hash: str
    ) -> tuple[FileChange, ...]:
        """
        List files modified in a commit with addition/deletion counts.

        Binary files report ``-`` in numstat output and are counted as zero.

        Args:
            repo_path: Path to the git repository
            commit_hash: Hash of the commit

        Returns:
            Tuple of file changes
        """
        file_changes = self.list_file_changes(repo_path, commit_hash)
        output = self._run_git(
            repo_path,
            ["diff-tree", "--no-commit-id", "--numstat", "-r", "--root", commit_hash],
        )

        stats: dict[str, tuple[int, int]] = {}
        for line in self._split_lines(output):
            parts = line.split("\t")
            if len(parts) < 3:
                continue
            additions, deletions, file_path = parts[0], parts[1], parts[2]
            stats[file_path] = (self._parse_count(additions), self._parse_count(deletions))

        return tuple(
            FileChange(
                file_path=change.file_path,
                change_type=change.change_type,
                additions=stats.get(change.file_path, (0, 0))[0],
                deletions=stats.get(change.file_path, (0, 0))[1],
                old_path=change.old_path,
            )
            for change in file_changes
        )

    def get_file_diff(
        self, repo_path: Path, commit_hash: str, file_path: str, context_lines: int = 3
    ) -> str:
        """
        Get the unified diff of one file in a commit.

        Diffs against the first parent. A commit without a parent (the first
        commit of a repository) falls back to ``git show``.

        Args:
            repo_path: Path to the git repository
            commit_hash: Hash of the commit
            file_path: Path to the file relative to repository root
            context_lines: Number of context lines around each change

        Returns:
            Unified diff text for the file

        Raises:
            RuntimeError: If neither git diff nor git show succeeds
        """
        try:
            return self._run_git(
                repo_path,
                [
                    "diff",
                    f"-U{context_lines}",
                    f"{commit_hash}^",
                    commit_hash,
                    "--",
                    file_path,
                ],
            )
        except RuntimeError as e:
            logger.debug("Diff against parent failed for %s, using show: %s", commit_hash, e)

        return self._run_git(
            repo_path,
            ["show", "--format=", f"-U{context_lines}", commit_hash, "--", file_path],
        )

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
        try:
            return self._run_git(repo_path, ["show", f"{commit_hash}:{file_path}"])
        except RuntimeError:
            # Deleted, or not present at this commit
            return None

    @staticmethod
    def _run_git(repo_path: Path, args: list[str]) -> str:
        """Run a git command in the repository and return its stdout."""
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=repo_path,
                capture_output=True,
                text=True,
                check=True,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise RuntimeError(
                f"git {args[0]} failed: {e.stderr.strip() if e.stderr else str(e)}"
            ) from e

    @staticmethod
    def _split_lines(output: str) -> tuple[str, ...]:
        return tuple(line.strip() for line in output.strip().split("\n") if line.strip())

    @staticmethod
    def _parse_count(value: str) -> int:
        try:
            return int(value)
        except ValueError:
            return 0

    @staticmethod
    def _parse_status_to_change_type(status: str) -> FileChangeType:
        """Parse git status code to FileChangeType."""
        status_code = status[0].upper() if status else ""
        match status_code:
            case "A":
                return FileChangeType.ADDED
            case "M":
                return FileChangeType.MODIFIED
            case "D":
                return FileChangeType.DELETED
            case "R":
                return FileChangeType.RENAMED
            case "C":
                return FileChangeType.COPIED
            case _:
                return FileChangeType.MODIFIED  # Default fallback
