"""Fetch, cache and render the selected commits as slides."""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import NamedTuple

from git_slides.diff.domain.value_objects import FileDiff
from git_slides.diff.services.diff_parser import parse_diff_hunks
from git_slides.git.domain.entities import Commit
from git_slides.git.services.git_service import GitService
from git_slides.git.services.language_service import detect_language
from git_slides.slides.domain.value_objects import SlideFormatOptions
from git_slides.slides.services.slide_generator import SlideGenerator

logger = logging.getLogger(__name__)


class DiffCacheKey(NamedTuple):
    """Options that change what is fetched for a commit."""

    commit_hash: str
    context_lines: int
    show_full_file: bool


class SlidePreviewService:
    """Service that turns a commit/file selection into slide markdown.

    Fetched file diffs are cached per commit and fetch-affecting options.
    Only one generation runs at a time; an overlapping call is dropped.
    """

    def __init__(
        self,
        git_service: GitService,
        repo_path: Path,
        options: SlideFormatOptions,
    ) -> None:
        """
        Initialize SlidePreviewService.

        Args:
            git_service: Service used to fetch diffs and file content
            repo_path: Path to the git repository
            options: Slide format options
        """
        self._git_service = git_service
        self._repo_path = repo_path
        self._options = options
        self._cache: dict[DiffCacheKey, dict[str, FileDiff]] = {}
        self._is_generating = False

    @property
    def options(self) -> SlideFormatOptions:
        return self._options

    @property
    def is_generating(self) -> bool:
        return self._is_generating

    def update_options(self, options: SlideFormatOptions) -> None:
        """
        Replace the format options.

        The cache is cleared when context lines or full-file display change.
        """
        if (
            options.context_lines != self._options.context_lines
            or options.show_full_file != self._options.show_full_file
        ):
            self.clear_cache()
        self._options = options

    def set_repository(self, repo_path: Path) -> None:
        """Switch to another repository, dropping everything cached."""
        self._repo_path = repo_path
        self.clear_cache()

    def clear_cache(self) -> None:
        self._cache.clear()

    async def generate(
        self,
        commits: Sequence[Commit],
        selected_files: Mapping[str, Sequence[str]],
    ) -> str | None:
        """
        Generate slide markdown for the selection.

        Args:
            commits: Selected commits, oldest first
            selected_files: Selected file paths keyed by commit hash

        Returns:
            Slide markdown, an empty string when nothing is selected, or None
            when another generation is already running

        Raises:
            RuntimeError: If fetching a diff or file content from git fails.
                          The in-progress guard is released first.
        """
        if not commits or not any(selected_files.get(c.hash) for c in commits):
            return ""

        if self._is_generating:
            logger.warning("Slide generation already in progress, dropping request")
            return None

        self._is_generating = True
        try:
            options = self._options
            file_diffs: dict[str, list[FileDiff]] = {}
            for commit in commits:
                paths = selected_files.get(commit.hash)
                if not paths:
                    continue
                file_diffs[commit.hash] = await self._load_diffs(commit.hash, paths, options)

            return SlideGenerator(options).generate_slides(commits, file_diffs)
        finally:
            self._is_generating = False

    async def _load_diffs(
        self, commit_hash: str, paths: Sequence[str], options: SlideFormatOptions
    ) -> list[FileDiff]:
        key = DiffCacheKey(commit_hash, options.context_lines, options.show_full_file)
        cached = self._cache.setdefault(key, {})

        diffs: list[FileDiff] = []
        for path in paths:
            diff = cached.get(path)
            if diff is None:
                logger.debug("Fetching diff for %s in %s", path, commit_hash[:8])
                diff = await self._fetch_diff(commit_hash, path, options)
                cached[path] = diff
            else:
                logger.debug("Using cached diff for %s in %s", path, commit_hash[:8])
            diffs.append(diff)
        return diffs

    async def _fetch_diff(
        self, commit_hash: str, path: str, options: SlideFormatOptions
    ) -> FileDiff:
        diff_text = await asyncio.to_thread(
            self._git_service.get_file_diff,
            self._repo_path,
            commit_hash,
            path,
            options.context_lines,
        )

        content: str | None = None
        if options.show_full_file:
            content = await asyncio.to_thread(
                self._git_service.get_file_content, self._repo_path, commit_hash, path
            )

        return FileDiff(
            path=path,
            hunks=tuple(parse_diff_hunks(diff_text)),
            new_content=content,
            language=detect_language(path),
        )
