#!/usr/bin/env python3
"""
Script to turn git commits into reveal.js markdown slides:
- Repository path
- Commit selection (branch, since date + period, file regex, max count, explicit hashes)
- Slide format (organization, highlighting, diff display, templates)
- Output file (optional, defaults to stdout)
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

from git_slides.git.domain.entities import Commit
from git_slides.git.domain.value_objects import CommitFilter, TimePeriod
from git_slides.git.repositories.implementations import GitRepositoryImpl
from git_slides.git.services.git_service import GitService
from git_slides.slides.domain.value_objects import (
    HighlightMode,
    LineChangeDisplay,
    SlideOrganization,
    SlideTitle,
)
from git_slides.slides.repositories.factory import load_format_options
from git_slides.slides.services.preview_service import SlidePreviewService
from git_slides.slides.templates import load_template


def select_commits(commits: tuple[Commit, ...], requested: list[str] | None) -> list[Commit]:
    """Keep the commits whose hash starts with one of the requested hashes."""
    if not requested:
        return list(commits)
    return [
        commit
        for commit in commits
        if any(commit.hash.startswith(prefix) for prefix in requested)
    ]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="git-slides",
        description="Generate reveal.js markdown slides from git commits and their diffs",
    )
    parser.add_argument(
        "repo_path",
        type=Path,
        help="Path to the git repository directory",
    )
    parser.add_argument("--branch", type=str, default=None, help="Branch to read commits from")
    parser.add_argument(
        "--since",
        type=datetime.fromisoformat,
        default=None,
        help="Only commits after this ISO date (e.g. 2024-01-31)",
    )
    parser.add_argument(
        "--period",
        choices=[p.value for p in TimePeriod],
        default=TimePeriod.PRESENT.value,
        help="Length of the window starting at --since (default: present)",
    )
    parser.add_argument(
        "--file-regex",
        type=str,
        default=None,
        help="Only include files whose path matches this regular expression",
    )
    parser.add_argument(
        "--max-commits",
        type=int,
        default=50,
        help="Maximum number of commits to read (default: 50)",
    )
    parser.add_argument(
        "--commit",
        action="append",
        default=None,
        help="Restrict to this commit hash or prefix (repeatable)",
    )
    parser.add_argument(
        "--organization",
        choices=[o.value for o in SlideOrganization],
        default=None,
        help="Slide organization (default: flat)",
    )
    parser.add_argument(
        "--highlight-mode",
        choices=[m.value for m in HighlightMode],
        default=None,
        help="Reveal highlighted ranges all at once or step by step (default: stepped)",
    )
    parser.add_argument(
        "--line-change-display",
        choices=[d.value for d in LineChangeDisplay],
        default=None,
        help="Show only additions or the full diff (default: additions-only)",
    )
    parser.add_argument(
        "--full-file",
        action="store_true",
        default=None,
        help="Show the whole file instead of the extracted diff",
    )
    parser.add_argument(
        "--no-highlight",
        action="store_true",
        help="Do not highlight added lines",
    )
    parser.add_argument(
        "--context-lines",
        type=int,
        default=None,
        help="Context lines around each change (default: 3)",
    )
    parser.add_argument(
        "--slide-title",
        choices=[t.value for t in SlideTitle],
        default=None,
        help="What slide titles are made of (default: both)",
    )
    parser.add_argument("--date-format", type=str, default=None, help="Date format, e.g. 'MMM d, yyyy'")
    parser.add_argument(
        "--speaker-notes",
        action="store_true",
        default=None,
        help="Add the commit message body as speaker notes",
    )
    parser.add_argument(
        "--slide-template",
        type=Path,
        default=None,
        help="Path to a custom slide template",
    )
    parser.add_argument(
        "--commit-details-template",
        type=Path,
        default=None,
        help="Path to a custom commit details template",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output markdown file (default: stdout)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main function to parse arguments, read commits and write slides."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    git_service = GitService(GitRepositoryImpl())
    if not git_service.is_valid_repo(args.repo_path):
        print(f"✗ Path is not a git repository: {args.repo_path}", file=sys.stderr)
        sys.exit(1)

    try:
        options = load_format_options(
            slide_organization=args.organization and SlideOrganization(args.organization),
            highlight_mode=args.highlight_mode and HighlightMode(args.highlight_mode),
            line_change_display=args.line_change_display
            and LineChangeDisplay(args.line_change_display),
            show_full_file=args.full_file,
            highlight_added_lines=False if args.no_highlight else None,
            context_lines=args.context_lines,
            slide_title=args.slide_title and SlideTitle(args.slide_title),
            date_format=args.date_format,
            message_body_as_speaker_notes=args.speaker_notes,
            slide_template=args.slide_template and load_template(args.slide_template),
            commit_details_template=args.commit_details_template
            and load_template(args.commit_details_template),
        )
    except (ValueError, FileNotFoundError, RuntimeError) as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    commit_filter = CommitFilter(
        branch=args.branch,
        since_date=args.since,
        period=TimePeriod(args.period),
        file_regex=args.file_regex,
        max_commits=args.max_commits,
    )

    try:
        commits = select_commits(
            git_service.list_commits(args.repo_path, commit_filter), args.commit
        )
        if not commits:
            print("✗ No commits match the selection", file=sys.stderr)
            sys.exit(1)

        selected_files = {
            commit.hash: [change.file_path for change in commit.files] for commit in commits
        }
        preview_service = SlidePreviewService(git_service, args.repo_path, options)
        markdown = asyncio.run(preview_service.generate(commits, selected_files))
    except RuntimeError as e:
        print(f"✗ Failed to generate slides: {e}", file=sys.stderr)
        sys.exit(1)

    if not markdown:
        print("✗ Nothing selected: the commits have no files to show", file=sys.stderr)
        sys.exit(1)

    if args.output is None:
        print(markdown)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(markdown + "\n", encoding="utf-8")
        print(f"✓ {len(commits)} commit(s) written as slides to {args.output.absolute()}")

    sys.exit(0)


if __name__ == "__main__":
    main()
