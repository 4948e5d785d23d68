"""Git domain entities."""

from dataclasses import dataclass
from datetime import datetime

from git_slides.git.domain.value_objects import FileChange


@dataclass(frozen=True)
class Commit:
    """Commit entity.

    ``message`` is the raw message (title and optional body) and ``author``
    is either ``"Name <email>"`` or a bare name.
    """

    hash: str
    short_hash: str
    message: str
    author: str
    date: datetime
    files: tuple[FileChange, ...] = ()
