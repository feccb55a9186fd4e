"""Data models for commitctx.

Contains:
- ChangeScope: Which change partitions a request covers
- DiffRecord: Diff excerpt for a single file
- ChangeSection: Index-aligned paths and diff texts for one change partition
- ChangeSet: The staged, tracked and untracked sections of one snapshot
- LogEntry: One commit returned by a commit-log query
- CommitRecord: A merged commit with the queried paths it touched
- ContextFragment: One bounded unit of text for the downstream generator
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterator, Optional


class ChangeScope(Enum):
    """Change partitions covered by a generation request."""

    ALL = "all"  # staged + tracked + untracked
    STAGED = "staged"
    WORKING_TREE = "working-tree"  # tracked + untracked, staged left out


@dataclass(frozen=True)
class DiffRecord:
    """Diff excerpt for a single file."""

    file_path: str  # Repo-relative, forward slashes
    excerpt: str
    char_count: int


@dataclass(frozen=True)
class ChangeSection:
    """Paths and diff texts of one change partition, aligned by index."""

    paths: tuple[str, ...] = ()
    diffs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.paths) != len(self.diffs):
            raise ValueError(
                f"ChangeSection has {len(self.paths)} paths but {len(self.diffs)} diffs"
            )

    @classmethod
    def empty(cls) -> "ChangeSection":
        return cls()

    @classmethod
    def from_pairs(cls, pairs: list[tuple[str, str]]) -> "ChangeSection":
        """Build a section from (path, diff) pairs."""
        return cls(
            paths=tuple(path for path, _ in pairs),
            diffs=tuple(diff for _, diff in pairs),
        )

    @property
    def is_empty(self) -> bool:
        return not self.diffs

    def __len__(self) -> int:
        return len(self.diffs)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(zip(self.paths, self.diffs))


@dataclass(frozen=True)
class ChangeSet:
    """The three change sections of one repository snapshot."""

    staged: ChangeSection = field(default_factory=ChangeSection)
    tracked: ChangeSection = field(default_factory=ChangeSection)
    untracked: ChangeSection = field(default_factory=ChangeSection)

    def sections(self) -> list[tuple[str, ChangeSection]]:
        """Return (label, section) pairs in packing order."""
        return [
            ("staged", self.staged),
            ("tracked", self.tracked),
            ("untracked", self.untracked),
        ]

    @property
    def is_empty(self) -> bool:
        return self.staged.is_empty and self.tracked.is_empty and self.untracked.is_empty


@dataclass(frozen=True)
class LogEntry:
    """A commit as returned by the commit-log capability."""

    hash: str
    author_name: Optional[str] = None
    author_date: Optional[datetime] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class CommitRecord:
    """A commit merged across all queried paths."""

    hash: str
    author_date: Optional[datetime] = None
    author_name: Optional[str] = None
    message: Optional[str] = None
    attributed_paths: tuple[str, ...] = ()  # First-seen order

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


@dataclass(frozen=True)
class ContextFragment:
    """One bounded unit of text handed to the text generator."""

    label: str
    ordinal: int  # 1-based
    total: int
    body: str
    path: Optional[str] = None
    truncated: bool = False
