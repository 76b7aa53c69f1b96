from __future__ import annotations

import dataclasses
import os
from datetime import datetime
from enum import Enum

NANOSECONDS = 1_000_000_000


class Order(Enum):
    """Which end of the modification time range is interesting."""

    NEWEST = "newest"
    OLDEST = "oldest"

    def interest_key(self, mtime_ns: int) -> int:
        """Return a key that sorts least interesting first."""
        return mtime_ns if self is Order.NEWEST else -mtime_ns


@dataclasses.dataclass(frozen=True)
class Entry:
    """A single filesystem object found during a walk."""

    path: str
    is_dir: bool

    @property
    def extension(self) -> str:
        """Return the extension of the basename without the leading dot."""
        _, ext = os.path.splitext(os.path.basename(self.path))
        return ext[1:]


@dataclasses.dataclass(frozen=True)
class Candidate:
    """An entry with its resolved modification time."""

    entry: Entry
    mtime_ns: int

    @property
    def path(self) -> str:
        return self.entry.path

    @property
    def seconds(self) -> int:
        """Return the modification time in whole seconds since the epoch."""
        return self.mtime_ns // NANOSECONDS

    @property
    def modified(self) -> datetime:
        """Return the modification time as a local datetime."""
        return datetime.fromtimestamp(self.mtime_ns / NANOSECONDS)

    def __str__(self) -> str:
        """Return a string representation of the candidate."""
        modified = self.modified.strftime("%Y-%m-%d %H:%M:%S")
        return f"{self.seconds} [{modified}] {self.path}"


@dataclasses.dataclass(frozen=True)
class FilterConfig:
    """Extension sets and the directory flag, fixed for the length of a scan."""

    include: frozenset[str] = frozenset()
    exclude: frozenset[str] = frozenset()
    include_directories: bool = False


@dataclasses.dataclass
class ScanStats:
    """Running counters for one scan across all input paths."""

    visited: int = 0
    failed_entries: int = 0
    failed_roots: int = 0


@dataclasses.dataclass
class ScanResult:
    """Everything a scan hands to the output layer."""

    entries: list[Candidate]
    stats: ScanStats
    errors: list[tuple[str, str]] = dataclasses.field(default_factory=list)

    @property
    def total_visited(self) -> int:
        return self.stats.visited
