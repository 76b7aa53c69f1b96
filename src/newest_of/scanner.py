from __future__ import annotations

import logging
import time
from collections.abc import Callable
from collections.abc import Iterable

from . import extfilter
from . import metadata
from .errors import AccessError
from .errors import TraversalError
from .resultset import BoundedResultSet
from .scanmodel import Candidate
from .scanmodel import Entry
from .scanmodel import FilterConfig
from .scanmodel import Order
from .scanmodel import ScanResult
from .scanmodel import ScanStats
from .walker import walk

CandidateCallback = Callable[[Candidate], None]
ErrorCallback = Callable[[str, str], None]

DEFAULT_COUNT = 10


class Scanner:
    """Find the entries with the most extreme modification times."""

    logger = logging.getLogger(__name__)

    def __init__(
        self,
        filter_config: FilterConfig,
        *,
        count: int = DEFAULT_COUNT,
        order: Order = Order.NEWEST,
        unordered: bool = False,
        sort_entries: bool = False,
        on_candidate: CandidateCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """
        Initialize a new Scanner.

        Args:
            filter_config: Extension sets and directory flag to apply.

        Keyword Args:
            count: The number of entries to keep. Ignored when unordered.
            order: Keep the newest or the oldest entries. Ignored when unordered.
            unordered: Hand every accepted candidate to on_candidate as it is
                found instead of keeping the top entries.
            sort_entries: Walk siblings in name order.
            on_candidate: Receives each candidate in unordered mode.
            on_error: Receives (path, reason) for every entry or root that
                could not be read, as soon as it happens.
        """
        self._filter = filter_config
        self._count = count
        self._order = order
        self._unordered = unordered
        self._sort_entries = sort_entries
        self._on_candidate = on_candidate
        self._on_error = on_error

    @property
    def unordered(self) -> bool:
        return self._unordered

    def scan(self, paths: Iterable[str]) -> ScanResult:
        """
        Scan every path and return the kept entries with the visit counter.

        A root that fails part way contributes what was found before the
        failure and the next root is still scanned.
        """
        tic = time.perf_counter()
        stats = ScanStats()
        errors: list[tuple[str, str]] = []
        results = None if self._unordered else BoundedResultSet(self._count, self._order)

        for root in paths:
            self.logger.debug("Scanning path: %s", root)

            try:
                for entry in walk(root, sort_entries=self._sort_entries):
                    stats.visited += 1

                    candidate = self._build_candidate(entry, stats, errors)
                    if candidate is None:
                        continue

                    if results is None:
                        self._emit(candidate)
                    else:
                        results.offer(candidate)

            except TraversalError as error:
                self.logger.error("Stopped scanning '%s': %s", root, error)
                stats.failed_roots += 1
                self._report_error(error, errors)

        toc = time.perf_counter()
        self.logger.debug("Scan finished in %s seconds", toc - tic)
        self.logger.info("Visited %s entries", stats.visited)

        entries = results.entries() if results is not None else []
        return ScanResult(entries=entries, stats=stats, errors=errors)

    def _build_candidate(
        self,
        entry: Entry,
        stats: ScanStats,
        errors: list[tuple[str, str]],
    ) -> Candidate | None:
        """Return a candidate for the entry or None if it is filtered or unreadable."""
        if not self._is_included(entry):
            return None

        try:
            mtime_ns = metadata.mtime(entry)

        except AccessError as error:
            self.logger.warning("Skipping '%s': %s", error.path, error.reason)
            stats.failed_entries += 1
            self._report_error(error, errors)
            return None

        return Candidate(entry, mtime_ns)

    def _is_included(self, entry: Entry) -> bool:
        """True if the entry survives the directory flag and extension filter."""
        if entry.is_dir:
            return self._filter.include_directories

        return extfilter.passes(
            entry.extension,
            self._filter.include,
            self._filter.exclude,
        )

    def _emit(self, candidate: Candidate) -> None:
        if self._on_candidate is not None:
            self._on_candidate(candidate)

    def _report_error(
        self,
        error: AccessError | TraversalError,
        errors: list[tuple[str, str]],
    ) -> None:
        errors.append((error.path, error.reason))
        if self._on_error is not None:
            self._on_error(error.path, error.reason)
