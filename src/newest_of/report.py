from __future__ import annotations

import logging

from .scanmodel import Candidate
from .scanmodel import ScanResult


def format_candidate(candidate: Candidate) -> str:
    """Return the report line for a candidate: seconds, local time and path."""
    return str(candidate)


class ScanReporter:
    """Write scan results to stdout and, optionally, a file."""

    logger = logging.getLogger(__name__)

    def __init__(self, *, reverse: bool = False, output_file: str | None = None) -> None:
        """
        Initialize the reporter.

        Keyword Args:
            reverse: Show the most interesting entry first instead of last.
            output_file: Also append every line to this file.
        """
        self._reverse = reverse
        self._output_file = output_file

    def candidate(self, candidate: Candidate) -> None:
        """Report a single candidate as soon as it is found (unordered mode)."""
        self._write([format_candidate(candidate)])

    def result(self, result: ScanResult, *, include_entries: bool = True) -> None:
        """
        Report the kept entries of a scan followed by the visit summary.

        Keyword Args:
            include_entries: False when the entries were already streamed.
        """
        lines: list[str] = []
        if include_entries:
            entries = result.entries[::-1] if self._reverse else result.entries
            lines.extend(format_candidate(candidate) for candidate in entries)

        lines.append(f"Visited {result.total_visited} entries")
        self._write(lines)

    def _write(self, lines: list[str]) -> None:
        self.to_stdout(lines)
        self.to_file(lines)

    def to_stdout(self, lines: list[str]) -> None:
        """Print lines to stdout."""
        if not lines:
            return

        print("\n".join(lines))

    def to_file(self, lines: list[str]) -> None:
        """Append lines to the output file, if one is set."""
        if not self._output_file or not lines:
            return

        with open(self._output_file, "a") as file_out:
            file_out.write("\n".join(lines) + "\n")

        self.logger.debug("Wrote %d lines to %s", len(lines), self._output_file)
