from __future__ import annotations

import logging
import os
from configparser import ConfigParser

from .extfilter import normalize_extensions
from .scanmodel import FilterConfig
from .scanmodel import Order

NEW_CONFIG = """\
[scan]
# Paths to scan, one per line. Directories are searched recursively.
paths = .

# Number of entries to keep and which end of the time range to keep.
count = 10
order = newest

# Extensions are matched exactly, without the leading dot.
# Use "." to match files that have no extension. Exclude wins over include.
include =
exclude =

# Also consider directories themselves as candidates.
directories = false

# Print every matching entry as it is found instead of keeping the top entries.
unordered = false

# Walk directory entries in name order for repeatable output.
sort_entries = false

# Print the most interesting entry first.
reverse = false

# Also append the report to this file.
output =

    """


class ScanConfig:
    """Configuration for a scan, read from an ini file."""

    logger = logging.getLogger("newest_of.ScanConfig")

    def __init__(self, filepath: str) -> None:
        """Load the configuration from the given file."""
        self._config = ConfigParser()
        success = self._config.read(filepath)

        if not success:
            raise ValueError(f"Could not read config file at {filepath}")

        self.logger.debug("Loaded config from %s", filepath)

    @property
    def paths(self) -> list[str]:
        """Return the paths to scan, empty if not set."""
        config_line = self._config.get("scan", "paths", fallback="")
        return [line.strip() for line in config_line.splitlines() if line.strip()]

    @property
    def count(self) -> int:
        """Return the number of entries to keep."""
        count = self._config.getint("scan", "count", fallback=10)
        if count < 0:
            raise ValueError(f"count must be zero or more, got {count}")
        return count

    @property
    def order(self) -> Order:
        """Return which end of the modification time range to keep."""
        value = self._config.get("scan", "order", fallback="newest").strip().lower()
        try:
            return Order(value)
        except ValueError:
            raise ValueError(f"order must be 'newest' or 'oldest', got '{value}'")

    @property
    def include(self) -> frozenset[str]:
        """Return the extensions to include."""
        return normalize_extensions([self._config.get("scan", "include", fallback="")])

    @property
    def exclude(self) -> frozenset[str]:
        """Return the extensions to exclude."""
        return normalize_extensions([self._config.get("scan", "exclude", fallback="")])

    @property
    def directories(self) -> bool:
        """Return whether directories are candidates."""
        return self._config.getboolean("scan", "directories", fallback=False)

    @property
    def unordered(self) -> bool:
        """Return whether to stream entries instead of keeping the top entries."""
        return self._config.getboolean("scan", "unordered", fallback=False)

    @property
    def sort_entries(self) -> bool:
        """Return whether to walk directory entries in name order."""
        return self._config.getboolean("scan", "sort_entries", fallback=False)

    @property
    def reverse(self) -> bool:
        """Return whether to print the most interesting entry first."""
        return self._config.getboolean("scan", "reverse", fallback=False)

    @property
    def output(self) -> str | None:
        """Return the file to append the report to, or None."""
        return self._config.get("scan", "output", fallback="").strip() or None

    def filter_config(self) -> FilterConfig:
        """Build the filter configuration for a scan."""
        return FilterConfig(
            include=self.include,
            exclude=self.exclude,
            include_directories=self.directories,
        )


def write_new_config(filename: str) -> None:
    """Write a new config file if one does not exist."""
    if os.path.exists(filename):
        return

    with open(filename, "w") as config_file:
        config_file.write(NEW_CONFIG)
