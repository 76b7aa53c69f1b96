from __future__ import annotations

import os

from .errors import AccessError
from .scanmodel import Entry


def mtime(entry: Entry) -> int:
    """
    Return the modification time of the entry in nanoseconds since the epoch.

    Symbolic links are followed.

    Raises:
        AccessError: The metadata could not be read, has no modification
            time, or the modification time is before the epoch.
    """
    try:
        stat_result = os.stat(entry.path)
    except OSError as error:
        raise AccessError(entry.path, error.strerror or str(error)) from error

    mtime_ns = getattr(stat_result, "st_mtime_ns", None)
    if mtime_ns is None:
        raise AccessError(entry.path, "no modification time available")

    if mtime_ns < 0:
        raise AccessError(entry.path, "modification time is before the epoch")

    return mtime_ns
