from __future__ import annotations

import logging
import os
from collections.abc import Iterator

from .errors import TraversalError
from .scanmodel import Entry

logger = logging.getLogger(__name__)


def walk(root: str, *, sort_entries: bool = False) -> Iterator[Entry]:
    """
    Lazily yield every entry below root, root included, in pre-order.

    A child directory is fully walked before its next sibling is yielded. A
    root that is not a directory is yielded alone without reading anything.
    Symbolic links are reported as whatever they point to and are followed.

    Args:
        root: The file or directory to start from.
        sort_entries: Sort siblings by name. Without this the order is the
            filesystem's enumeration order.

    Raises:
        TraversalError: A directory could not be listed. The walk of this
            root ends at that point.
    """
    if not os.path.isdir(root):
        yield Entry(root, is_dir=False)
        return

    yield Entry(root, is_dir=True)

    # One iterator of pending children per open directory level
    pending: list[Iterator[Entry]] = [iter(_read_children(root, sort_entries))]

    while pending:
        child = next(pending[-1], None)
        if child is None:
            pending.pop()
            continue

        yield child

        if child.is_dir:
            pending.append(iter(_read_children(child.path, sort_entries)))


def _read_children(dirpath: str, sort_entries: bool) -> list[Entry]:
    """
    Return the direct children of a directory.

    Raises:
        TraversalError
    """
    logger.debug("Reading directory: %s", dirpath)
    children: list[Entry] = []

    try:
        with os.scandir(dirpath) as scanner:
            for dir_entry in scanner:
                children.append(Entry(dir_entry.path, _is_dir(dir_entry)))

    except OSError as error:
        raise TraversalError(dirpath, error.strerror or str(error)) from error

    if sort_entries:
        children.sort(key=lambda entry: os.path.basename(entry.path))

    return children


def _is_dir(dir_entry: os.DirEntry[str]) -> bool:
    """True if the entry, or the target of a link, is a directory."""
    try:
        return dir_entry.is_dir()
    except OSError:
        # A dangling or unreadable link is treated as a plain entry
        return False
