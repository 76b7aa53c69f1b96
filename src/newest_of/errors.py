from __future__ import annotations


class NewestOfError(Exception):
    """Base error carrying the offending path and a short reason."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class AccessError(NewestOfError):
    """The modification time of a single entry could not be read."""


class TraversalError(NewestOfError):
    """The children of a directory could not be listed."""
