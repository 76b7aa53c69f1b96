from __future__ import annotations

import re
from collections.abc import Iterable
from collections.abc import Set


def passes(extension: str, include: Set[str], exclude: Set[str]) -> bool:
    """
    True if a file with the given extension should be considered.

    Matching is exact and case-sensitive. Exclusion wins over inclusion and an
    empty include set accepts everything not excluded.

    Args:
        extension: The file extension without the leading dot ("" for none).
        include: Extensions to accept. Empty accepts all.
        exclude: Extensions to reject.
    """
    if exclude and extension in exclude:
        return False

    return not include or extension in include


def normalize_extensions(values: Iterable[str] | None) -> frozenset[str]:
    """
    Build an extension set from raw flag or config values.

    Values may be comma or whitespace separated and may carry a leading dot,
    so ".go", "go" and "go,json" are all accepted. Case is kept as given.
    """
    extensions: set[str] = set()
    for value in values or []:
        for part in re.split(r"[,\s]+", value):
            if part:
                extensions.add(part[1:] if part.startswith(".") else part)

    return frozenset(extensions)
