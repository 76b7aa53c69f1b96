from __future__ import annotations

from .errors import AccessError
from .errors import TraversalError
from .resultset import BoundedResultSet
from .scanconfig import ScanConfig
from .scanmodel import Candidate
from .scanmodel import Entry
from .scanmodel import FilterConfig
from .scanmodel import Order
from .scanmodel import ScanResult
from .scanner import Scanner
from .walker import walk

__all__ = [
    "AccessError",
    "BoundedResultSet",
    "Candidate",
    "Entry",
    "FilterConfig",
    "Order",
    "ScanConfig",
    "ScanResult",
    "Scanner",
    "TraversalError",
    "walk",
]
