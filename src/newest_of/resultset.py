from __future__ import annotations

from .scanmodel import Candidate
from .scanmodel import Order


class BoundedResultSet:
    """
    Keep the most interesting candidates seen, up to a fixed capacity.

    Candidates are held least interesting first, so index 0 is always the
    worst one kept. When full, a candidate that is not strictly more
    interesting than the worst kept is turned away without touching the set.
    Among equal timestamps the one offered first ranks higher, so it is the
    last of them to be evicted.

    The whole set is re-sorted on each accepted candidate. This is cheap for
    the small capacities the tool is used with; a heap keyed the same way
    would be the substitute for very large capacities.
    """

    def __init__(self, capacity: int, order: Order = Order.NEWEST) -> None:
        """
        Initialize an empty result set.

        Args:
            capacity: The maximum number of candidates kept. Zero keeps none.
            order: Whether newer or older candidates are more interesting.

        Raises:
            ValueError: capacity is negative.
        """
        if capacity < 0:
            raise ValueError(f"capacity must be zero or more, got {capacity}")

        self._capacity = capacity
        self._order = order
        self._kept: list[tuple[int, int, Candidate]] = []
        self._offered = 0

    def __len__(self) -> int:
        return len(self._kept)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def order(self) -> Order:
        return self._order

    @property
    def is_full(self) -> bool:
        return len(self._kept) >= self._capacity

    @property
    def worst(self) -> Candidate | None:
        """Return the least interesting candidate kept, if any."""
        return self._kept[0][2] if self._kept else None

    def offer(self, candidate: Candidate) -> bool:
        """
        Offer a candidate to the set.

        Returns:
            True if the candidate was kept, False if it was turned away.
        """
        if self._capacity == 0:
            return False

        key = self._order.interest_key(candidate.mtime_ns)

        if self.is_full and key <= self._kept[0][0]:
            return False

        self._offered += 1
        # Later offers rank below earlier ones with the same timestamp
        self._kept.append((key, -self._offered, candidate))
        self._kept.sort(key=lambda item: item[:2])

        if len(self._kept) > self._capacity:
            del self._kept[0]

        return True

    def entries(self) -> list[Candidate]:
        """Return the kept candidates, most interesting last."""
        return [candidate for _, _, candidate in self._kept]

    def merge(self, other: BoundedResultSet) -> None:
        """
        Offer every candidate of another set to this one.

        The other set is offered best first so its ties keep their rank.

        Raises:
            ValueError: The other set ranks candidates in a different order.
        """
        if other.order is not self._order:
            raise ValueError("Cannot merge result sets with different orders")

        for candidate in reversed(other.entries()):
            self.offer(candidate)
