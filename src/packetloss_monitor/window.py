from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Optional

from .config import ConfigurationError


class SlidingWindow:
    """Most recent probe outcomes, oldest first, with a running failure count.

    Once ``capacity`` outcomes are held, every push evicts the oldest one so
    the loss rate always describes recent behaviour. Both the append and the
    eviction are O(1); ``failed`` is kept in step with the records instead of
    being recounted.
    """

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ConfigurationError(f"window capacity must be an integer, got {capacity!r}")
        if capacity <= 0:
            raise ConfigurationError(f"window capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._records: Deque[bool] = deque()
        self._failed = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def size(self) -> int:
        return len(self._records)

    @property
    def failed(self) -> int:
        return self._failed

    def push(self, success: bool):
        if len(self._records) == self._capacity:
            evicted = self._records.popleft()
            if not evicted:
                self._failed -= 1
        self._records.append(success)
        if not success:
            self._failed += 1

    def loss_rate(self) -> Optional[float]:
        """Fraction of failures in the window, or None before the first push."""
        if not self._records:
            return None
        return self._failed / len(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[bool]:
        return iter(self._records)
