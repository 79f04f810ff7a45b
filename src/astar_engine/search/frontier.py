"""Indexed binary min-heap used as the A* open set.

``heapq`` cannot remove an arbitrary element, so this heap sifts by hand and
writes every record's slot back into ``record.position`` on each move.
"""

from typing import List

from astar_engine.core.data_models import SearchState


class PriorityFrontier:
    """Min-priority queue of search states ordered by ``rank``.

    Ties are broken arbitrarily. Every structural mutation keeps each
    contained record's ``position`` equal to its slot in ``self.heap``;
    ``remove`` relies on that.
    """

    def __init__(self):
        self.heap: List[SearchState] = []

    def push(self, record: SearchState) -> None:
        """Insert ``record`` and set its position."""
        record.position = len(self.heap)
        self.heap.append(record)
        self._sift_up(record.position)

    def pop_min(self) -> SearchState:
        """Remove and return the lowest-rank record.

        Raises:
            IndexError: If the frontier is empty
        """
        if not self.heap:
            raise IndexError("pop_min from an empty frontier")
        return self._remove_at(0)

    def remove(self, record: SearchState) -> None:
        """Remove a record currently in the frontier using its position."""
        i = record.position
        if i < 0 or i >= len(self.heap) or self.heap[i] is not record:
            raise ValueError("record is not in the frontier")
        self._remove_at(i)

    def peek(self) -> SearchState:
        """Return the lowest-rank record without removing it.

        Raises:
            IndexError: If the frontier is empty
        """
        if not self.heap:
            raise IndexError("peek from an empty frontier")
        return self.heap[0]

    def is_empty(self) -> bool:
        return not self.heap

    def __len__(self) -> int:
        return len(self.heap)

    def _remove_at(self, i: int) -> SearchState:
        last = len(self.heap) - 1
        if i != last:
            self._swap(i, last)
        record = self.heap.pop()
        record.position = -1
        if i < len(self.heap):
            # The record moved into slot i may belong above or below it.
            if not self._sift_down(i):
                self._sift_up(i)
        return record

    def _less(self, i: int, j: int) -> bool:
        return self.heap[i].rank < self.heap[j].rank

    def _swap(self, i: int, j: int) -> None:
        heap = self.heap
        heap[i], heap[j] = heap[j], heap[i]
        heap[i].position = i
        heap[j].position = j

    def _sift_up(self, i: int) -> None:
        while i > 0:
            parent = (i - 1) // 2
            if not self._less(i, parent):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> bool:
        """Move slot ``i`` down; return True if it moved."""
        start = i
        n = len(self.heap)
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            smallest = left
            right = left + 1
            if right < n and self._less(right, left):
                smallest = right
            if not self._less(smallest, i):
                break
            self._swap(i, smallest)
            i = smallest
        return i > start
