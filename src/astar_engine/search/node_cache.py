"""Per-search arena of search-state records keyed by node identity."""

from typing import Any, Dict, List

from astar_engine.core.data_models import SearchState


class NodeCache:
    """Lazily materializes one ``SearchState`` per distinct node.

    Nodes are keyed by ``id()``, never by ``==`` or ``hash()``. Each node gets
    a stable integer handle on first encounter; parents are stored as handles
    into the same arena. The arena holds a strong reference to every record
    (and so to every node), which keeps ``id()`` values from being reused
    while the search runs.
    """

    def __init__(self):
        self._handles: Dict[int, int] = {}
        self._records: List[SearchState] = []

    def get(self, node: Any) -> SearchState:
        """Return the record for ``node``, allocating it on first request."""
        handle = self._handles.get(id(node))
        if handle is not None:
            return self._records[handle]

        handle = len(self._records)
        record = SearchState(node=node, handle=handle)
        self._records.append(record)
        self._handles[id(node)] = handle
        return record

    def record(self, handle: int) -> SearchState:
        """Resolve an arena handle back to its record."""
        return self._records[handle]

    def __contains__(self, node: Any) -> bool:
        return id(node) in self._handles

    def __len__(self) -> int:
        return len(self._records)
