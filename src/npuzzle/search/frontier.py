"""Priority frontier for best-first search.

Binary heap ordered by ``f`` with FIFO tie-breaking. Decrease-key is done
by lazy deletion: the superseded heap entry is marked removed and skipped
on extraction, so a node replaced by a cheaper one is never returned.
"""

import heapq
import itertools
from typing import Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from npuzzle.search.astar import SearchNode

# Placeholder for a superseded heap entry
_REMOVED = None


class EmptyFrontier(Exception):
    """Raised when extracting from a frontier with no live entries."""
    pass


class Frontier:
    """Min-priority queue of search nodes keyed by canonical state key."""

    def __init__(self):
        self._heap: List[list] = []
        self._entries: Dict[bytes, list] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        """Number of live (non-superseded) entries."""
        return len(self._entries)

    def __contains__(self, key: bytes) -> bool:
        return key in self._entries

    def get(self, key: bytes) -> Optional["SearchNode"]:
        """Return the live node for a state key, if any."""
        entry = self._entries.get(key)
        return entry[-1] if entry is not None else None

    def insert(self, node: "SearchNode") -> None:
        """Push a node whose state is not already in the frontier."""
        key = node.key
        if key in self._entries:
            raise ValueError("State already in frontier; use decrease_key to replace it")

        # [f, insertion sequence, node]; the sequence is unique so nodes are never compared
        entry = [node.f, next(self._counter), node]
        self._entries[key] = entry
        heapq.heappush(self._heap, entry)

    def extract_min(self) -> "SearchNode":
        """Remove and return the node with smallest f (earliest inserted on ties).

        Raises:
            EmptyFrontier: If no live entries remain
        """
        while self._heap:
            node = heapq.heappop(self._heap)[-1]
            if node is not _REMOVED:
                del self._entries[node.key]
                return node
        raise EmptyFrontier("Frontier is empty")

    def decrease_key(self, old_node: "SearchNode", new_node: "SearchNode") -> None:
        """Replace the entry for ``old_node``'s state with ``new_node``.

        The replacement is inserted as a fresh entry, so it orders after
        existing entries with the same f.
        """
        if old_node.key != new_node.key:
            raise ValueError("decrease_key requires nodes for the same state")

        entry = self._entries.pop(old_node.key, None)
        if entry is not None:
            entry[-1] = _REMOVED
        self.insert(new_node)

    @property
    def stale_entries(self) -> int:
        """Superseded entries still sitting in the heap."""
        return len(self._heap) - len(self._entries)
