"""Visited / best-cost table for graph search."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class NodeStatus(Enum):
    """Whether a discovered state is still in the frontier or already expanded."""
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class TableEntry:
    """Best known path cost for a state and its open/closed status."""
    cost: int
    status: NodeStatus = NodeStatus.OPEN

    @property
    def is_open(self) -> bool:
        return self.status is NodeStatus.OPEN

    @property
    def is_closed(self) -> bool:
        return self.status is NodeStatus.CLOSED


class VisitedTable:
    """Mapping from canonical state key to its best known cost.

    A key is created open on first discovery, may have its cost lowered
    while open, and once closed is never reopened.
    """

    def __init__(self):
        self._entries: Dict[bytes, TableEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: bytes) -> bool:
        return key in self._entries

    def get(self, key: bytes) -> Optional[TableEntry]:
        return self._entries.get(key)

    def record_open(self, key: bytes, cost: int) -> TableEntry:
        """Record a newly discovered state."""
        if key in self._entries:
            raise ValueError("State already recorded")
        entry = TableEntry(cost=cost)
        self._entries[key] = entry
        return entry

    def update_cost(self, key: bytes, cost: int) -> None:
        """Lower the recorded cost of an open state."""
        entry = self._entries[key]
        if entry.is_closed:
            raise ValueError("Closed states are never reopened")
        if cost >= entry.cost:
            raise ValueError(f"Cost {cost} does not improve on recorded cost {entry.cost}")
        entry.cost = cost

    def close(self, key: bytes) -> None:
        """Mark a state as expanded."""
        self._entries[key].status = NodeStatus.CLOSED

    @property
    def open_count(self) -> int:
        return sum(1 for entry in self._entries.values() if entry.is_open)

    @property
    def closed_count(self) -> int:
        return sum(1 for entry in self._entries.values() if entry.is_closed)
