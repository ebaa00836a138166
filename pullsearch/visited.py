from __future__ import annotations
from typing import Dict, Optional

from pullcore.state import StateKey


class VisitedTable:
    """Store the best known depth per (boxes, zone) key."""
    def __init__(self) -> None:
        self.best_depth: Dict[StateKey, int] = {}
        self.inserts = 0
        self.improvements = 0
        self.prunes = 0

    def seen_better(self, key: StateKey, depth: int) -> bool:
        """True if key was already reached at depth <= `depth` (prune).

        Otherwise records `depth` and returns False: either a first visit or
        a strict improvement whose subtree must be explored again.
        """
        old = self.best_depth.get(key)
        if old is None:
            self.best_depth[key] = depth
            self.inserts += 1
            return False
        if depth < old:
            self.best_depth[key] = depth
            self.improvements += 1
            return False
        self.prunes += 1
        return True

    def best(self, key: StateKey) -> Optional[int]:
        return self.best_depth.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.best_depth

    def __len__(self) -> int:
        return len(self.best_depth)
