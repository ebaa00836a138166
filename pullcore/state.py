from dataclasses import dataclass, field
from typing import Tuple

from .bits import has_bit
from .board import Board
from .zones import zone_id, zone_mask

__all__ = ["State", "StateKey"]

StateKey = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class State:
    """
    Node of the reverse search.

    boxes: bitset of box cells.
    zone: canonical id of the player's zone under this box layout.
    depth: pulls applied since the goal layout.
    reach: the zone's cells; derived from (boxes, zone), so it takes no part in equality.
    """

    boxes: int # bitset
    zone: int
    depth: int
    reach: int = field(default=0, compare=False, repr=False)


    @classmethod
    def make(cls, board: Board, boxes: int, player: int, depth: int) -> "State":
        """State with the player standing on player; zone and reach are recomputed."""
        reach = zone_mask(board, boxes, player)
        return cls(boxes=boxes, zone=zone_id(reach), depth=depth, reach=reach)


    @property
    def key(self) -> StateKey:
        """Visited table key: depth is the value, not part of the key."""
        return (self.boxes, self.zone)


    def has_box(self, idx: int) -> bool:
        return has_bit(self.boxes, idx)


    def can_reach(self, idx: int) -> bool:
        return has_bit(self.reach, idx)
