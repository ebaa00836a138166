from collections import deque
from typing import Dict

from .bits import has_bit, iter_bits, lowest_bit, set_bit
from .board import Board


def zone_mask(board: Board, boxes: int, start: int) -> int:
    """Returns the bitmask of floor cells reachable from start without crossing walls or boxes."""
    if not board.is_floor(start) or has_bit(boxes, start):
        return 0
    visited = set_bit(0, start)
    q = deque([start])

    while q:
        cur = q.popleft()
        for nb in board.neighbors(cur):
            if not board.is_floor(nb) or has_bit(boxes, nb):
                continue
            if not has_bit(visited, nb):
                visited = set_bit(visited, nb)
                q.append(nb)
    return visited


def zone_id(mask: int) -> int:
    """Canonical zone id: the lowest cell index in the zone (-1 for an empty zone)."""
    return lowest_bit(mask)


def partition_zones(board: Board, boxes: int) -> Dict[int, int]:
    """Splits the free floor (floor minus boxes) into connected zones.

    Returns zone id -> zone mask, in increasing zone id order. Every free
    floor cell belongs to exactly one zone.
    """
    zones: Dict[int, int] = {}
    unvisited = board.floor & ~boxes
    while unvisited:
        seed = lowest_bit(unvisited)
        mask = zone_mask(board, boxes, seed)
        zones[seed] = mask
        unvisited &= ~mask
    return zones


def zone_labels(board: Board, boxes: int) -> Dict[int, int]:
    """Cell -> zone id for every free floor cell."""
    labels: Dict[int, int] = {}
    for zid, mask in partition_zones(board, boxes).items():
        for idx in iter_bits(mask):
            labels[idx] = zid
    return labels


def zone_touches_box(board: Board, boxes: int, mask: int) -> bool:
    """True if some cell of the zone is next to a box, i.e. the player could pull from it."""
    for idx in iter_bits(mask):
        for nb in board.neighbors(idx):
            if has_bit(boxes, nb):
                return True
    return False
