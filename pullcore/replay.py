from __future__ import annotations
from collections import deque
from typing import Dict, Iterable, List, Optional, Tuple

from .bits import clear_bit, has_bit, set_bit
from .board import DIRECTIONS, Board, Direction
from .pulls import Push


def walk_path(board: Board, boxes: int, start: int, target: int) -> Optional[List[Direction]]:
    """Shortest player walk from start to target around walls and boxes (BFS), None if unreachable."""
    if start == target:
        return []
    parent: Dict[int, Tuple[int, Direction]] = {}
    seen = set_bit(0, start)
    q = deque([start])
    while q:
        cur = q.popleft()
        for d in DIRECTIONS:
            nb = board.step(cur, d)
            if nb is None or has_bit(seen, nb):
                continue
            if not board.is_floor(nb) or has_bit(boxes, nb):
                continue
            seen = set_bit(seen, nb)
            parent[nb] = (cur, d)
            if nb == target:
                path: List[Direction] = []
                node = nb
                while node != start:
                    node, step_dir = parent[node]
                    path.append(step_dir)
                path.reverse()
                return path
            q.append(nb)
    return None


def _apply_push(board: Board, boxes: int, player: Optional[int], push: Push) -> Tuple[int, int, List[Direction]]:
    """Returns (new boxes, new player cell, walk taken before the push)."""
    if not has_bit(boxes, push.box):
        raise ValueError(f"no box on cell {board.idx_to_rc(push.box)}")
    stand = board.step(push.box, push.direction.opposite)
    dest = board.step(push.box, push.direction)
    if stand is None or not board.is_floor(stand) or has_bit(boxes, stand):
        raise ValueError(f"no room to push box at {board.idx_to_rc(push.box)} {push.direction.name}")
    if dest is None or not board.is_floor(dest) or has_bit(boxes, dest):
        raise ValueError(f"box at {board.idx_to_rc(push.box)} is blocked {push.direction.name}")
    walk: List[Direction] = []
    if player is not None:
        path = walk_path(board, boxes, player, stand)
        if path is None:
            raise ValueError(f"player cannot reach {board.idx_to_rc(stand)} to push {push.direction.name}")
        walk = path
    boxes = set_bit(clear_bit(boxes, push.box), dest)
    return boxes, push.box, walk


def replay_pushes(board: Board, pushes: Iterable[Push]) -> int:
    """Plays pushes forward from the start layout and returns the final boxes bitset.

    Raises ValueError on the first push that is not playable. When the board
    has no player start, the walk to the first push is not checked.
    """
    boxes, player = board.boxes, board.player
    for push in pushes:
        boxes, player, _ = _apply_push(board, boxes, player, push)
    return boxes


def pushes_to_lurd(board: Board, pushes: Iterable[Push]) -> str:
    """Full move string: lowercase letters for walking, uppercase for pushes."""
    if board.player is None:
        raise ValueError("level has no player start, cannot produce a move string")
    boxes, player = board.boxes, board.player
    out: List[str] = []
    for push in pushes:
        boxes, player, walk = _apply_push(board, boxes, player, push)
        out.extend(d.letter for d in walk)
        out.append(push.direction.letter.upper())
    return "".join(out)
