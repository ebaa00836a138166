from __future__ import annotations
from collections import deque
from typing import List

import numpy as np
from scipy.optimize import linear_sum_assignment
from pullcore.bits import iter_bits
from pullcore.board import Board
from pullcore.state import State

INF = 10 ** 9


# ---- helpers

def distance_map(board: Board, target: int) -> np.ndarray:
    """Walk distance from target to every floor cell, taking only walls into account.

    A box is moved one cell per pull, so this bounds the pulls a box needs to
    get from a cell to target. Cells off the floor, or cut off from target, hold INF.

      ######
      #12#6#
      #x1#5#
      #1234#
      ######
    """
    dist = np.full(board.size, INF, dtype=np.int64)
    if not board.is_floor(target):
        return dist
    dist[target] = 0
    q = deque([target])
    while q:
        cur = q.popleft()
        for nb in board.neighbors(cur):
            if board.is_floor(nb) and dist[nb] == INF:
                dist[nb] = dist[cur] + 1
                q.append(nb)
    return dist


# ---- classical heuristics

def h_zero(state: State) -> int:
    return 0


class StartLayoutDistance:
    """Lower bound on the pulls left: optimal matching of boxes → start-layout cells by walk distance.

    Other boxes are ignored (this is a valid lower bound). INF when some box
    cannot reach any start cell, or no complete matching avoids such a pair.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.targets: List[int] = list(iter_bits(board.boxes))
        # rows: target cell, columns: board cell
        if self.targets:
            self.table = np.stack([distance_map(board, t) for t in self.targets])
        else:
            self.table = np.zeros((0, board.size), dtype=np.int64)

    def __call__(self, state: State) -> int:
        boxes = list(iter_bits(state.boxes))
        if not boxes:
            return 0
        C = self.table[:, boxes].T  # box x target
        if (C.min(axis=1) >= INF).any():
            return INF
        r, c = linear_sum_assignment(C)
        total = int(C[r, c].sum())
        return INF if total >= INF else total
