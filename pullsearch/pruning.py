"""Optional pruning predicates plugged into the reverse search.

A pruner is called as pruner(board, state) for every candidate successor and
returns True to drop it. The base search runs without any.
"""
from __future__ import annotations
from typing import Callable

from pullcore.board import Board
from pullcore.state import State

INF = 10 ** 9

Pruner = Callable[[Board, State], bool]


def depth_limit(max_depth: int) -> Pruner:
    def prune(board: Board, state: State) -> bool:
        return state.depth > max_depth
    prune.__name__ = f"depth_limit({max_depth})"
    return prune


def cost_limit(h_fn: Callable[[State], int], limit: int) -> Pruner:
    """Drops states whose depth plus lower bound exceeds limit."""
    def prune(board: Board, state: State) -> bool:
        return state.depth + h_fn(state) > limit
    prune.__name__ = f"cost_limit({limit})"
    return prune


def unreachable_boxes(h_fn: Callable[[State], int]) -> Pruner:
    """Drops states where the lower bound reports INF (some box can't reach the start layout)."""
    def prune(board: Board, state: State) -> bool:
        return h_fn(state) >= INF
    prune.__name__ = "unreachable_boxes"
    return prune
