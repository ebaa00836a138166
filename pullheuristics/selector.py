from __future__ import annotations
from typing import Callable

from pullcore.board import Board
from pullcore.state import State
from pullheuristics.classic import StartLayoutDistance, h_zero


def get_heuristic(name: str, board: Board) -> Callable[[State], int]:
    name = name.lower()
    if name == "zero":
        return h_zero
    if name == "hungarian":
        return StartLayoutDistance(board)
    raise ValueError(f"unknown heuristic: {name}")
