from typing import Optional

from .bits import has_bit
from .board import Board


def render_ascii(board: Board, boxes: Optional[int] = None, player: Optional[int] = None) -> str:
    """ASCII visualization of a box layout (the start layout by default)."""
    if boxes is None:
        boxes = board.boxes
        if player is None:
            player = board.player
    out_lines = []
    for r in range(board.height):
        row_chars = []
        for c in range(board.width):
            idx = r * board.width + c
            if board.is_wall(idx):
                row_chars.append('#')
                continue
            if not board.is_floor(idx):
                row_chars.append(' ')
                continue
            has_goal = board.is_goal_cell(idx)
            if idx == player:
                row_chars.append('+' if has_goal else '@')
            elif has_bit(boxes, idx):
                row_chars.append('*' if has_goal else '$')
            else:
                row_chars.append('.' if has_goal else '-')
        out_lines.append(''.join(row_chars).rstrip())
    return "\n".join(out_lines)
