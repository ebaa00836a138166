from collections import deque
from typing import Dict, List, Optional

from .bits import has_bit, set_bit
from .board import Board, BoardError

TOK_WALL = "#"
TOK_GOAL = "."
TOK_BOX = "$"
TOK_BOX_ON_GOAL = "*"
TOK_PLAYER = "@"
TOK_PLAYER_ON_GOAL = "+"
TOK_VOID = " "
TOK_COMMENT = ";"

# digit codes of the compact "HHWW<cells>" encoding
CODE_EMPTY = 0
CODE_WALL = 1
CODE_GOAL = 2
CODE_BOX = 3
CODE_PLAYER = 4
CODE_BOX_ON_GOAL = 5
CODE_PLAYER_ON_GOAL = 6


def _floor_from_seeds(width: int, height: int, walls: int, seeds: int) -> int:
    """Cells connected to any seed through non-wall cells."""
    floor = 0
    q = deque()
    for idx in range(width * height):
        if has_bit(seeds, idx) and not has_bit(walls, idx):
            floor = set_bit(floor, idx)
            q.append(idx)
    while q:
        cur = q.popleft()
        r, c = divmod(cur, width)
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nr, nc = r + dr, c + dc
            if nr < 0 or nr >= height or nc < 0 or nc >= width:
                continue
            nb = nr * width + nc
            if has_bit(walls, nb) or has_bit(floor, nb):
                continue
            floor = set_bit(floor, nb)
            q.append(nb)
    return floor


def _build(width: int, height: int, walls: int, goals: int, boxes: int, player: Optional[int]) -> Board:
    seeds = goals | boxes
    if player is not None:
        seeds = set_bit(seeds, player)
    floor = _floor_from_seeds(width, height, walls, seeds)
    return Board(width=width, height=height, walls=walls, floor=floor,
                 goals=goals, boxes=boxes, player=player).validate()


def parse_level_str(level_str: str) -> Board:
    """Parses an ASCII (XSB) level into a Board.

    Supported characters:
      '#': wall
      '.': goal
      '$': box
      '*': box on goal
      '@': player
      '+': player on goal
      ' ', '-', '_': floor, or void when not connected to the level
    Lines starting with ';' are comments. The player is optional.
    """
    lines = [line.rstrip("\n") for line in level_str.splitlines()
             if line.strip() != "" and not line.lstrip().startswith(TOK_COMMENT)]
    if not lines:
        raise BoardError("Empty level")
    height = len(lines)
    width = max(len(line) for line in lines)
    lines = [line.ljust(width, TOK_VOID) for line in lines]

    walls = goals = boxes = 0
    player: Optional[int] = None

    for r, line in enumerate(lines):
        for c, ch in enumerate(line):
            idx = r * width + c
            if ch == TOK_WALL:
                walls = set_bit(walls, idx)
            elif ch == TOK_GOAL:
                goals = set_bit(goals, idx)
            elif ch == TOK_BOX:
                boxes = set_bit(boxes, idx)
            elif ch == TOK_BOX_ON_GOAL:
                boxes = set_bit(boxes, idx)
                goals = set_bit(goals, idx)
            elif ch in (TOK_PLAYER, TOK_PLAYER_ON_GOAL):
                if player is not None:
                    raise BoardError("more than one player in level")
                player = idx
                if ch == TOK_PLAYER_ON_GOAL:
                    goals = set_bit(goals, idx)
            elif ch not in (TOK_VOID, "-", "_"):
                raise BoardError(f"unknown level character {ch!r} at row {r}, col {c}")

    return _build(width, height, walls, goals, boxes, player)


def parse_level_file(path: str) -> Board:
    with open(path, "r", encoding="utf-8") as f:
        return parse_level_str(f.read())


def parse_compact(code: str) -> Board:
    """Parses the digit encoding: 2 digits height, 2 digits width, then one digit per cell row by row."""
    code = code.strip()
    if len(code) < 4 or not code[:4].isdigit():
        raise BoardError(f"compact level must start with HHWW digits: {code[:4]!r}")
    height, width = int(code[0:2]), int(code[2:4])
    cells = code[4:]
    if len(cells) != width * height:
        raise BoardError(f"compact level {height}x{width} needs {width * height} cells, got {len(cells)}")

    walls = goals = boxes = 0
    player: Optional[int] = None
    for idx, ch in enumerate(cells):
        if not ch.isdigit() or int(ch) > CODE_PLAYER_ON_GOAL:
            raise BoardError(f"bad cell code {ch!r} at offset {idx}")
        k = int(ch)
        if k == CODE_WALL:
            walls = set_bit(walls, idx)
        if k in (CODE_GOAL, CODE_BOX_ON_GOAL, CODE_PLAYER_ON_GOAL):
            goals = set_bit(goals, idx)
        if k in (CODE_BOX, CODE_BOX_ON_GOAL):
            boxes = set_bit(boxes, idx)
        if k in (CODE_PLAYER, CODE_PLAYER_ON_GOAL):
            if player is not None:
                raise BoardError("more than one player in level")
            player = idx
    return _build(width, height, walls, goals, boxes, player)


def to_compact(board: Board) -> str:
    codes: Dict[tuple, int] = {
        (False, False, False): CODE_EMPTY,
        (True, False, False): CODE_GOAL,
        (False, True, False): CODE_BOX,
        (True, True, False): CODE_BOX_ON_GOAL,
        (False, False, True): CODE_PLAYER,
        (True, False, True): CODE_PLAYER_ON_GOAL,
    }
    out: List[str] = [f"{board.height:02d}{board.width:02d}"]
    for idx in range(board.size):
        if board.is_wall(idx):
            out.append(str(CODE_WALL))
            continue
        key = (board.is_goal_cell(idx), has_bit(board.boxes, idx), idx == board.player)
        out.append(str(codes[key]))
    return "".join(out)
