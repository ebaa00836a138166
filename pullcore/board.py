from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from .bits import has_bit, popcount

__all__ = [
    "Board",
    "BoardError",
    "Direction",
    "DIRECTIONS",
]


class BoardError(ValueError):
    """Malformed level: inconsistent dimensions, boxes off the floor, box/goal count mismatch."""


class Direction(Enum):
    UP = (-1, 0, "u")
    DOWN = (1, 0, "d")
    LEFT = (0, -1, "l")
    RIGHT = (0, 1, "r")

    @property
    def dr(self) -> int:
        return self.value[0]

    @property
    def dc(self) -> int:
        return self.value[1]

    @property
    def letter(self) -> str:
        return self.value[2]

    @property
    def order(self) -> int:
        return _ORDER[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]


# fixed tie-break order used by every enumeration
DIRECTIONS: Tuple[Direction, ...] = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
_ORDER = {d: i for i, d in enumerate(DIRECTIONS)}
_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True, slots=True)
class Board:
    """
    Static description of a level.

    Cell indexing: idx = r*width + c. walls/floor/goals/boxes are bitsets.
    boxes is the forward-start layout, i.e. what the reverse search has to reach.
    player is the forward start cell of the player, None if the level does not say.
    """

    width: int
    height: int
    walls: int # bitset
    floor: int # bitset
    goals: int # bitset
    boxes: int # bitset
    player: Optional[int] = None


    # ---- conversions
    @property
    def size(self) -> int:
        return self.width * self.height


    def idx_to_rc(self, idx: int) -> Tuple[int, int]:
        return (idx // self.width, idx % self.width)


    def rc_to_idx(self, r: int, c: int) -> int:
        return r * self.width + c


    # ---- cell queries
    def is_wall(self, idx: int) -> bool:
        return has_bit(self.walls, idx)


    def is_floor(self, idx: int) -> bool:
        return has_bit(self.floor, idx)


    def is_goal_cell(self, idx: int) -> bool:
        return has_bit(self.goals, idx)


    def box_count(self) -> int:
        return popcount(self.boxes)


    def neighbors(self, idx: int) -> Iterable[int]:
        """4-neighborhood without diagonals."""
        w = self.width
        r, c = self.idx_to_rc(idx)
        if r > 0: yield idx - w
        if r + 1 < self.height: yield idx + w
        if c > 0: yield idx - 1
        if c + 1 < w: yield idx + 1


    def step(self, idx: int, direction: Direction) -> Optional[int]:
        """Neighbour of idx in direction, None when it falls off the grid."""
        r, c = self.idx_to_rc(idx)
        r += direction.dr
        c += direction.dc
        if r < 0 or r >= self.height or c < 0 or c >= self.width:
            return None
        return r * self.width + c


    # ---- invariants
    def validate(self) -> "Board":
        if self.width <= 0 or self.height <= 0:
            raise BoardError(f"invalid dimensions {self.width}x{self.height}")
        full = (1 << self.size) - 1
        for name in ("walls", "floor", "goals", "boxes"):
            mask = getattr(self, name)
            if mask < 0 or mask & ~full:
                raise BoardError(f"{name} reference cells outside the {self.width}x{self.height} grid")
        if self.walls & self.floor:
            raise BoardError("wall and floor cells overlap")
        if self.boxes & ~self.floor:
            bad = [self.idx_to_rc(i) for i in range(self.size) if has_bit(self.boxes & ~self.floor, i)]
            raise BoardError(f"boxes not on floor cells: {bad}")
        if self.goals & ~self.floor:
            bad = [self.idx_to_rc(i) for i in range(self.size) if has_bit(self.goals & ~self.floor, i)]
            raise BoardError(f"goals not on floor cells: {bad}")
        n_boxes, n_goals = popcount(self.boxes), popcount(self.goals)
        if n_boxes != n_goals:
            raise BoardError(f"{n_boxes} boxes but {n_goals} goals")
        if self.player is not None:
            if not 0 <= self.player < self.size or not self.is_floor(self.player):
                raise BoardError(f"player start {self.player} is not a floor cell")
            if has_bit(self.boxes, self.player):
                raise BoardError("player starts on a box")
        return self
