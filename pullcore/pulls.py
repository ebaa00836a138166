from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .bits import clear_bit, has_bit, iter_bits, set_bit
from .board import DIRECTIONS, Board, Direction
from .state import State


@dataclass(frozen=True, slots=True)
class Push:
    """Forward move: the box on cell `box` is pushed one cell towards `direction`."""

    box: int
    direction: Direction


@dataclass(frozen=True, slots=True)
class Pull:
    """Reverse move: the box on cell `box` is pulled one cell towards `direction`.

    The player stands next to the box on the `direction` side and backs away
    one more cell, dragging the box behind.
    """

    box: int
    direction: Direction

    def as_push(self, board: Board) -> Push:
        """The forward push that undoes this pull: the box goes back from box+D to box."""
        dest = board.step(self.box, self.direction)
        if dest is None:
            raise ValueError(f"pull of box {self.box} {self.direction.name} leaves the grid")
        return Push(box=dest, direction=self.direction.opposite)


def _pull_cells(board: Board, state: State, box: int, direction: Direction) -> Optional[Tuple[int, int]]:
    """(cell the box moves into, cell the player retreats to) if the pull is legal, else None."""
    stand = board.step(box, direction)
    if stand is None or not state.can_reach(stand):
        return None
    retreat = board.step(stand, direction)
    if retreat is None or not board.is_floor(retreat) or state.has_box(retreat):
        return None
    return stand, retreat


def iter_pulls(board: Board, state: State) -> Iterator[Tuple[Direction, int, State]]:
    """Lazily yields (direction, box, successor) for every legal pull.

    Boxes are enumerated in increasing cell index, directions in UP, DOWN,
    LEFT, RIGHT order. The player needs the cell next to the box (inside its
    zone) and the cell behind that one (free floor); the box takes the first,
    the player ends on the second. A box never lands where the player could
    not have pushed it from, so forward dead squares are never produced.
    """
    for box in iter_bits(state.boxes):
        for direction in DIRECTIONS:
            cells = _pull_cells(board, state, box, direction)
            if cells is None:
                continue
            stand, retreat = cells
            new_boxes = set_bit(clear_bit(state.boxes, box), stand)
            yield direction, box, State.make(board, new_boxes, retreat, state.depth + 1)


def apply_pull(board: Board, state: State, pull: Pull) -> State:
    """Applies a single pull, raising ValueError if it is not legal in state."""
    if not has_bit(state.boxes, pull.box):
        raise ValueError(f"no box on cell {pull.box}")
    cells = _pull_cells(board, state, pull.box, pull.direction)
    if cells is None:
        raise ValueError(f"illegal pull of box {pull.box} {pull.direction.name}")
    stand, retreat = cells
    new_boxes = set_bit(clear_bit(state.boxes, pull.box), stand)
    return State.make(board, new_boxes, retreat, state.depth + 1)
