import pytest
from pullcore.board import Board, BoardError, Direction
from pullcore.parser import parse_level_str

LVL = """
#####
#@  #
# $ #
# . #
#####
"""


def test_step_and_neighbors():
    b = parse_level_str(LVL)
    assert b.step(12, Direction.UP) == 7
    assert b.step(12, Direction.LEFT) == 11
    assert b.step(0, Direction.UP) is None
    assert sorted(b.neighbors(12)) == [7, 11, 13, 17]
    assert b.idx_to_rc(12) == (2, 2)
    assert b.rc_to_idx(2, 2) == 12


def test_direction_helpers():
    assert Direction.UP.opposite is Direction.DOWN
    assert Direction.LEFT.letter == "l"
    assert [d.order for d in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)] == [0, 1, 2, 3]


def test_validate_rejects_box_on_wall():
    b = parse_level_str(LVL)
    bad = Board(width=b.width, height=b.height, walls=b.walls, floor=b.floor,
                goals=b.goals, boxes=1 << 0, player=b.player)
    with pytest.raises(BoardError):
        bad.validate()


def test_validate_rejects_count_mismatch():
    b = parse_level_str(LVL)
    bad = Board(width=b.width, height=b.height, walls=b.walls, floor=b.floor,
                goals=b.goals | (1 << 18), boxes=b.boxes, player=b.player)
    with pytest.raises(BoardError, match="1 boxes but 2 goals"):
        bad.validate()


def test_validate_rejects_player_on_box():
    b = parse_level_str(LVL)
    bad = Board(width=b.width, height=b.height, walls=b.walls, floor=b.floor,
                goals=b.goals, boxes=b.boxes, player=12)
    with pytest.raises(BoardError):
        bad.validate()
