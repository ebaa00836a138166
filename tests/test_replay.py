import pytest
from pullcore.board import Direction
from pullcore.parser import parse_level_str
from pullcore.pulls import Push
from pullcore.replay import pushes_to_lurd, replay_pushes, walk_path
from pullsearch.dfs import solve

LVL = """
#####
#@  #
# $ #
# . #
#####
"""

CORRIDOR = """
######
#@$ .#
######
"""


def test_walk_path():
    b = parse_level_str(LVL)
    assert walk_path(b, b.boxes, 6, 6) == []
    assert walk_path(b, b.boxes, 6, 8) == [Direction.RIGHT, Direction.RIGHT]
    # the box blocks the way through the middle
    assert len(walk_path(b, b.boxes, 7, 17)) == 4
    assert walk_path(b, b.boxes, 6, 12) is None


def test_lurd():
    assert pushes_to_lurd(parse_level_str(LVL), solve(parse_level_str(LVL))["pushes"]) == "rD"
    b = parse_level_str(CORRIDOR)
    assert pushes_to_lurd(b, [Push(8, Direction.RIGHT), Push(9, Direction.RIGHT)]) == "RR"


def test_replay_rejects_bad_push():
    b = parse_level_str(CORRIDOR)
    with pytest.raises(ValueError):
        replay_pushes(b, [Push(8, Direction.UP)])
    with pytest.raises(ValueError):
        replay_pushes(b, [Push(9, Direction.RIGHT)])
    with pytest.raises(ValueError):
        replay_pushes(b, [Push(8, Direction.LEFT)])  # player can't get behind the box


def test_lurd_needs_player():
    b = parse_level_str("######\n# $ .#\n######")
    with pytest.raises(ValueError):
        pushes_to_lurd(b, [])
    # without a start cell the walk to the first push is not checked
    assert replay_pushes(b, [Push(8, Direction.RIGHT), Push(9, Direction.RIGHT)]) == b.goals
