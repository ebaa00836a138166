from collections import deque

import pytest
from pullcore.board import Direction
from pullcore.parser import parse_level_str
from pullcore.pulls import Pull, Push, apply_pull, iter_pulls
from pullcore.state import State
from pullsearch.dfs import ReverseSearch

TWO_ZONES = """
########
#  . $@#
#  . $ #
########
"""

# box starts in a corner: unsolvable
CORNER = """
#####
#$  #
# @ #
#  .#
#####
"""


def _root(board, zone):
    return next(r for r in ReverseSearch(board).roots() if r.zone == zone)


def test_pulls_from_right_zone():
    b = parse_level_str(TWO_ZONES)
    root = _root(b, 12)
    succs = list(iter_pulls(b, root))
    assert [(d, box) for d, box, _ in succs] == [(Direction.RIGHT, 11), (Direction.RIGHT, 19)]
    first = succs[0][2]
    assert first.boxes == (1 << 12) | (1 << 19)
    assert first.zone == 13
    assert first.can_reach(14) and not first.can_reach(10)


def test_depth_grows_by_one():
    b = parse_level_str(TWO_ZONES)
    frontier = ReverseSearch(b).roots()
    for _ in range(3):
        nxt = []
        for s in frontier:
            for _, _, succ in iter_pulls(b, s):
                assert succ.depth == s.depth + 1
                nxt.append(succ)
        frontier = nxt
    assert frontier


def test_apply_pull_matches_generator():
    b = parse_level_str(TWO_ZONES)
    root = _root(b, 12)
    for d, box, succ in iter_pulls(b, root):
        assert apply_pull(b, root, Pull(box, d)) == succ


def test_apply_pull_rejects_illegal():
    b = parse_level_str(TWO_ZONES)
    root = _root(b, 12)
    with pytest.raises(ValueError):
        apply_pull(b, root, Pull(11, Direction.LEFT))  # player is on the other side
    with pytest.raises(ValueError):
        apply_pull(b, root, Pull(12, Direction.RIGHT))  # no box there


def test_pull_as_push():
    b = parse_level_str(TWO_ZONES)
    assert Pull(11, Direction.RIGHT).as_push(b) == Push(box=12, direction=Direction.LEFT)


def test_state_key_ignores_depth():
    a = State(boxes=5, zone=3, depth=1, reach=8)
    c = State(boxes=5, zone=3, depth=4, reach=0)
    assert a.key == c.key
    assert a != c


def test_corner_never_entered():
    b = parse_level_str(CORNER)
    corners = (1 << 6) | (1 << 8) | (1 << 16)  # (3,3) is the goal corner
    seen = set()
    q = deque(ReverseSearch(b).roots())
    while q:
        s = q.popleft()
        if s.key in seen:
            continue
        seen.add(s.key)
        assert s.boxes & corners == 0
        for _, _, succ in iter_pulls(b, s):
            q.append(succ)
    assert len(seen) > 1
