from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple
import time

from pullcore.board import Board, Direction
from pullcore.pulls import Pull, Push, iter_pulls
from pullcore.state import State
from pullcore.zones import partition_zones, zone_id, zone_mask, zone_touches_box
from .observer import SearchObserver
from .pruning import Pruner
from .visited import VisitedTable

Result = Dict[str, object]

Candidate = Tuple[Direction, int, State]


@dataclass
class Frame:
    state: State
    pull: Optional[Pull]  # move that led here, None for a root
    moved_box: int  # cell of the box moved last, -1 for a root
    candidates: Optional[Iterator[Candidate]] = None


def pulls_to_pushes(board: Board, pulls: Sequence[Pull]) -> List[Push]:
    """Forward solution: the pull path read backwards, each pull turned into its push."""
    return [p.as_push(board) for p in reversed(pulls)]


class ReverseSearch:
    """Depth-first search from the goal layout back to the start layout by pulling boxes.

    Every zone of the goal layout that borders a box is a root, since the
    player's final zone is unknown. States are keyed by (boxes, zone) in a
    VisitedTable; a state is re-explored only when reached at a strictly
    smaller depth. Candidates continue with the box moved last, then follow
    direction and box order. The traversal keeps an explicit stack of frames.
    """

    def __init__(
        self,
        board: Board,
        observer: Optional[SearchObserver] = None,
        pruners: Sequence[Pruner] = (),
        time_limit_s: Optional[float] = None,
        node_limit: Optional[int] = None,
    ) -> None:
        self.board = board.validate()
        self.observer = observer or SearchObserver()
        self.pruners: List[Pruner] = list(pruners)
        self.time_limit_s = time_limit_s
        self.node_limit = node_limit
        self.visited = VisitedTable()
        self.nodes = 0

    # ---- roots and goal
    def roots(self) -> List[State]:
        """One depth-0 state per zone of the goal layout that touches a box, in zone id order."""
        goal_boxes = self.board.goals
        roots: List[State] = []
        for zid, mask in partition_zones(self.board, goal_boxes).items():
            if zone_touches_box(self.board, goal_boxes, mask):
                roots.append(State(boxes=goal_boxes, zone=zid, depth=0, reach=mask))
        return roots

    def is_goal(self, state: State) -> bool:
        """Boxes back on the start layout, with the player's start cell inside the zone."""
        if state.boxes != self.board.boxes:
            return False
        return self.board.player is None or state.can_reach(self.board.player)

    def _ordered(self, frame: Frame) -> Iterator[Candidate]:
        def priority(c: Candidate) -> Tuple[int, int, int]:
            direction, box, _ = c
            return (0 if box == frame.moved_box else 1, direction.order, box)
        return iter(sorted(iter_pulls(self.board, frame.state), key=priority))

    def _out_of_budget(self, t0: float) -> bool:
        if self.node_limit is not None and self.nodes >= self.node_limit:
            return True
        return self.time_limit_s is not None and (time.time() - t0) > self.time_limit_s

    # ---- results
    def _result(self, t0: float, outcome: str, pulls: Optional[List[Pull]] = None,
                root: Optional[State] = None) -> Result:
        res: Result = {
            "success": outcome == "solved",
            "outcome": outcome,
            "nodes": self.nodes,
            "visited": len(self.visited),
            "runtime": time.time() - t0,
        }
        if pulls is not None:
            pushes = pulls_to_pushes(self.board, pulls)
            res.update({
                "pulls": pulls,
                "pushes": pushes,
                "solution_len": len(pushes),
                "root_zone": root.zone if root is not None else None,
            })
        return res

    def _already_solved(self, t0: float) -> Optional[Result]:
        board = self.board
        if board.boxes != board.goals:
            return None
        zone = None
        if board.player is not None:
            zone = zone_id(zone_mask(board, board.boxes, board.player))
        res = self._result(t0, "solved", [])
        res["root_zone"] = zone
        self.observer.on_solved(State(boxes=board.boxes, zone=-1 if zone is None else zone, depth=0), [])
        return res

    # ---- search
    def solve(self) -> Result:
        t0 = time.time()
        done = self._already_solved(t0)
        if done is not None:
            return done

        for root in self.roots():
            self.observer.on_root(root)
            if self.visited.seen_better(root.key, root.depth):
                continue
            stack: List[Frame] = [Frame(state=root, pull=None, moved_box=-1)]

            while stack:
                frame = stack[-1]
                if frame.candidates is None:
                    if self._out_of_budget(t0):
                        return self._result(t0, "limit")
                    self.nodes += 1
                    self.observer.on_expand(frame.state)
                    frame.candidates = self._ordered(frame)

                nxt = next(frame.candidates, None)
                if nxt is None:
                    stack.pop()
                    continue

                direction, box, succ = nxt
                fired = next((p for p in self.pruners if p(self.board, succ)), None)
                if fired is not None:
                    self.observer.on_prune(succ, fired.__name__)
                    continue
                if self.visited.seen_better(succ.key, succ.depth):
                    self.observer.on_prune(succ, "visited")
                    continue

                pull = Pull(box=box, direction=direction)
                if self.is_goal(succ):
                    pulls = [f.pull for f in stack[1:] if f.pull is not None] + [pull]
                    self.observer.on_solved(succ, pulls)
                    return self._result(t0, "solved", pulls, root)

                moved = self.board.step(box, direction)
                stack.append(Frame(state=succ, pull=pull, moved_box=-1 if moved is None else moved))

        self.observer.on_exhausted(self.nodes)
        return self._result(t0, "exhausted")


def solve(
    board: Board,
    observer: Optional[SearchObserver] = None,
    pruners: Sequence[Pruner] = (),
    time_limit_s: Optional[float] = None,
    node_limit: Optional[int] = None,
) -> Result:
    return ReverseSearch(board, observer=observer, pruners=pruners,
                         time_limit_s=time_limit_s, node_limit=node_limit).solve()
