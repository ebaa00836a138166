"""Progress events of the reverse search.

The search never logs by itself: it reports to an observer passed in by the
caller. LoggingObserver forwards events to the "pullsearch" logger; the log
level is the caller's business (see scripts/run_search.py).
"""
from __future__ import annotations
from typing import List, Optional
import logging

from pullcore.pulls import Pull
from pullcore.state import State


class SearchObserver:
    """No-op base; override the events you care about."""

    def on_root(self, state: State) -> None:
        pass

    def on_expand(self, state: State) -> None:
        pass

    def on_prune(self, state: State, reason: str) -> None:
        pass

    def on_solved(self, state: State, pulls: List[Pull]) -> None:
        pass

    def on_exhausted(self, nodes: int) -> None:
        pass


class CountingObserver(SearchObserver):
    def __init__(self) -> None:
        self.roots = 0
        self.expanded = 0
        self.pruned = 0
        self.solved = False
        self.exhausted = False

    def on_root(self, state: State) -> None:
        self.roots += 1

    def on_expand(self, state: State) -> None:
        self.expanded += 1

    def on_prune(self, state: State, reason: str) -> None:
        self.pruned += 1

    def on_solved(self, state: State, pulls: List[Pull]) -> None:
        self.solved = True

    def on_exhausted(self, nodes: int) -> None:
        self.exhausted = True


class LoggingObserver(SearchObserver):
    def __init__(self, logger: Optional[logging.Logger] = None, every: int = 10000) -> None:
        self.log = logger or logging.getLogger("pullsearch")
        self.every = max(1, every)
        self.expanded = 0

    def on_root(self, state: State) -> None:
        self.log.debug("root zone=%d boxes=%#x", state.zone, state.boxes)

    def on_expand(self, state: State) -> None:
        self.expanded += 1
        if self.expanded % self.every == 0:
            self.log.info("expanded %d states, depth=%d", self.expanded, state.depth)

    def on_prune(self, state: State, reason: str) -> None:
        self.log.debug("pruned (%s) depth=%d zone=%d", reason, state.depth, state.zone)

    def on_solved(self, state: State, pulls: List[Pull]) -> None:
        self.log.info("solved after %d expansions: %d pulls", self.expanded, len(pulls))

    def on_exhausted(self, nodes: int) -> None:
        self.log.info("search exhausted after %d expansions", nodes)
