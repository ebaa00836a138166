from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

import yaml

from pullcore.board import Board
from pullheuristics.selector import get_heuristic
from .pruning import Pruner, cost_limit, depth_limit, unreachable_boxes


@dataclass
class SearchConfig:
    heuristic: str = "zero"
    cost_limit: Optional[int] = None
    max_depth: Optional[int] = None
    prune_unreachable: bool = False
    time_limit_s: Optional[float] = None
    node_limit: Optional[int] = None
    log_every: int = 10000

    def merged(self, overrides: Dict[str, Any]) -> "SearchConfig":
        """Copy with every non-None override applied (command line flags win over the file)."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for k, v in overrides.items():
            if k not in values:
                raise ValueError(f"unknown search option: {k}")
            if v is not None:
                values[k] = v
        return SearchConfig(**values)


def load_config(path: str) -> SearchConfig:
    """Reads the `search:` section of a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    section = cfg.get("search", {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"{path}: 'search' must be a mapping")
    return SearchConfig().merged(section)


def build_pruners(cfg: SearchConfig, board: Board) -> List[Pruner]:
    pruners: List[Pruner] = []
    if cfg.max_depth is not None:
        pruners.append(depth_limit(cfg.max_depth))
    if cfg.cost_limit is not None or cfg.prune_unreachable:
        h = get_heuristic(cfg.heuristic, board)
        if cfg.cost_limit is not None:
            pruners.append(cost_limit(h, cfg.cost_limit))
        if cfg.prune_unreachable:
            pruners.append(unreachable_boxes(h))
    return pruners
