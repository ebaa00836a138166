from __future__ import annotations
import argparse
import logging
import os

from pullcore.levels.resolve import load_level_by_id
from pullcore.parser import parse_compact, parse_level_str
from pullcore.render import render_ascii
from pullcore.replay import pushes_to_lurd
from pullsearch.config import SearchConfig, build_pruners, load_config
from pullsearch.dfs import solve
from pullsearch.observer import LoggingObserver

LVL = """
#######
#@    #
# $$  #
#  .. #
#######
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Solve one Sokoban level by pulling boxes back from the goals")
    p.add_argument("--level", type=str, default="inline", help="path to .txt level, level id 'file.txt#3' or 'inline'")
    p.add_argument("--compact", type=str, default=None, help="level in the HHWW<digits> encoding")
    p.add_argument("--config", type=str, default=None, help="YAML file with a 'search' section")
    p.add_argument("--h", type=str, default=None, choices=["zero", "hungarian"], help="heuristic used by the pruners")
    p.add_argument("--cost_limit", type=int, default=None)
    p.add_argument("--max_depth", type=int, default=None)
    p.add_argument("--prune_unreachable", action="store_true", default=None)
    p.add_argument("--time_limit", type=float, default=None)
    p.add_argument("--node_limit", type=int, default=None)
    p.add_argument("--log_level", type=str, default=os.environ.get("LOG_LEVEL", "WARNING"))
    return p


def main():
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config) if args.config else SearchConfig()
    cfg = cfg.merged({
        "heuristic": args.h,
        "cost_limit": args.cost_limit,
        "max_depth": args.max_depth,
        "prune_unreachable": args.prune_unreachable,
        "time_limit_s": args.time_limit,
        "node_limit": args.node_limit,
    })

    if args.compact:
        board = parse_compact(args.compact)
    elif args.level == "inline":
        board = parse_level_str(LVL)
    else:
        board = load_level_by_id(args.level)

    print(render_ascii(board))
    res = solve(board,
                observer=LoggingObserver(every=cfg.log_every),
                pruners=build_pruners(cfg, board),
                time_limit_s=cfg.time_limit_s,
                node_limit=cfg.node_limit)
    print("Result:", {k: v for k, v in res.items() if k not in ("pulls", "pushes")})
    if res.get("success"):
        pushes = res["pushes"]  # type: ignore
        for i, push in enumerate(pushes):
            print(f"push {i + 1}: box {board.idx_to_rc(push.box)} {push.direction.name}")
        if board.player is not None:
            print("moves:", pushes_to_lurd(board, pushes))

if __name__ == "__main__":
    main()
