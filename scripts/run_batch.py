from __future__ import annotations
import argparse, csv, logging, os, time
from typing import Dict, List, Optional, Sequence
from multiprocessing import Pool, cpu_count
from tqdm import tqdm

from pullcore.levels.io import iterate_level_strings
from pullcore.levels.resolve import load_level_by_id
from pullsearch.config import SearchConfig, build_pruners, load_config
from pullsearch.dfs import solve

log = logging.getLogger("run_batch")

FIELDS = ["level_id", "success", "outcome", "nodes", "visited", "runtime", "solution_len"]


def _run_one(args_tuple) -> Dict[str, object]:
    level_id, cfg = args_tuple
    try:
        board = load_level_by_id(level_id)
        res = solve(board, pruners=build_pruners(cfg, board),
                    time_limit_s=cfg.time_limit_s, node_limit=cfg.node_limit)
        return {
            "level_id": level_id,
            "success": bool(res["success"]),
            "outcome": res["outcome"],
            "nodes": int(res["nodes"]),
            "visited": int(res["visited"]),
            "runtime": float(res["runtime"]),
            "solution_len": int(res.get("solution_len", -1)),
        }
    except (OSError, ValueError, IndexError) as e:
        log.warning("%s: %s", level_id, e)
        return {"level_id": level_id, "success": False, "outcome": f"error: {e}", "nodes": 0,
                "visited": 0, "runtime": 0.0, "solution_len": -1}


def collect_level_ids(list_path: Optional[str] = None, levels_dir: Optional[str] = None,
                      subdirs: Sequence[str] = (".",)) -> List[str]:
    """Level ids (file.txt#idx) from a list file, or from every .txt pack under levels_dir/subdirs."""
    if list_path is not None:
        with open(list_path, "r", encoding="utf-8") as f:
            return [ln.strip() for ln in f if ln.strip() and not ln.strip().startswith("#")]
    return [f"{ref.path}#{ref.index}" for ref, _ in iterate_level_strings(levels_dir, list(subdirs))]


def main():
    p = argparse.ArgumentParser(description="Batch reverse-search runs → CSV (flags, parallel)")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--list", help="file with one level id (file.txt#idx) per line")
    src.add_argument("--levels_dir", help="root folder of .txt level packs")
    p.add_argument("--subdirs", nargs="+", default=["."], help="subfolders of --levels_dir to scan")
    p.add_argument("--config", type=str, default=None)
    p.add_argument("--out", default="results/batch.csv")
    p.add_argument("--time_limit", type=float, default=None)
    p.add_argument("--node_limit", type=int, default=None)
    p.add_argument("--jobs", type=int, default=0, help="processes (0→cpu_count)")
    p.add_argument("--log_level", type=str, default=os.environ.get("LOG_LEVEL", "WARNING"))
    args = p.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    cfg = load_config(args.config) if args.config else SearchConfig()
    cfg = cfg.merged({"time_limit_s": args.time_limit, "node_limit": args.node_limit})

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)

    level_ids = collect_level_ids(args.list, args.levels_dir, args.subdirs)

    jobs = args.jobs or cpu_count()
    payload = [(lid, cfg) for lid in level_ids]

    started = time.time()
    if jobs == 1:
        rows = [_run_one(t) for t in tqdm(payload, desc="Solving", unit="level")]
    else:
        with Pool(processes=jobs) as pool:
            rows = list(tqdm(pool.imap_unordered(_run_one, payload), total=len(payload), desc="Solving", unit="level"))

    with open(args.out, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        for r in rows:
            w.writerow(r)

    solved = sum(1 for r in rows if r["success"])
    print(f"done: {solved}/{len(rows)} solved → {args.out}; total_time={time.time()-started:.2f}s; jobs={jobs}")


if __name__ == "__main__":
    main()
