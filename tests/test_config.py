import pytest
from pullcore.parser import parse_level_str
from pullsearch.config import SearchConfig, build_pruners, load_config

CORRIDOR = """
######
#@$ .#
######
"""


def test_load_config(tmp_path):
    p = tmp_path / "search.yaml"
    p.write_text("search:\n  heuristic: hungarian\n  max_depth: 40\n  node_limit: 500\n", encoding="utf-8")
    cfg = load_config(str(p))
    assert cfg.heuristic == "hungarian"
    assert cfg.max_depth == 40
    assert cfg.node_limit == 500
    assert cfg.cost_limit is None


def test_empty_file_gives_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("", encoding="utf-8")
    assert load_config(str(p)) == SearchConfig()


def test_unknown_key_is_rejected(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("search:\n  beam_width: 3\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(p))


def test_flags_override_file_values():
    cfg = SearchConfig(max_depth=10, node_limit=100)
    merged = cfg.merged({"max_depth": 5, "node_limit": None})
    assert merged.max_depth == 5
    assert merged.node_limit == 100


def test_build_pruners():
    b = parse_level_str(CORRIDOR)
    assert build_pruners(SearchConfig(), b) == []
    cfg = SearchConfig(heuristic="hungarian", max_depth=3, cost_limit=7, prune_unreachable=True)
    assert len(build_pruners(cfg, b)) == 3
