from __future__ import annotations
from typing import Tuple

from ..board import Board, BoardError
from ..parser import parse_compact, parse_level_str
from .io import split_levels


def parse_level_id(level_id: str) -> Tuple[str, int]:
    """Parses a string of the form "path/to/file.txt#3" into (path, index)."""
    if "#" not in level_id:
        return level_id, 0
    path, idx = level_id.rsplit("#", 1)
    try:
        k = int(idx)
    except ValueError:
        raise BoardError(f"bad level index in {level_id!r}") from None
    return path, k


def parse_block(block: str) -> Board:
    """A single-line all-digit block is the compact encoding, anything else is XSB."""
    stripped = block.strip()
    if "\n" not in stripped and stripped.isdigit():
        return parse_compact(stripped)
    return parse_level_str(block)


def load_level_by_id(level_id: str) -> Board:
    """Loads level file#idx, taking the wanted block from a multi-level pack."""
    path, wanted = parse_level_id(level_id)
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()
    blocks = split_levels(content)
    if not blocks:
        raise BoardError(f"No levels found in {path}")
    if wanted < 0 or wanted >= len(blocks):
        raise IndexError(f"Index {wanted} out of range for {path} (total {len(blocks)})")
    return parse_block(blocks[wanted])
