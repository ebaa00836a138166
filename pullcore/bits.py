from typing import Iterable

__all__ = [
    "bit",
    "has_bit",
    "set_bit",
    "clear_bit",
    "iter_bits",
    "lowest_bit",
    "popcount",
]


def bit(idx: int) -> int:
    return 1 << idx


def has_bit(mask: int, idx: int) -> bool:
    return (mask >> idx) & 1 == 1


def set_bit(mask: int, idx: int) -> int:
    return mask | bit(idx)


def clear_bit(mask: int, idx: int) -> int:
    return mask & ~bit(idx)


def iter_bits(mask: int) -> Iterable[int]:
    """Iterates over the indices of set bits, lowest first."""
    while mask:
        low = mask & -mask
        yield low.bit_length() - 1
        mask ^= low


def lowest_bit(mask: int) -> int:
    """Index of the lowest set bit, -1 for an empty mask."""
    if not mask:
        return -1
    return (mask & -mask).bit_length() - 1


def popcount(mask: int) -> int:
    return mask.bit_count()
