"""Packing preceding-word keys into a single table lookup key.

The packed layout keeps the historical bit masks, so contexts that differ
only in their oldest word(s) share a lookup key:

    order 1, 2:  k1 & 0xFF
    order 3:     (k1 << 16 | k2) & 0xFFFF             -> k2 alone
    order 4:     (k1 << 32 | k2 << 16 | k3) & 0xFFFFFF -> low byte of k2, all of k3

The exact layout drops the masks. Word keys fit in 16 bits, so it never
collides.
"""

import sys
from typing import Optional, TextIO

# Highest n-gram order the model supports.
NGRAM = 4

ORDER_MASKS = {
    1: 0x000000FF,
    2: 0x000000FF,
    3: 0x0000FFFF,
    4: 0x00FFFFFF,
}


def _combine(order: int, k1: int, k2: int, k3: int) -> Optional[int]:
    if order in (1, 2):
        return k1
    if order == 3:
        return (k1 << 16) | k2
    if order == 4:
        return (k1 << 32) | (k2 << 16) | k3
    return None


def pack_key(order: int, k1: int, k2: int = 0, k3: int = 0, logfile: Optional[TextIO] = None) -> int:
    """Build the masked composite key for an order, k1 being the oldest word.

    Unknown orders log an error and return 0.
    """
    combined = _combine(order, k1, k2, k3)
    if combined is None:
        print(f"ERROR model# {order} not found in pack_key()", file=logfile if logfile is not None else sys.stderr)
        return 0
    return combined & ORDER_MASKS[order]


def pack_exact_key(order: int, k1: int, k2: int = 0, k3: int = 0, logfile: Optional[TextIO] = None) -> int:
    """Build the unmasked, collision-free composite key for an order."""
    combined = _combine(order, k1, k2, k3)
    if combined is None:
        print(
            f"ERROR model# {order} not found in pack_exact_key()", file=logfile if logfile is not None else sys.stderr
        )
        return 0
    return combined
