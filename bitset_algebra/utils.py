from typing import Tuple

from .base import BITS_PER_BLOCK, WORD_MASK


def blocks_for(capacity: int) -> int:
    """Number of 64-bit words needed to hold `capacity` bits."""
    return (capacity + BITS_PER_BLOCK - 1) // BITS_PER_BLOCK


def block_location(element: int) -> Tuple[int, int]:
    """Word index and LSB-first bit offset of an element."""
    return divmod(element, BITS_PER_BLOCK)


def tail_mask(capacity: int) -> int:
    """Mask of the valid bits in the last word; padding bits are zero."""
    remainder = capacity % BITS_PER_BLOCK
    if remainder == 0:
        return WORD_MASK
    return (1 << remainder) - 1


def count_bits(word: int) -> int:
    count = 0
    n = word
    while n:
        n &= n - 1
        count += 1
    return count
