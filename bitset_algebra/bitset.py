import array
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple

from .base import (
    BITS_PER_BLOCK,
    MIN_BUFFER_SIZE,
    WORD_MASK,
    BitSetDestroyedError,
    ErrorCode,
)
from .output import OutputFunc, output_to_stdout
from .utils import block_location, blocks_for, count_bits, tail_mask


logger = logging.getLogger(__name__)

MIN_BLOCKS = max(1, MIN_BUFFER_SIZE // BITS_PER_BLOCK)


class BitSet:
    """Set of integers in [0, capacity) packed into 64-bit words.

    Capacity is fixed at construction. Element `e` lives in word
    `e // 64` at bit `e % 64` (least-significant bit first). Bits at or
    beyond `capacity` in the last word are padding and are always zero.

    Mutating calls (`add`, `remove`, `add_many`, `destroy`) need external
    synchronization when a set is shared between threads; read-only calls
    may run concurrently.
    """
    __slots__ = ("_bits", "_size", "_capacity")

    __hash__ = None

    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError(f"capacity must be a positive integer, got {capacity!r}")

        self._capacity = capacity
        self._size = blocks_for(capacity)
        self._bits = array.array("Q", bytes(8 * max(self._size, MIN_BLOCKS)))  # 64-bit integers

    # ---- lifecycle ----

    @classmethod
    def from_iterable(cls, capacity: int, elements: Iterable[int] = ()) -> "BitSet":
        """Build a set and add every valid element, skipping the rest."""
        bitset = cls(capacity)
        bitset.add_many(elements)
        return bitset

    @classmethod
    def from_words(cls, capacity: int, words: Iterable[int]) -> "BitSet":
        """Build a set from raw words, clearing any padding bits."""
        bitset = cls(capacity)
        words = list(words)
        if len(words) > bitset._size:
            raise ValueError(f"{len(words)} words exceed {bitset._size} blocks for capacity {capacity}")
        for i, word in enumerate(words):
            bitset._bits[i] = word & WORD_MASK
        bitset._bits[bitset._size - 1] &= tail_mask(capacity)
        return bitset

    def destroy(self) -> None:
        """Release the word storage. Any later use raises BitSetDestroyedError."""
        self._storage()
        logger.debug(f"Destroying BitSet of capacity {self._capacity}")
        self._bits = None
        self._size = 0
        self._capacity = 0

    @property
    def is_destroyed(self) -> bool:
        return self._bits is None

    def copy(self) -> "BitSet":
        result = BitSet(self.capacity)
        result._bits[:self._size] = self._bits[:self._size]
        return result

    def _storage(self) -> array.array:
        if self._bits is None:
            raise BitSetDestroyedError("BitSet used after destroy()")
        return self._bits

    # ---- attributes ----

    @property
    def capacity(self) -> int:
        self._storage()
        return self._capacity

    @property
    def size(self) -> int:
        """Number of logical blocks, ceil(capacity / 64)."""
        self._storage()
        return self._size

    @property
    def words(self) -> Tuple[int, ...]:
        return tuple(self._storage()[:self._size])

    def get_word(self, index: int) -> int:
        """Word at `index`, or 0 past this set's own blocks (zero-extension)."""
        bits = self._storage()
        if 0 <= index < self._size:
            return bits[index]
        return 0

    def _in_range(self, element: Any) -> bool:
        if isinstance(element, bool) or not isinstance(element, int):
            return False
        return 0 <= element < self._capacity

    # ---- single element mutation ----

    def add(self, element: int) -> ErrorCode:
        bits = self._storage()
        if not self._in_range(element):
            logger.debug(f"Rejected element {element!r} for capacity {self._capacity}")
            return ErrorCode.INVALID_ARGUMENT

        word_idx, bit_idx = block_location(element)
        bits[word_idx] |= (1 << bit_idx)
        return ErrorCode.NONE_ERROR

    def remove(self, element: int) -> ErrorCode:
        """Clear `element`.

        Returns INVALID_ARGUMENT for negative or out-of-range values and
        NOT_FOUND for in-range values that are not present. The set is
        unchanged in both cases.
        """
        bits = self._storage()
        if not self._in_range(element):
            logger.debug(f"Rejected element {element!r} for capacity {self._capacity}")
            return ErrorCode.INVALID_ARGUMENT

        word_idx, bit_idx = block_location(element)
        mask = 1 << bit_idx
        if not bits[word_idx] & mask:
            return ErrorCode.NOT_FOUND
        bits[word_idx] &= ~mask & WORD_MASK
        return ErrorCode.NONE_ERROR

    def add_many(self, elements: Iterable[int]) -> ErrorCode:
        """Add each element independently.

        Invalid elements are skipped without undoing the valid ones; the
        result is INVALID_ARGUMENT if at least one element was rejected.
        """
        self._storage()
        result = ErrorCode.NONE_ERROR
        for element in elements:
            if not self.add(element).ok:
                result = ErrorCode.INVALID_ARGUMENT
        return result

    # ---- membership & comparison ----

    def contains(self, element: int) -> bool:
        bits = self._storage()
        if not self._in_range(element):
            return False
        word_idx, bit_idx = block_location(element)
        return bool(bits[word_idx] & (1 << bit_idx))

    def equals(self, other: "BitSet") -> bool:
        """Same elements, with the shorter set zero-extended to the longer one."""
        self._check_operand(other)
        blocks = max(self._size, other._size)
        return all(self.get_word(i) == other.get_word(i) for i in range(blocks))

    def is_subset(self, other: "BitSet") -> bool:
        self._check_operand(other)
        return all(self.get_word(i) & ~other.get_word(i) == 0 for i in range(self._size))

    def is_strict_subset(self, other: "BitSet") -> bool:
        return self.is_subset(other) and not self.equals(other)

    # ---- set algebra ----

    def _check_operand(self, other: Any):
        self._storage()
        if not isinstance(other, BitSet):
            raise TypeError(f"expected BitSet, got {type(other).__name__}")
        other._storage()

    def _combine(self, other: "BitSet", op: Callable[[int, int], int]) -> "BitSet":
        self._check_operand(other)
        result = BitSet(get_max_capacity(self, other))
        for i in range(result._size):
            result._bits[i] = op(self.get_word(i), other.get_word(i)) & WORD_MASK
        return result

    def union(self, other: "BitSet") -> "BitSet":
        return self._combine(other, lambda a, b: a | b)

    def intersection(self, other: "BitSet") -> "BitSet":
        return self._combine(other, lambda a, b: a & b)

    def difference(self, other: "BitSet") -> "BitSet":
        return self._combine(other, lambda a, b: a & ~b)

    def symmetric_difference(self, other: "BitSet") -> "BitSet":
        return self._combine(other, lambda a, b: a ^ b)

    def complement(self) -> "BitSet":
        bits = self._storage()
        result = BitSet(self._capacity)
        for i in range(self._size):
            result._bits[i] = ~bits[i] & WORD_MASK
        # padding must not turn into elements
        result._bits[self._size - 1] &= tail_mask(self._capacity)
        return result

    # ---- display ----

    def _render(self) -> str:
        return "{" + ", ".join(str(element) for element in self) + "}"

    def display(self, output: OutputFunc = output_to_stdout) -> ErrorCode:
        """Render the elements in ascending order and hand the text to `output`."""
        self._storage()
        try:
            text = self._render()
        except MemoryError:
            logger.error(f"Failed to render BitSet of capacity {self._capacity}")
            return ErrorCode.ALLOCATION_FAILURE
        output(text)
        return ErrorCode.NONE_ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "capacity": self.capacity,
            "size": self.size,
            "elements": list(self)
        }

    # ---- python protocols ----

    def __contains__(self, element: int) -> bool:
        return self.contains(element)

    def __iter__(self) -> Iterator[int]:
        bits = self._storage()
        for word_idx in range(self._size):
            word = bits[word_idx]
            offset = word_idx * BITS_PER_BLOCK
            while word:
                lsb = word & -word
                yield offset + lsb.bit_length() - 1
                word ^= lsb

    def __len__(self) -> int:
        bits = self._storage()
        return sum(count_bits(bits[i]) for i in range(self._size))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitSet):
            return NotImplemented
        return self.equals(other)

    def __le__(self, other: "BitSet") -> bool:
        if not isinstance(other, BitSet):
            return NotImplemented
        return self.is_subset(other)

    def __lt__(self, other: "BitSet") -> bool:
        if not isinstance(other, BitSet):
            return NotImplemented
        return self.is_strict_subset(other)

    def __ge__(self, other: "BitSet") -> bool:
        if not isinstance(other, BitSet):
            return NotImplemented
        return other.is_subset(self)

    def __gt__(self, other: "BitSet") -> bool:
        if not isinstance(other, BitSet):
            return NotImplemented
        return other.is_strict_subset(self)

    def __or__(self, other: "BitSet") -> "BitSet":
        if not isinstance(other, BitSet):
            return NotImplemented
        return self.union(other)

    def __and__(self, other: "BitSet") -> "BitSet":
        if not isinstance(other, BitSet):
            return NotImplemented
        return self.intersection(other)

    def __sub__(self, other: "BitSet") -> "BitSet":
        if not isinstance(other, BitSet):
            return NotImplemented
        return self.difference(other)

    def __xor__(self, other: "BitSet") -> "BitSet":
        if not isinstance(other, BitSet):
            return NotImplemented
        return self.symmetric_difference(other)

    def __invert__(self) -> "BitSet":
        return self.complement()

    def __str__(self) -> str:
        self._storage()
        return self._render()

    def __repr__(self) -> str:
        if self._bits is None:
            return f"{type(self).__name__}(<destroyed>)"
        return f"{type(self).__name__}(capacity={self._capacity}, elements={list(self)})"


def get_max_capacity(bitset_a: BitSet, bitset_b: BitSet) -> int:
    return max(bitset_a.capacity, bitset_b.capacity)


def create_bitset(capacity: int) -> Optional[BitSet]:
    """Create an empty set, or return None if the capacity is invalid or allocation fails."""
    try:
        bitset = BitSet(capacity)
    except ValueError as e:
        logger.warning(f"Cannot create BitSet: {e}")
        return None
    except (MemoryError, OverflowError):
        logger.error(f"Cannot allocate BitSet of capacity {capacity}")
        return None
    logger.debug(f"Created BitSet of capacity {capacity} ({bitset.size} blocks)")
    return bitset
