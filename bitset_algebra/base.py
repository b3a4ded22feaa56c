from enum import Enum


BITS_PER_BLOCK = 64
WORD_MASK = (1 << BITS_PER_BLOCK) - 1

# Minimum physical allocation, in bits. Never affects logical capacity.
MIN_BUFFER_SIZE = 1024


class ErrorCode(Enum):
    """Result codes returned by fallible BitSet operations."""
    NONE_ERROR = "none"
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    ALLOCATION_FAILURE = "allocation_failure"
    INTERNAL_ERROR = "internal_error"

    @property
    def ok(self) -> bool:
        return self is ErrorCode.NONE_ERROR


class BitSetDestroyedError(RuntimeError):
    """Raised when a destroyed BitSet is used again."""
