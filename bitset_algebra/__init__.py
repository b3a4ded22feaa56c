from .base import BITS_PER_BLOCK, MIN_BUFFER_SIZE, BitSetDestroyedError, ErrorCode
from .bitset import BitSet, create_bitset, get_max_capacity
from .output import assert_with_message, output_to_stdout
from .storage import StorageManager


__all__ = [
    "BitSet",
    "ErrorCode",
    "BitSetDestroyedError",
    "StorageManager",
    "create_bitset",
    "get_max_capacity",
    "output_to_stdout",
    "assert_with_message",
    "BITS_PER_BLOCK",
    "MIN_BUFFER_SIZE",
]

__version__ = "1.0.0"
