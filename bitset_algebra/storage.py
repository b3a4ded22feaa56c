import hashlib
import logging
import struct
import zlib
from pathlib import Path
from typing import Union

from .bitset import BitSet
from .utils import blocks_for


logger = logging.getLogger(__name__)


class StorageManager:
    """Handles saving and loading of a BitSet with checksum and compression."""
    MAGIC = b"BSET"
    VERSION = 1
    HEADER = struct.Struct("<BBQQ")  # version, flags, capacity, payload length

    @classmethod
    def dumps(cls, bitset: BitSet, compress: bool = True) -> bytes:
        words = bitset.words
        payload = struct.pack(f"<{len(words)}Q", *words)

        flags = 0
        if compress:
            payload = zlib.compress(payload)
            flags |= 1  # bit 0: compression enabled

        checksum = hashlib.sha256(payload).digest()
        header = cls.HEADER.pack(cls.VERSION, flags, bitset.capacity, len(payload))
        return cls.MAGIC + header + payload + checksum

    @classmethod
    def loads(cls, data: bytes) -> BitSet:
        if data[:4] != cls.MAGIC:
            raise ValueError("Invalid BitSet format")

        offset = 4 + cls.HEADER.size
        if len(data) < offset:
            raise ValueError("Truncated BitSet header")
        version, flags, capacity, data_len = cls.HEADER.unpack(data[4:offset])
        if version != cls.VERSION:
            raise ValueError(f"Unsupported BitSet format version {version}")

        payload = data[offset:offset + data_len]
        checksum = data[offset + data_len:offset + data_len + 32]
        if len(payload) != data_len or hashlib.sha256(payload).digest() != checksum:
            raise ValueError("Checksum mismatch")

        if flags & 1:
            try:
                payload = zlib.decompress(payload)
            except zlib.error as e:
                raise ValueError(f"Corrupt compressed payload: {e}") from e

        size = blocks_for(capacity)
        if capacity == 0 or len(payload) != size * 8:
            raise ValueError(f"Payload of {len(payload)} bytes does not match capacity {capacity}")

        return BitSet.from_words(capacity, struct.unpack(f"<{size}Q", payload))

    @classmethod
    def save(cls, filepath: Union[str, Path], bitset: BitSet, compress: bool = True):
        """Save a BitSet to a binary file with optional compression."""
        try:
            data = cls.dumps(bitset, compress=compress)
            with open(filepath, "wb") as f:
                f.write(data)
            logger.debug(f"Successfully saved BitSet to {filepath}")
        except Exception as e:
            logger.error(f"Failed to save BitSet to {filepath}: {e}")
            raise

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> BitSet:
        """Load a BitSet from a binary file with checksum verification."""
        try:
            with open(filepath, "rb") as f:
                bitset = cls.loads(f.read())
            logger.debug(f"Successfully loaded BitSet from {filepath}")
            return bitset
        except FileNotFoundError:
            logger.error(f"BitSet file not found: {filepath}")
            raise
        except Exception as e:
            logger.error(f"Failed to load BitSet from {filepath}: {e}")
            raise
