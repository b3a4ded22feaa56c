import unittest
from unittest import mock

from bitset_algebra import (
    BitSet,
    BitSetDestroyedError,
    ErrorCode,
    MIN_BUFFER_SIZE,
    create_bitset,
)


class TestCreation(unittest.TestCase):
    def test_fresh_set_is_empty(self):
        for capacity in [1, 10, 63, 64, 65, 128, 1000]:
            bitset = create_bitset(capacity)
            self.assertIsNotNone(bitset)
            self.assertEqual(bitset.capacity, capacity)
            self.assertEqual(bitset.size, (capacity + 63) // 64)
            self.assertFalse(any(bitset.contains(e) for e in range(capacity)))
            self.assertEqual(len(bitset), 0)

    def test_invalid_capacity_returns_none(self):
        self.assertIsNone(create_bitset(0))
        self.assertIsNone(create_bitset(-5))
        self.assertIsNone(create_bitset(2.5))
        self.assertIsNone(create_bitset(True))

    def test_oversized_capacity_returns_none(self):
        self.assertIsNone(create_bitset(10 ** 30))

    def test_allocation_failure_returns_none(self):
        with mock.patch("array.array", side_effect=MemoryError):
            self.assertIsNone(create_bitset(10))

    def test_constructor_rejects_zero(self):
        with self.assertRaises(ValueError):
            BitSet(0)

    def test_minimum_buffer_does_not_change_capacity(self):
        bitset = BitSet(3)
        self.assertEqual(bitset.size, 1)
        self.assertEqual(len(bitset.words), 1)
        self.assertGreaterEqual(len(bitset._bits) * 64, MIN_BUFFER_SIZE)
        self.assertEqual(bitset.add(3), ErrorCode.INVALID_ARGUMENT)
        self.assertEqual(list(bitset.complement()), [0, 1, 2])

    def test_destroy_invalidates_handle(self):
        bitset = create_bitset(10)
        bitset.add(4)
        bitset.destroy()
        self.assertTrue(bitset.is_destroyed)
        with self.assertRaises(BitSetDestroyedError):
            bitset.contains(4)
        with self.assertRaises(BitSetDestroyedError):
            bitset.add(1)
        with self.assertRaises(BitSetDestroyedError):
            bitset.destroy()
        with self.assertRaises(BitSetDestroyedError):
            BitSet(10).union(bitset)
        self.assertEqual(repr(bitset), "BitSet(<destroyed>)")


class TestMutation(unittest.TestCase):
    def setUp(self):
        self.bitset = BitSet(10)

    def test_add_then_contains(self):
        for element in range(10):
            self.assertEqual(self.bitset.add(element), ErrorCode.NONE_ERROR)
            self.assertTrue(self.bitset.contains(element))

    def test_add_out_of_range_is_rejected(self):
        for element in [-1, 10, 11, 10 ** 20, "3", None, 1.0]:
            self.assertEqual(self.bitset.add(element), ErrorCode.INVALID_ARGUMENT)
        self.assertEqual(len(self.bitset), 0)
        self.assertFalse(any(self.bitset.contains(e) for e in range(10)))

    def test_bool_elements_are_rejected(self):
        self.assertEqual(self.bitset.add(True), ErrorCode.INVALID_ARGUMENT)
        self.assertEqual(self.bitset.add(False), ErrorCode.INVALID_ARGUMENT)
        self.bitset.add(1)
        self.assertFalse(self.bitset.contains(True))
        self.assertEqual(self.bitset.remove(True), ErrorCode.INVALID_ARGUMENT)
        self.assertEqual(list(self.bitset), [1])

    def test_contains_out_of_range_is_false(self):
        self.assertFalse(self.bitset.contains(-1))
        self.assertFalse(self.bitset.contains(10))
        self.assertFalse(10 ** 6 in self.bitset)

    def test_remove_restores_state(self):
        self.bitset.add(4)
        self.assertEqual(self.bitset.add(7), ErrorCode.NONE_ERROR)
        self.assertEqual(self.bitset.remove(7), ErrorCode.NONE_ERROR)
        self.assertFalse(self.bitset.contains(7))
        self.assertEqual(list(self.bitset), [4])

    def test_remove_absent_and_out_of_range(self):
        self.bitset.add(2)
        self.assertEqual(self.bitset.remove(3), ErrorCode.NOT_FOUND)
        self.assertEqual(self.bitset.remove(-1), ErrorCode.INVALID_ARGUMENT)
        self.assertEqual(self.bitset.remove(10), ErrorCode.INVALID_ARGUMENT)
        self.assertEqual(list(self.bitset), [2])

    def test_add_many_partial_application(self):
        result = self.bitset.add_many([3, -1, 12])
        self.assertEqual(result, ErrorCode.INVALID_ARGUMENT)
        self.assertFalse(result.ok)
        self.assertEqual(list(self.bitset), [3])

    def test_add_many_all_valid(self):
        self.assertEqual(self.bitset.add_many([0, 9, 5, 5]), ErrorCode.NONE_ERROR)
        self.assertEqual(list(self.bitset), [0, 5, 9])

    def test_word_boundaries(self):
        bitset = BitSet(130)
        bitset.add_many([0, 63, 64, 127, 128, 129])
        self.assertEqual(bitset.words, (1 | (1 << 63), 1 | (1 << 63), 0b11))
        self.assertEqual(list(bitset), [0, 63, 64, 127, 128, 129])
        self.assertEqual(len(bitset), 6)


class TestScenario(unittest.TestCase):
    def test_add_remove_union(self):
        a = create_bitset(10)
        a.add_many([2, 5, 9])
        self.assertTrue(a.contains(5))
        self.assertFalse(a.contains(6))
        a.remove(5)
        self.assertFalse(a.contains(5))

        b = create_bitset(5)
        b.add_many([1, 3])
        result = a.union(b)
        self.assertEqual(result.capacity, 10)
        self.assertEqual(list(result), [1, 2, 3, 9])

    def test_complement_of_empty(self):
        result = BitSet(8).complement()
        self.assertEqual(list(result), list(range(8)))
        self.assertEqual(result.words, (0xFF,))
        self.assertFalse(result.contains(8))


if __name__ == "__main__":
    unittest.main()
