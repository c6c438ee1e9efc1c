"""
Tests for the RingBuffer engine.

Covers index arithmetic, the reserved slot, byte and string operations,
peek and the space accounting, including after the indices wrap.
"""

import unittest

from cbuffer import (
    BufferStatus,
    ByteResult,
    RingBuffer,
    StringResult,
    ValidationError,
    DEFAULT_CAPACITY
)


def fill(buffer: RingBuffer, value: int = 0x41) -> int:
    """Push ``value`` until the buffer reports FULL. Returns the count."""
    pushed = 0
    while buffer.push_byte(value) is BufferStatus.SUCCESS:
        pushed += 1
    return pushed


class TestLifecycle(unittest.TestCase):
    """Construction, initialize() and clear()."""

    def test_default_capacity(self):
        buffer = RingBuffer()
        self.assertEqual(buffer.capacity, DEFAULT_CAPACITY)
        self.assertEqual(buffer.capacity, 50)
        self.assertEqual(buffer.front, 0)
        self.assertEqual(buffer.rear, 0)
        self.assertTrue(buffer.is_empty())
        self.assertFalse(buffer.is_full())

    def test_invalid_capacity(self):
        for capacity in (0, 1, -3):
            with self.assertRaises(ValidationError):
                RingBuffer(capacity)
        with self.assertRaises(ValidationError):
            RingBuffer(5.0)
        with self.assertRaises(ValidationError):
            RingBuffer(True)

    def test_minimum_capacity_holds_one_byte(self):
        buffer = RingBuffer(2)
        self.assertEqual(buffer.push_byte(7), BufferStatus.SUCCESS)
        self.assertEqual(buffer.push_byte(8), BufferStatus.FULL)
        self.assertEqual(buffer.pop_byte(), ByteResult(BufferStatus.SUCCESS, 7))

    def test_initialize_resets_indices_and_storage(self):
        buffer = RingBuffer(8)
        buffer.push_string("abc")
        buffer.pop_byte()
        buffer.initialize()

        self.assertEqual((buffer.front, buffer.rear), (0, 0))
        self.assertEqual(buffer.used_space(), 0)
        self.assertEqual(buffer.available_space(), 7)
        self.assertEqual(buffer.storage, bytes(8))

    def test_initialize_is_idempotent(self):
        buffer = RingBuffer(8)
        buffer.initialize()
        buffer.initialize()
        self.assertEqual((buffer.front, buffer.rear), (0, 0))
        self.assertEqual(buffer.available_space(), 7)

    def test_clear_is_full_reset(self):
        buffer = RingBuffer(6)
        for value in b"wxyz":
            buffer.push_byte(value)
        buffer.pop_byte()
        buffer.clear()

        self.assertEqual((buffer.front, buffer.rear), (0, 0))
        self.assertEqual(buffer.storage, bytes(6))
        self.assertEqual(buffer.pop_byte().status, BufferStatus.EMPTY)


class TestByteOperations(unittest.TestCase):
    """push_byte() and pop_byte()."""

    def test_capacity_bound(self):
        for capacity in (2, 5, 50):
            buffer = RingBuffer(capacity)
            for _ in range(capacity - 1):
                self.assertEqual(buffer.push_byte(1), BufferStatus.SUCCESS)
            self.assertEqual(buffer.push_byte(1), BufferStatus.FULL)
            self.assertTrue(buffer.is_full())

    def test_push_advances_rear_before_writing(self):
        buffer = RingBuffer(5)
        buffer.push_byte(0x10)
        self.assertEqual(buffer.rear, 1)
        self.assertEqual(buffer.storage[1], 0x10)
        self.assertEqual(buffer.storage[0], 0)

    def test_full_push_leaves_state_unchanged(self):
        buffer = RingBuffer(4)
        fill(buffer, 9)
        before = (buffer.front, buffer.rear, buffer.storage)
        self.assertEqual(buffer.push_byte(1), BufferStatus.FULL)
        self.assertEqual((buffer.front, buffer.rear, buffer.storage), before)

    def test_pop_empty(self):
        buffer = RingBuffer(4)
        result = buffer.pop_byte()
        self.assertEqual(result.status, BufferStatus.EMPTY)
        self.assertIsNone(result.value)
        self.assertFalse(result)
        self.assertEqual((buffer.front, buffer.rear), (0, 0))

    def test_fifo_order(self):
        buffer = RingBuffer(10)
        payload = [3, 1, 4, 1, 5, 9, 2, 6, 5]
        for value in payload:
            self.assertEqual(buffer.push_byte(value), BufferStatus.SUCCESS)

        popped = [buffer.pop_byte().value for _ in payload]
        self.assertEqual(popped, payload)
        self.assertEqual(buffer.pop_byte().status, BufferStatus.EMPTY)

    def test_byte_bounds(self):
        buffer = RingBuffer(4)
        self.assertEqual(buffer.push_byte(0), BufferStatus.SUCCESS)
        self.assertEqual(buffer.push_byte(255), BufferStatus.SUCCESS)
        for bad in (-1, 256):
            with self.assertRaises(ValidationError):
                buffer.push_byte(bad)
        with self.assertRaises(ValidationError):
            buffer.push_byte("a")
        self.assertEqual(buffer.used_space(), 2)

    def test_zero_byte_round_trip(self):
        buffer = RingBuffer(4)
        buffer.push_byte(0)
        self.assertEqual(buffer.pop_byte(), ByteResult(BufferStatus.SUCCESS, 0))


class TestSpaceAccounting(unittest.TestCase):
    """used_space(), available_space() and their conservation."""

    def assertConserved(self, buffer: RingBuffer):
        self.assertEqual(buffer.used_space() + buffer.available_space(), buffer.capacity - 1)

    def test_empty_buffer(self):
        buffer = RingBuffer(50)
        self.assertEqual(buffer.used_space(), 0)
        self.assertEqual(buffer.available_space(), 49)

    def test_conservation_across_random_walk(self):
        buffer = RingBuffer(7)
        pattern = "ppprpppprrrrrpppppppprrrrrrrrpprprprp" * 3
        for step in pattern:
            if step == "p":
                buffer.push_byte(1)
            else:
                buffer.pop_byte()
            self.assertConserved(buffer)
            self.assertIn(buffer.front, range(7))
            self.assertIn(buffer.rear, range(7))

    def test_available_zero_iff_next_push_full(self):
        buffer = RingBuffer(6)
        for _ in range(12):
            if buffer.available_space() == 0:
                self.assertEqual(buffer.push_byte(1), BufferStatus.FULL)
                buffer.pop_byte()
                buffer.pop_byte()
            else:
                self.assertEqual(buffer.push_byte(1), BufferStatus.SUCCESS)

    def test_used_zero_iff_empty(self):
        buffer = RingBuffer(6)
        self.assertEqual(buffer.used_space(), 0)
        buffer.push_byte(1)
        self.assertNotEqual(buffer.used_space(), 0)
        buffer.pop_byte()
        self.assertEqual(buffer.used_space(), 0)
        self.assertEqual(buffer.pop_byte().status, BufferStatus.EMPTY)

    def test_wrapped_formulas(self):
        buffer = RingBuffer(5)
        fill(buffer)
        for _ in range(4):
            buffer.pop_byte()
        self.assertEqual((buffer.front, buffer.rear), (4, 4))

        buffer.push_byte(ord("a"))
        self.assertEqual(buffer.rear, 0)
        self.assertGreater(buffer.front, buffer.rear)
        self.assertEqual(buffer.used_space(), 1)
        self.assertEqual(buffer.available_space(), 3)

    def test_len_and_bool(self):
        buffer = RingBuffer(5)
        self.assertEqual(len(buffer), 0)
        self.assertFalse(buffer)
        buffer.push_byte(1)
        buffer.push_byte(2)
        self.assertEqual(len(buffer), 2)
        self.assertTrue(buffer)

    def test_get_stats(self):
        buffer = RingBuffer(11)
        for value in range(5):
            buffer.push_byte(value)

        stats = buffer.get_stats()
        self.assertEqual(stats.capacity, 11)
        self.assertEqual(stats.used, 5)
        self.assertEqual(stats.available, 5)
        self.assertEqual(stats.utilization, 0.5)
        self.assertEqual(stats.to_dict()["rear"], 5)


class TestPushString(unittest.TestCase):
    """push_string() atomicity and terminator handling."""

    def test_appends_terminator(self):
        buffer = RingBuffer(50)
        self.assertEqual(buffer.push_string(b"hello"), BufferStatus.SUCCESS)
        self.assertEqual(buffer.used_space(), 6)
        self.assertEqual(buffer.to_bytes(), b"hello\x00")

    def test_accepts_str_bytearray_and_memoryview(self):
        buffer = RingBuffer(50)
        self.assertEqual(buffer.push_string("hé"), BufferStatus.SUCCESS)
        self.assertEqual(buffer.push_string(bytearray(b"ab")), BufferStatus.SUCCESS)
        self.assertEqual(buffer.push_string(memoryview(b"cd")), BufferStatus.SUCCESS)
        self.assertEqual(buffer.to_bytes(), "hé".encode("utf-8") + b"\x00ab\x00cd\x00")

    def test_empty_string_stores_terminator_only(self):
        buffer = RingBuffer(4)
        self.assertEqual(buffer.push_string(""), BufferStatus.SUCCESS)
        self.assertEqual(buffer.to_bytes(), b"\x00")

    def test_overflow_writes_nothing(self):
        buffer = RingBuffer(50)
        for _ in range(46):
            buffer.push_byte(1)
        self.assertEqual(buffer.available_space(), 3)

        state = (buffer.front, buffer.rear, buffer.storage)
        self.assertEqual(buffer.push_string("abcd"), BufferStatus.OVERFLOW)
        self.assertEqual(buffer.used_space(), 46)
        self.assertEqual((buffer.front, buffer.rear, buffer.storage), state)

    def test_exact_fit(self):
        buffer = RingBuffer(6)
        self.assertEqual(buffer.push_string("abcd"), BufferStatus.SUCCESS)
        self.assertTrue(buffer.is_full())

    def test_one_byte_short_overflows(self):
        buffer = RingBuffer(5)
        self.assertEqual(buffer.push_string("abcd"), BufferStatus.OVERFLOW)
        self.assertTrue(buffer.is_empty())

    def test_overflow_on_full_buffer(self):
        buffer = RingBuffer(4)
        fill(buffer)
        self.assertEqual(buffer.push_string(""), BufferStatus.OVERFLOW)

    def test_embedded_terminator_rejected(self):
        buffer = RingBuffer(20)
        self.assertEqual(buffer.push_string(b"ab\x00cd"), BufferStatus.INVALID_STRING)
        self.assertTrue(buffer.is_empty())

    def test_unsupported_type(self):
        buffer = RingBuffer(20)
        with self.assertRaises(ValidationError):
            buffer.push_string(12345)
        with self.assertRaises(ValidationError):
            buffer.push_string([104, 105])


class TestReadString(unittest.TestCase):
    """read_string() with and without a destination buffer."""

    def test_round_trip_into_destination(self):
        buffer = RingBuffer(50)
        buffer.push_string("hello")
        dest = bytearray(6)

        result = buffer.read_string(5, dest)

        self.assertEqual(result, StringResult(BufferStatus.SUCCESS, b"hello"))
        self.assertEqual(bytes(dest), b"hello\x00")
        self.assertEqual(buffer.to_bytes(), b"\x00")

        self.assertEqual(buffer.pop_byte(), ByteResult(BufferStatus.SUCCESS, 0))
        self.assertTrue(buffer.is_empty())

    def test_reads_exactly_count_bytes(self):
        buffer = RingBuffer(10)
        for value in (1, 2, 0, 3):
            buffer.push_byte(value)

        self.assertEqual(buffer.read_string(2).data, b"\x01\x02")
        self.assertEqual(buffer.used_space(), 2)
        self.assertEqual(buffer.to_bytes(), b"\x00\x03")

    def test_zero_count_leaves_terminator(self):
        buffer = RingBuffer(10)
        buffer.push_string("")

        self.assertEqual(buffer.read_string(0), StringResult(BufferStatus.SUCCESS, b""))
        self.assertEqual(buffer.used_space(), 1)
        self.assertEqual(buffer.peek(0).value, 0)

    def test_larger_destination_keeps_tail(self):
        buffer = RingBuffer(50)
        buffer.push_string("hi")
        dest = bytearray(b"\xff" * 5)

        buffer.read_string(2, dest)

        self.assertEqual(bytes(dest), b"hi\x00\xff\xff")

    def test_writable_memoryview_destination(self):
        buffer = RingBuffer(10)
        buffer.push_string("ok")
        backing = bytearray(4)

        result = buffer.read_string(2, memoryview(backing)[1:])

        self.assertTrue(result)
        self.assertEqual(bytes(backing), b"\x00ok\x00")

    def test_without_destination(self):
        buffer = RingBuffer(10)
        for value in b"abcdef":
            buffer.push_byte(value)

        result = buffer.read_string(4)

        self.assertEqual(result.status, BufferStatus.SUCCESS)
        self.assertEqual(result.data, b"abcd")
        self.assertEqual(buffer.used_space(), 2)
        self.assertEqual(buffer.peek(0).value, ord("e"))

    def test_partial_read_keeps_terminator_position(self):
        buffer = RingBuffer(20)
        buffer.push_string("hello")

        self.assertEqual(buffer.read_string(3).data, b"hel")
        self.assertEqual(buffer.to_bytes(), b"lo\x00")

    def test_consecutive_strings(self):
        buffer = RingBuffer(20)
        buffer.push_string("one")
        buffer.push_string("two")

        self.assertEqual(buffer.read_string(3).data, b"one")
        self.assertEqual(buffer.pop_byte().value, 0)
        self.assertEqual(buffer.read_string(3).data, b"two")
        self.assertEqual(buffer.to_bytes(), b"\x00")

    def test_underflow_does_not_mutate(self):
        buffer = RingBuffer(10)
        for value in b"abc":
            buffer.push_byte(value)
        buffer.pop_byte()
        front, rear = buffer.front, buffer.rear
        dest = bytearray(b"\xee" * 8)

        result = buffer.read_string(3, dest)

        self.assertEqual(result.status, BufferStatus.FAIL)
        self.assertEqual(result.data, b"")
        self.assertFalse(result)
        self.assertEqual((buffer.front, buffer.rear), (front, rear))
        self.assertEqual(bytes(dest), b"\xee" * 8)

    def test_destination_too_small_does_not_mutate(self):
        buffer = RingBuffer(50)
        buffer.push_string("hello")
        dest = bytearray(5)

        result = buffer.read_string(5, dest)

        self.assertEqual(result.status, BufferStatus.FAIL)
        self.assertEqual(buffer.used_space(), 6)
        self.assertEqual(bytes(dest), bytes(5))

    def test_negative_count_fails(self):
        buffer = RingBuffer(10)
        buffer.push_byte(1)
        self.assertEqual(buffer.read_string(-1).status, BufferStatus.FAIL)
        self.assertEqual(buffer.used_space(), 1)

    def test_zero_count(self):
        buffer = RingBuffer(10)
        dest = bytearray(b"\xff")
        self.assertEqual(buffer.read_string(0, dest), StringResult(BufferStatus.SUCCESS, b""))
        self.assertEqual(bytes(dest), b"\x00")

    def test_read_only_destination_rejected(self):
        buffer = RingBuffer(10)
        buffer.push_string("ab")
        with self.assertRaises(ValidationError):
            buffer.read_string(2, b"\x00\x00\x00")
        self.assertEqual(buffer.used_space(), 3)

    def test_invalid_count_type(self):
        buffer = RingBuffer(10)
        with self.assertRaises(ValidationError):
            buffer.read_string("2")


class TestPeek(unittest.TestCase):
    """peek() logical indexing."""

    def test_peek_zero_matches_next_pop(self):
        buffer = RingBuffer(8)
        for value in b"xyz":
            buffer.push_byte(value)

        for expected in b"xyz":
            self.assertEqual(buffer.peek(0).value, expected)
            self.assertEqual(buffer.pop_byte().value, expected)

    def test_peek_is_non_destructive(self):
        buffer = RingBuffer(8)
        for value in b"abcd":
            buffer.push_byte(value)
        used, available = buffer.used_space(), buffer.available_space()

        for _ in range(5):
            self.assertEqual(buffer.peek(2), ByteResult(BufferStatus.SUCCESS, ord("c")))
        self.assertEqual((buffer.used_space(), buffer.available_space()), (used, available))

    def test_out_of_range(self):
        buffer = RingBuffer(8)
        self.assertEqual(buffer.peek(0).status, BufferStatus.FAIL)
        buffer.push_byte(1)
        self.assertEqual(buffer.peek(1).status, BufferStatus.FAIL)
        self.assertEqual(buffer.peek(-1).status, BufferStatus.FAIL)
        self.assertIsNone(buffer.peek(1).value)

    def test_peek_across_wrap(self):
        buffer = RingBuffer(5)
        fill(buffer)
        for _ in range(3):
            buffer.pop_byte()
        for value in b"abc":
            buffer.push_byte(value)

        self.assertLess(buffer.rear, buffer.front)
        self.assertEqual([buffer.peek(i).value for i in range(buffer.used_space())],
                         [0x41, ord("a"), ord("b"), ord("c")])
        self.assertEqual(list(buffer), [0x41, ord("a"), ord("b"), ord("c")])

    def test_invalid_index_type(self):
        buffer = RingBuffer(5)
        with self.assertRaises(ValidationError):
            buffer.peek("0")


class TestWrapAround(unittest.TestCase):
    """Properties keep holding after the indices wrap past capacity - 1."""

    def test_repeated_fill_and_drain(self):
        capacity = 7
        buffer = RingBuffer(capacity)
        counter = 0
        for _ in range(10):
            pushed = []
            while True:
                status = buffer.push_byte(counter % 256)
                if status is BufferStatus.FULL:
                    break
                pushed.append(counter % 256)
                counter += 1
            self.assertEqual(len(pushed), capacity - 1)
            self.assertEqual(buffer.available_space(), 0)
            self.assertEqual(buffer.peek(0).value, pushed[0])

            popped = [buffer.pop_byte().value for _ in pushed]
            self.assertEqual(popped, pushed)
            self.assertEqual(buffer.used_space(), 0)
            self.assertEqual(buffer.pop_byte().status, BufferStatus.EMPTY)

    def test_string_round_trip_after_wrap(self):
        buffer = RingBuffer(50)
        for _ in range(3):
            buffer.push_string("x" * 30)
            buffer.read_string(30)
            buffer.pop_byte()

        self.assertNotEqual(buffer.front, 0)
        self.assertEqual(buffer.push_string("hello"), BufferStatus.SUCCESS)
        dest = bytearray(6)
        self.assertEqual(buffer.read_string(5, dest).status, BufferStatus.SUCCESS)
        self.assertEqual(bytes(dest), b"hello\x00")
        self.assertEqual(buffer.used_space(), 1)
        self.assertEqual(buffer.pop_byte().value, 0)
        self.assertEqual(buffer.used_space(), 0)

    def test_string_split_across_end_of_storage(self):
        buffer = RingBuffer(8)
        for _ in range(5):
            buffer.push_byte(0)
            buffer.pop_byte()
        self.assertEqual(buffer.push_string("abcdef"), BufferStatus.SUCCESS)
        self.assertLess(buffer.rear, buffer.front)
        self.assertEqual(buffer.read_string(6).data, b"abcdef")
        self.assertEqual(buffer.to_bytes(), b"\x00")


class TestResultTypes(unittest.TestCase):
    """Status taxonomy and tagged results."""

    def test_status_values(self):
        self.assertEqual(BufferStatus.SUCCESS.value, 0)
        self.assertEqual(BufferStatus.EMPTY.value, -1)
        self.assertEqual(BufferStatus.FULL.value, -2)
        self.assertEqual(BufferStatus.OVERFLOW.value, -3)
        self.assertEqual(BufferStatus.FAIL.value, -4)
        self.assertEqual(BufferStatus.INVALID_STRING.value, -5)

    def test_ok(self):
        self.assertTrue(BufferStatus.SUCCESS.ok)
        self.assertFalse(any(status.ok for status in BufferStatus if status is not BufferStatus.SUCCESS))

    def test_repr(self):
        buffer = RingBuffer(5)
        buffer.push_byte(1)
        self.assertEqual(repr(buffer), "RingBuffer(capacity=5, used=1, front=0, rear=1)")


if __name__ == '__main__':
    unittest.main()
