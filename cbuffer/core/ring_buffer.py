"""
Fixed-capacity circular byte buffer.

The buffer owns a ``bytearray`` of ``capacity`` bytes and two indices:

- ``front`` is the slot of the most recently consumed byte
- ``rear`` is the slot of the most recently written byte

Both indices are advanced before they are used, so ``front == rear`` means
empty and one slot always stays unused. A buffer of capacity C therefore
holds at most C - 1 bytes, and ``used_space() + available_space()`` is
always C - 1.

Every operation returns a status instead of raising when the buffer is
full, empty or too small for a payload; failed operations leave the buffer
untouched. Only invalid arguments raise ``ValidationError``.

The buffer does no locking. Callers sharing it between threads must
serialize access themselves.
"""

from typing import Iterator, Optional, Union

from cbuffer.core.exceptions import ValidationError
from cbuffer.types.models import (
    BufferConfig,
    BufferStats,
    BufferStatus,
    ByteResult,
    StringResult
)
from cbuffer.utils.logging import ContextLogger, StructuredLogger, timed

DEFAULT_CAPACITY = 50
TERMINATOR = 0

BytesLike = Union[bytes, bytearray, memoryview]
Logger = Union[StructuredLogger, ContextLogger]


class RingBuffer:
    """
    Single-producer/single-consumer byte ring buffer with one reserved slot.

    Attributes:
        logger (Optional[StructuredLogger | ContextLogger]): Receives
            lifecycle, rejection and timing entries when set
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, logger: Optional[Logger] = None):
        """
        Create a buffer and initialize it.

        Args:
            capacity: Number of slots in the backing storage, at least 2
            logger: Optional structured logger

        Raises:
            ValidationError: If capacity is not an integer >= 2
        """
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise ValidationError(
                "Capacity must be an integer",
                field_name="capacity",
                expected_type="int",
                actual_value=capacity
            )
        if capacity < 2:
            raise ValidationError(
                "Capacity must be at least 2 (one slot is always reserved)",
                field_name="capacity",
                actual_value=capacity
            )

        self._capacity = capacity
        self._data = bytearray(capacity)
        self._front = 0
        self._rear = 0
        self.logger = logger
        self.initialize()

    @classmethod
    def from_config(cls, config: BufferConfig, logger: Optional[Logger] = None) -> 'RingBuffer':
        """Create a buffer sized by ``config.capacity``."""
        return cls(config.capacity, logger=logger)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def front(self) -> int:
        return self._front

    @property
    def rear(self) -> int:
        return self._rear

    @property
    def storage(self) -> bytes:
        """Copy of the whole backing storage in physical slot order."""
        return bytes(self._data)

    # Lifecycle

    def initialize(self) -> None:
        """Zero the storage and mark the buffer empty."""
        self._data[:] = bytes(self._capacity)
        self._front = 0
        self._rear = 0
        if self.logger is not None:
            self.logger.debug("Buffer initialized", capacity=self._capacity)

    def clear(self) -> None:
        """Full reset, same as initialize()."""
        self.initialize()

    # Single-byte operations

    def push_byte(self, value: int) -> BufferStatus:
        """
        Append one byte.

        Returns:
            SUCCESS, or FULL when no free slot is left

        Raises:
            ValidationError: If value is not an integer in 0..255
        """
        self._check_byte(value)

        next_rear = (self._rear + 1) % self._capacity
        if next_rear == self._front:
            return BufferStatus.FULL

        self._rear = next_rear
        self._data[self._rear] = value
        return BufferStatus.SUCCESS

    def pop_byte(self) -> ByteResult:
        """
        Remove and return the oldest byte.

        Returns:
            ByteResult with SUCCESS and the byte, or EMPTY
        """
        if self._front == self._rear:
            return ByteResult(BufferStatus.EMPTY)

        self._front = (self._front + 1) % self._capacity
        return ByteResult(BufferStatus.SUCCESS, self._data[self._front])

    # Space accounting

    def used_space(self) -> int:
        """Number of unread bytes."""
        if self._rear >= self._front:
            return self._rear - self._front
        return self._capacity - (self._front - self._rear)

    def available_space(self) -> int:
        """Number of bytes that can still be pushed."""
        if self._front > self._rear:
            return self._front - self._rear - 1
        return self._capacity - (self._rear - self._front + 1)

    def is_empty(self) -> bool:
        return self._front == self._rear

    def is_full(self) -> bool:
        return (self._rear + 1) % self._capacity == self._front

    # String operations

    @timed("push_string")
    def push_string(self, data: Union[BytesLike, str]) -> BufferStatus:
        """
        Append ``data`` followed by a 0 terminator, all or nothing.

        ``str`` payloads are encoded as UTF-8.

        Returns:
            SUCCESS; INVALID_STRING if the payload contains a 0 byte;
            OVERFLOW if fewer than len(data) + 1 bytes are available

        Raises:
            ValidationError: If data is not bytes-like or str
        """
        payload = self._to_payload(data)

        if TERMINATOR in payload:
            self._log_rejected("push_string", BufferStatus.INVALID_STRING, length=len(payload))
            return BufferStatus.INVALID_STRING

        if self.available_space() < len(payload) + 1:
            self._log_rejected("push_string", BufferStatus.OVERFLOW, length=len(payload))
            return BufferStatus.OVERFLOW

        for value in payload:
            self.push_byte(value)
        self.push_byte(TERMINATOR)
        return BufferStatus.SUCCESS

    @timed("read_string")
    def read_string(self, count: int, dest: Optional[Union[bytearray, memoryview]] = None) -> StringResult:
        """
        Remove exactly ``count`` bytes.

        A terminator stored by push_string() is ordinary data here: reading
        a string back with its own length leaves its terminator queued.
        When ``dest`` is given the bytes are copied to ``dest[0:count]`` and
        ``dest[count]`` is set to 0, so ``dest`` must hold at least
        ``count + 1`` bytes.

        Args:
            count: Number of bytes to read
            dest: Optional writable byte destination

        Returns:
            StringResult with SUCCESS and the bytes read (no terminator),
            or FAIL if count is negative, fewer than count bytes are
            stored or dest is too small. Nothing is consumed on FAIL.

        Raises:
            ValidationError: If count is not an integer or dest is not a
                writable one-dimensional byte buffer
        """
        if not isinstance(count, int) or isinstance(count, bool):
            raise ValidationError(
                "Count must be an integer",
                field_name="count",
                expected_type="int",
                actual_value=count
            )

        if count < 0 or self.used_space() < count:
            self._log_rejected("read_string", BufferStatus.FAIL, requested=count)
            return StringResult(BufferStatus.FAIL)

        if dest is None:
            return StringResult(BufferStatus.SUCCESS, self._pop_bytes(count))

        with memoryview(dest) as view:
            if view.readonly or view.ndim != 1 or view.format != "B":
                raise ValidationError(
                    "Destination must be a writable one-dimensional byte buffer",
                    field_name="dest",
                    expected_type="bytearray",
                    actual_value=type(dest).__name__
                )
            if len(view) < count + 1:
                self._log_rejected(
                    "read_string", BufferStatus.FAIL,
                    requested=count, dest_capacity=len(view)
                )
                return StringResult(BufferStatus.FAIL)

            data = self._pop_bytes(count)
            view[:count] = data
            view[count] = TERMINATOR

        return StringResult(BufferStatus.SUCCESS, data)

    # Peek

    def peek(self, index: int) -> ByteResult:
        """
        Return the byte at logical ``index`` without consuming it.

        Index 0 is the byte the next pop_byte() would return.

        Returns:
            ByteResult with SUCCESS and the byte, or FAIL if index is
            negative or not below used_space()
        """
        if not isinstance(index, int) or isinstance(index, bool):
            raise ValidationError(
                "Index must be an integer",
                field_name="index",
                expected_type="int",
                actual_value=index
            )

        if index < 0 or index >= self.used_space():
            return ByteResult(BufferStatus.FAIL)

        return ByteResult(BufferStatus.SUCCESS, self._data[(self._front + index + 1) % self._capacity])

    # Inspection helpers

    def to_bytes(self) -> bytes:
        """Unread bytes, oldest first. Does not consume them."""
        return bytes(self)

    def get_stats(self) -> BufferStats:
        return BufferStats(
            capacity=self._capacity,
            used=self.used_space(),
            available=self.available_space(),
            front=self._front,
            rear=self._rear
        )

    def __len__(self) -> int:
        return self.used_space()

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __iter__(self) -> Iterator[int]:
        for offset in range(self.used_space()):
            yield self._data[(self._front + offset + 1) % self._capacity]

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(capacity={self._capacity}, "
            f"used={self.used_space()}, front={self._front}, rear={self._rear})"
        )

    # Internals

    def _pop_bytes(self, count: int) -> bytes:
        out = bytearray(count)
        for i in range(count):
            out[i] = self.pop_byte().value
        return bytes(out)

    @staticmethod
    def _check_byte(value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValidationError(
                "Byte value must be an integer",
                field_name="value",
                expected_type="int",
                actual_value=value
            )
        if not 0 <= value <= 0xFF:
            raise ValidationError(
                "Byte value must be in range 0..255",
                field_name="value",
                actual_value=value
            )

    @staticmethod
    def _to_payload(data: Union[BytesLike, str]) -> bytes:
        if isinstance(data, str):
            return data.encode("utf-8")
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
        raise ValidationError(
            "String payload must be bytes-like or str",
            field_name="data",
            expected_type="bytes",
            actual_value=type(data).__name__
        )

    def _log_rejected(self, operation: str, status: BufferStatus, **context) -> None:
        if self.logger is None:
            return
        self.logger.debug(
            f"{operation} rejected: {status.name}",
            used=self.used_space(),
            available=self.available_space(),
            **context
        )
