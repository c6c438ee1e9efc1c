"""
Demonstration of the circular buffer.

Loads configuration from config/.env and the environment, then walks a
buffer through byte, peek, string and rejection scenarios, logging every
result.
"""

import sys

from cbuffer import BufferStatus, ConfigurationError, RingBuffer, load_config
from cbuffer.utils.logging import StructuredLogger


def run_demo(buffer: RingBuffer, logger: StructuredLogger) -> None:
    for value in b"ABC":
        status = buffer.push_byte(value)
        logger.info(f"push_byte({chr(value)!r}) -> {status.name}", used=buffer.used_space())

    peeked = buffer.peek(1)
    logger.info(f"peek(1) -> {peeked.status.name}", value=peeked.value)

    popped = buffer.pop_byte()
    logger.info(f"pop_byte() -> {popped.status.name}", value=popped.value)

    result = buffer.read_string(2)
    logger.info(f"read_string(2) -> {result.status.name}", data=result.data)

    status = buffer.push_string("hello")
    logger.info(f"push_string('hello') -> {status.name}", **buffer.get_stats().to_dict())

    dest = bytearray(4)
    result = buffer.read_string(5, dest)
    logger.info(f"read_string(5) into 4 bytes -> {result.status.name}", used=buffer.used_space())

    dest = bytearray(6)
    result = buffer.read_string(5, dest)
    logger.info(f"read_string(5) -> {result.status.name}", data=result.data, dest=bytes(dest))

    terminator = buffer.pop_byte()
    logger.info(f"pop_byte() -> {terminator.status.name}", value=terminator.value)

    status = buffer.push_string("x" * buffer.capacity)
    logger.info(f"oversized push_string -> {status.name}", available=buffer.available_space())

    while buffer.push_byte(0x2A) is BufferStatus.SUCCESS:
        pass
    logger.info("buffer filled", used=buffer.used_space(), full=buffer.is_full())

    buffer.clear()
    logger.info(f"after clear: pop_byte() -> {buffer.pop_byte().status.name}")


def main() -> int:
    try:
        config = load_config()
    except ConfigurationError as e:
        print(e.get_troubleshooting_message(), file=sys.stderr)
        return 1

    logger = StructuredLogger(
        "cbuffer",
        level=config.log_level,
        log_dir=config.log_dir,
        max_memory_entries=config.max_log_entries
    )
    logger.info("Starting demo", environment=config.environment, capacity=config.capacity)

    buffer = RingBuffer.from_config(config, logger=logger.with_context(buffer="demo"))
    run_demo(buffer, logger)
    return 0


if __name__ == "__main__":
    sys.exit(main())
