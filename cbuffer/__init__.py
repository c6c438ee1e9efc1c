"""
cbuffer - fixed-capacity circular byte buffer.

Byte and null-terminated string storage over a statically sized backing
array, with one reserved slot separating the full and empty states.
"""

from .core import (
    RingBuffer,
    DEFAULT_CAPACITY,
    ConfigManager,
    load_config,
    CBufferError,
    ConfigurationError,
    ValidationError
)
from .types import BufferStatus, ByteResult, StringResult, BufferStats, BufferConfig

__version__ = "1.0.0"

__all__ = [
    'RingBuffer',
    'DEFAULT_CAPACITY',
    'ConfigManager',
    'load_config',
    'CBufferError',
    'ConfigurationError',
    'ValidationError',
    'BufferStatus',
    'ByteResult',
    'StringResult',
    'BufferStats',
    'BufferConfig'
]
