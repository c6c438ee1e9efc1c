"""
Core module of the circular buffer library.

This module contains:
- The RingBuffer engine
- Configuration management
- Custom exception classes
"""

from .ring_buffer import RingBuffer, DEFAULT_CAPACITY, TERMINATOR
from .config import ConfigManager, get_config, get_config_manager, load_config
from .exceptions import (
    CBufferError,
    ConfigurationError,
    ValidationError
)

__all__ = [
    # Engine
    'RingBuffer',
    'DEFAULT_CAPACITY',
    'TERMINATOR',

    # Configuration
    'ConfigManager',
    'get_config',
    'get_config_manager',
    'load_config',

    # Exception classes
    'CBufferError',
    'ConfigurationError',
    'ValidationError'
]
