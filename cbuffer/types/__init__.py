"""
Type definitions and data models for the circular buffer library.
"""

from .models import (
    # Status and result types
    BufferStatus,
    ByteResult,
    StringResult,
    BufferStats,

    # Configuration types
    BufferConfig,

    # Logging types
    LogEntry,
    LogLevel
)

__all__ = [
    'BufferStatus',
    'ByteResult',
    'StringResult',
    'BufferStats',
    'BufferConfig',
    'LogEntry',
    'LogLevel'
]
