"""
Structured logging with in-memory history and optional JSON log files.
"""

from .structured_logger import StructuredLogger, ContextLogger, timed

__all__ = [
    'StructuredLogger',
    'ContextLogger',
    'timed'
]
