"""
Utility modules for the circular buffer library.

This package provides:
- Structured logging with performance timing
- Timing metrics for benchmarks
"""

from .logging import StructuredLogger, ContextLogger, timed
from .performance import (
    timing,
    performance_context,
    get_performance_metrics,
    reset_performance_metrics
)

__all__ = [
    'StructuredLogger',
    'ContextLogger',
    'timed',
    'timing',
    'performance_context',
    'get_performance_metrics',
    'reset_performance_metrics'
]
