"""
Performance measurement helpers used by the benchmark script.
"""

from .timing import (
    timing,
    performance_context,
    get_performance_metrics,
    reset_performance_metrics
)

__all__ = [
    'timing',
    'performance_context',
    'get_performance_metrics',
    'reset_performance_metrics'
]
