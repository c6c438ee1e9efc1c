"""
Performance timing utilities.

This module provides a decorator and a context manager for timing code
execution and aggregating the measurements per category and operation.
"""

import time
import functools
from typing import Dict, Any, Optional, Callable, Iterator, TypeVar, cast
from contextlib import contextmanager

F = TypeVar('F', bound=Callable[..., Any])

# Global performance metrics storage
_performance_metrics: Dict[str, Dict[str, Any]] = {}


def get_performance_metrics() -> Dict[str, Dict[str, Any]]:
    """
    Get the current performance metrics.

    Returns:
        Dict: Performance metrics by category and operation
    """
    return _performance_metrics


def reset_performance_metrics() -> None:
    """Reset all performance metrics."""
    _performance_metrics.clear()


def _record_timing(category: str, operation: str, duration: float) -> None:
    """
    Record a timing measurement.

    Args:
        category: Category of the operation
        operation: Name of the operation
        duration: Duration in seconds
    """
    if category not in _performance_metrics:
        _performance_metrics[category] = {}

    if operation not in _performance_metrics[category]:
        _performance_metrics[category][operation] = {
            'count': 0,
            'total_time': 0.0,
            'min_time': float('inf'),
            'max_time': 0.0,
            'avg_time': 0.0
        }

    metrics = _performance_metrics[category][operation]
    metrics['count'] += 1
    metrics['total_time'] += duration
    metrics['min_time'] = min(metrics['min_time'], duration)
    metrics['max_time'] = max(metrics['max_time'], duration)
    metrics['avg_time'] = metrics['total_time'] / metrics['count']


def timing(category: str = "default", operation: Optional[str] = None) -> Callable[[F], F]:
    """
    Decorator for timing function execution.

    Args:
        category: Category for the timing measurement
        operation: Name of the operation (defaults to function name)

    Returns:
        Decorated function
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            op_name = operation or func.__name__
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                _record_timing(category, op_name, time.perf_counter() - start_time)

        return cast(F, wrapper)

    return decorator


@contextmanager
def performance_context(operation: str, category: str = "context") -> Iterator[None]:
    """
    Context manager for timing code blocks.

    Args:
        operation: Name of the operation
        category: Category for the timing measurement
    """
    start_time = time.perf_counter()
    try:
        yield
    finally:
        _record_timing(category, operation, time.perf_counter() - start_time)
