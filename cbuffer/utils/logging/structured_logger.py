"""
Structured logging system with JSON formatting and performance monitoring.

This module provides:
- Console logging through Python's logging module
- A bounded in-memory history of recent entries
- Optional daily log files (plain text, errors only, JSON lines)
- Performance timing for buffer operations
"""

import json
import logging
import shutil
import time
from collections import deque
from datetime import datetime, timedelta, timezone
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Deque, Dict, List, Optional, Union, TypeVar, cast

from cbuffer.types.models import LogEntry, LogLevel

# Type variable for generic function decorator
F = TypeVar('F', bound=Callable[..., Any])

_LEVEL_MAP = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL
}


def _parse_level(level: Union[LogLevel, str]) -> LogLevel:
    if isinstance(level, LogLevel):
        return level
    try:
        return LogLevel[level.upper()]
    except KeyError:
        valid_levels = ", ".join([l.name for l in LogLevel])
        raise ValueError(f"Invalid log level: {level}. Valid levels are: {valid_levels}")


class StructuredLogger:
    """
    Structured logger with optional JSON file output.

    Attributes:
        name (str): Logger name
        level (LogLevel): Current log level
        log_dir (Optional[Path]): Directory for log files, None for console only
        max_memory_entries (int): Maximum number of log entries kept in memory
        retention_days (int): Number of days to keep log files
        memory_buffer (deque): In-memory history of recent log entries
    """

    def __init__(
        self,
        name: str,
        level: Union[LogLevel, str] = LogLevel.INFO,
        log_dir: Optional[Union[str, Path]] = None,
        max_memory_entries: int = 1000,
        retention_days: int = 7
    ):
        """
        Initialize a new structured logger.

        Args:
            name: Logger name
            level: Log level (default: INFO)
            log_dir: Directory for log files (default: no file output)
            max_memory_entries: Maximum number of log entries to keep in memory
            retention_days: Number of days to keep log files

        Raises:
            ValueError: If invalid log level is provided
        """
        if max_memory_entries <= 0:
            raise ValueError("max_memory_entries must be a positive integer")

        self.name = name
        self.level = _parse_level(level)
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.max_memory_entries = max_memory_entries
        self.retention_days = retention_days
        self.memory_buffer: Deque[LogEntry] = deque(maxlen=max_memory_entries)
        self._context: Dict[str, Any] = {}

        self._setup_logging()

        if self.log_dir is not None:
            self._ensure_log_directory()
            self._cleanup_old_logs()

    def _setup_logging(self) -> None:
        """Set up Python's built-in logging with a console handler."""
        self._logger = logging.getLogger(self.name)
        self._logger.setLevel(_LEVEL_MAP[self.level])

        # Remove any existing handlers
        for handler in self._logger.handlers[:]:
            self._logger.removeHandler(handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(_LEVEL_MAP[self.level])
        formatter = logging.Formatter(
            '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)
        self._logger.addHandler(console_handler)

    def _ensure_log_directory(self) -> None:
        """Create today's log directory if it doesn't exist."""
        today = datetime.now().strftime("%Y-%m-%d")
        (self.log_dir / today).mkdir(parents=True, exist_ok=True)

    def _get_log_file_paths(self) -> Dict[str, Path]:
        """Get paths for the daily log files."""
        today = datetime.now().strftime("%Y-%m-%d")
        daily_log_dir = self.log_dir / today

        return {
            "main": daily_log_dir / "logs.log",
            "error": daily_log_dir / "errors.log",
            "json": daily_log_dir / "logs.json"
        }

    def _cleanup_old_logs(self) -> None:
        """Remove daily log directories older than retention_days."""
        if not self.log_dir.exists():
            return

        cutoff_date = datetime.now() - timedelta(days=self.retention_days)

        for item in self.log_dir.iterdir():
            if not item.is_dir():
                continue

            try:
                dir_date = datetime.strptime(item.name, "%Y-%m-%d")
            except ValueError:
                # Not a date-formatted directory, skip
                continue
            if dir_date < cutoff_date:
                shutil.rmtree(item)

    def _should_log(self, level: LogLevel) -> bool:
        return _LEVEL_MAP[level] >= _LEVEL_MAP[self.level]

    def _format_line(self, entry: LogEntry) -> str:
        timestamp = entry.timestamp.strftime("%Y-%m-%d %H:%M:%S")

        message = f"[{timestamp}] [{entry.level.value}]"
        if entry.service:
            message += f" [{entry.service}]"
        message += f" {entry.message}"

        if entry.context:
            context_str = " ".join([f"{k}={v}" for k, v in entry.context.items()])
            message += f" ({context_str})"

        if entry.operation and entry.duration_ms is not None:
            message += f" [operation={entry.operation}, duration={entry.duration_ms:.2f}ms]"

        if entry.error:
            message += f" [error={entry.error}]"

        return message

    def _write_files(self, entry: LogEntry) -> None:
        """Append the entry to the daily log files."""
        log_files = self._get_log_file_paths()
        log_files["main"].parent.mkdir(parents=True, exist_ok=True)

        line = self._format_line(entry)
        with open(log_files["main"], "a", encoding="utf-8") as f:
            f.write(line + "\n")

        if entry.level in (LogLevel.ERROR, LogLevel.CRITICAL):
            with open(log_files["error"], "a", encoding="utf-8") as f:
                f.write(line + "\n")

        with open(log_files["json"], "a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict(), default=str) + "\n")

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """
        Set the log level.

        Raises:
            ValueError: If invalid log level is provided
        """
        self.level = _parse_level(level)
        self._logger.setLevel(_LEVEL_MAP[self.level])
        for handler in self._logger.handlers:
            handler.setLevel(_LEVEL_MAP[self.level])

    def with_context(self, **context: Any) -> 'ContextLogger':
        """Create a new logger that adds ``context`` to every entry."""
        return ContextLogger(self, context)

    def log(
        self,
        level: LogLevel,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        duration_ms: Optional[float] = None,
        error: Optional[Union[str, Exception]] = None,
        **context: Any
    ) -> None:
        """
        Log a message with the specified level and context.

        Args:
            level: Log level
            message: Log message
            service: Service name (optional)
            operation: Operation name for performance logging (optional)
            duration_ms: Operation duration in milliseconds (optional)
            error: Error message or exception (optional)
            **context: Additional context key-value pairs
        """
        if not self._should_log(level):
            return

        error_str = None
        if error is not None:
            if isinstance(error, Exception):
                error_str = f"{type(error).__name__}: {str(error)}"
            else:
                error_str = str(error)

        entry = LogEntry(
            timestamp=datetime.now(timezone.utc),
            level=level,
            message=message,
            context={**self._context, **context},
            service=service,
            operation=operation,
            duration_ms=duration_ms,
            error=error_str
        )

        self.memory_buffer.append(entry)

        if self.log_dir is not None:
            self._write_files(entry)

        self._logger.log(_LEVEL_MAP[level], message)

    def debug(self, message: str, **context: Any) -> None:
        self.log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self.log(LogLevel.WARNING, message, **context)

    def error(
        self,
        message: str,
        error: Optional[Union[str, Exception]] = None,
        **context: Any
    ) -> None:
        self.log(LogLevel.ERROR, message, error=error, **context)

    def critical(
        self,
        message: str,
        error: Optional[Union[str, Exception]] = None,
        **context: Any
    ) -> None:
        self.log(LogLevel.CRITICAL, message, error=error, **context)

    def performance(
        self,
        operation: str,
        duration_ms: float,
        **context: Any
    ) -> None:
        """
        Log a performance metric at DEBUG level.

        Args:
            operation: Operation name
            duration_ms: Operation duration in milliseconds
            **context: Context key-value pairs
        """
        self.log(
            LogLevel.DEBUG,
            f"Performance: {operation} completed in {duration_ms:.3f}ms",
            operation=operation,
            duration_ms=duration_ms,
            **context
        )

    def get_recent_logs(
        self,
        level: Optional[LogLevel] = None,
        limit: Optional[int] = None
    ) -> List[LogEntry]:
        """
        Get recent log entries from the memory buffer.

        Args:
            level: Filter by log level (optional)
            limit: Maximum number of entries to return, newest kept (optional)

        Returns:
            List of log entries, oldest first
        """
        entries = list(self.memory_buffer)

        if level is not None:
            entries = [e for e in entries if e.level == level]

        if limit is not None:
            entries = entries[-limit:] if limit > 0 else []

        return entries


class ContextLogger:
    """
    Logger with additional context.

    Wraps a StructuredLogger and merges its own context into every entry.
    """

    def __init__(self, logger: StructuredLogger, context: Dict[str, Any]):
        self._logger = logger
        self._context = context

    @property
    def structured_logger(self) -> StructuredLogger:
        """The wrapped StructuredLogger."""
        return self._logger

    def with_context(self, **context: Any) -> 'ContextLogger':
        return ContextLogger(self._logger, {**self._context, **context})

    def log(
        self,
        level: LogLevel,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        duration_ms: Optional[float] = None,
        error: Optional[Union[str, Exception]] = None,
        **context: Any
    ) -> None:
        self._logger.log(
            level,
            message,
            service=service,
            operation=operation,
            duration_ms=duration_ms,
            error=error,
            **{**self._context, **context}
        )

    def debug(self, message: str, **context: Any) -> None:
        self.log(LogLevel.DEBUG, message, **context)

    def info(self, message: str, **context: Any) -> None:
        self.log(LogLevel.INFO, message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self.log(LogLevel.WARNING, message, **context)

    def error(
        self,
        message: str,
        error: Optional[Union[str, Exception]] = None,
        **context: Any
    ) -> None:
        self.log(LogLevel.ERROR, message, error=error, **context)

    def critical(
        self,
        message: str,
        error: Optional[Union[str, Exception]] = None,
        **context: Any
    ) -> None:
        self.log(LogLevel.CRITICAL, message, error=error, **context)

    def performance(
        self,
        operation: str,
        duration_ms: float,
        **context: Any
    ) -> None:
        self.log(
            LogLevel.DEBUG,
            f"Performance: {operation} completed in {duration_ms:.3f}ms",
            operation=operation,
            duration_ms=duration_ms,
            **context
        )


def timed(operation_name: str) -> Callable[[F], F]:
    """
    Decorator to time a method and log its duration.

    The duration is reported through the instance's ``logger`` attribute
    when it is a StructuredLogger or ContextLogger.

    Args:
        operation_name: Name of the operation for logging

    Returns:
        Decorated function
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = None
            if args and isinstance(getattr(args[0], 'logger', None), (StructuredLogger, ContextLogger)):
                logger = args[0].logger

            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                if logger is not None:
                    duration_ms = (time.perf_counter() - start_time) * 1000
                    logger.performance(operation_name, duration_ms)

        return cast(F, wrapper)
    return decorator
