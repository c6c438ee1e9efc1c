"""
Data models and type definitions for the circular buffer library.

This module defines the status taxonomy, the tagged result types returned
by buffer operations, configuration and the structures used by the
structured logger.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Any


# Enums for better type safety
class BufferStatus(Enum):
    """Status codes returned by buffer operations."""
    SUCCESS = 0
    EMPTY = -1
    FULL = -2
    OVERFLOW = -3
    FAIL = -4
    INVALID_STRING = -5

    @property
    def ok(self) -> bool:
        """True only for SUCCESS."""
        return self is BufferStatus.SUCCESS


class LogLevel(Enum):
    """Logging levels for structured logging."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# Operation results
@dataclass(frozen=True)
class ByteResult:
    """
    Result of a single-byte read (pop or peek).

    ``value`` holds the byte (0..255) when ``status`` is SUCCESS and is
    None otherwise.
    """
    status: BufferStatus
    value: Optional[int] = None

    def __bool__(self) -> bool:
        return self.status.ok


@dataclass(frozen=True)
class StringResult:
    """Result of a string read. ``data`` excludes the terminator."""
    status: BufferStatus
    data: bytes = b""

    def __bool__(self) -> bool:
        return self.status.ok


@dataclass
class BufferStats:
    """Space accounting snapshot of a buffer."""
    capacity: int
    used: int
    available: int
    front: int
    rear: int
    utilization: float = field(init=False)

    def __post_init__(self):
        """Calculate utilization against the usable slots."""
        usable = self.capacity - 1
        self.utilization = self.used / usable if usable > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return asdict(self)


# Configuration data models
@dataclass
class BufferConfig:
    """
    Type-safe configuration for buffers and their logging.

    Attributes mirror the CBUFFER_* environment variables read by
    ``ConfigManager``.
    """
    capacity: int = 50
    log_level: str = "INFO"
    log_dir: Optional[str] = None  # None disables file logs
    max_log_entries: int = 1000

    # Environment-specific settings
    environment: str = "development"  # development, testing, production
    debug_mode: bool = False

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid
        """
        if not isinstance(self.capacity, int) or isinstance(self.capacity, bool):
            raise ValueError(f"capacity must be an integer, got {type(self.capacity).__name__}")
        if self.capacity < 2:
            raise ValueError("capacity must be at least 2 (one slot is always reserved)")

        if self.max_log_entries <= 0:
            raise ValueError("max_log_entries must be positive")

        valid_log_levels = [level.value for level in LogLevel]
        if self.log_level not in valid_log_levels:
            raise ValueError(f"log_level must be one of {valid_log_levels}")

        if self.log_dir is not None and not self.log_dir:
            raise ValueError("log_dir cannot be an empty string")

        valid_environments = ["development", "testing", "production"]
        if self.environment not in valid_environments:
            raise ValueError(f"environment must be one of {valid_environments}")

        if not isinstance(self.debug_mode, bool):
            raise ValueError(f"debug_mode must be a boolean, got {type(self.debug_mode).__name__}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return asdict(self)

    def get_environment_specific_defaults(self) -> Dict[str, Any]:
        """Get environment-specific default values."""
        defaults = {}

        if self.environment in ("development", "testing"):
            defaults.update({
                "debug_mode": True,
                "log_level": "DEBUG"
            })
        elif self.environment == "production":
            defaults.update({
                "debug_mode": False,
                "log_level": "INFO"
            })

        return defaults


# Logging data models
@dataclass
class LogEntry:
    """Structured log entry."""
    timestamp: datetime
    level: LogLevel
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    service: Optional[str] = None
    operation: Optional[str] = None
    duration_ms: Optional[float] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON logging."""
        data = {
            'timestamp': self.timestamp.isoformat(),
            'level': self.level.value,
            'message': self.message,
            'context': self.context
        }

        if self.service:
            data['service'] = self.service
        if self.operation:
            data['operation'] = self.operation
        if self.duration_ms is not None:
            data['duration_ms'] = self.duration_ms
        if self.error:
            data['error'] = self.error

        return data
