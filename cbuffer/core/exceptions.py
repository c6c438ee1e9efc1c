"""
Custom exception classes for better error categorization.

Buffer states such as full, empty or overflow are reported as
``BufferStatus`` values and never raised. The exceptions defined here
cover misuse of the API and misconfiguration, and carry contextual
information for logging.
"""

from typing import Optional, Any, Dict


class CBufferError(Exception):
    """
    Base exception class for all circular buffer errors.

    Attributes:
        message (str): Human-readable error message
        error_code (str): Machine-readable error code for categorization
        context (Dict[str, Any]): Additional context information
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context
        }


class ConfigurationError(CBufferError):
    """
    Raised when there are configuration-related errors.

    This includes invalid environment variable values and configuration
    validation failures.
    """

    def __init__(
        self,
        message: str,
        invalid_values: Optional[Dict[str, Any]] = None,
        validation_errors: Optional[list] = None,
        env_file_path: Optional[str] = None
    ):
        context = {}
        if invalid_values:
            context['invalid_values'] = invalid_values
        if validation_errors:
            context['validation_errors'] = validation_errors
        if env_file_path:
            context['env_file_path'] = env_file_path

        super().__init__(message, "CONFIG_ERROR", context)
        self.invalid_values = invalid_values or {}
        self.validation_errors = validation_errors or []
        self.env_file_path = env_file_path

    def get_troubleshooting_message(self) -> str:
        """
        Get a detailed troubleshooting message for this configuration error.

        Returns:
            str: Formatted message with guidance on how to fix the issue
        """
        message = [f"Configuration Error: {self.message}"]

        if self.invalid_values:
            message.append("\nInvalid environment variable values:")
            for key, value in self.invalid_values.items():
                message.append(f"  - {key}: {value}")
            message.append("\nPlease check the data types and formats of these variables.")

        if self.validation_errors:
            message.append("\nConfiguration validation errors:")
            for error in self.validation_errors:
                message.append(f"  - {error}")

        if self.env_file_path:
            message.append(f"\nEnvironment file path: {self.env_file_path}")

        return "\n".join(message)


class ValidationError(CBufferError):
    """
    Raised when an argument passed to the buffer is invalid.

    This covers bytes outside 0..255, payloads of an unsupported type and
    invalid capacities.
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        expected_type: Optional[str] = None,
        actual_value: Optional[Any] = None
    ):
        context = {}
        if field_name:
            context['field_name'] = field_name
        if expected_type:
            context['expected_type'] = expected_type
        if actual_value is not None:
            context['actual_value'] = str(actual_value)
            context['actual_type'] = type(actual_value).__name__

        super().__init__(message, "VALIDATION_ERROR", context)
        self.field_name = field_name
        self.expected_type = expected_type
        self.actual_value = actual_value
