"""Exceptions raised by the parsers and formatters."""


class TimeutilsError(Exception):
    """Base exception for mb-timeutils."""

    code = "TIMEUTILS_ERROR"


class InvalidFormatError(TimeutilsError, ValueError):
    """Input text is malformed, unrecognized, or names an impossible date."""

    code = "INVALID_FORMAT"


class OutOfRangeError(TimeutilsError, ValueError):
    """A parsed or converted value does not fit an unsigned microsecond timestamp."""

    code = "OUT_OF_RANGE"


class BufferTooSmallError(TimeutilsError):
    """Formatted output would exceed the caller's buffer capacity."""

    code = "BUFFER_TOO_SMALL"

    def __init__(self, required: int, capacity: int) -> None:
        """Record how many characters were needed against what was available.

        Args:
            required: Characters the pending field needs.
            capacity: Characters still free when the field was attempted.

        """
        super().__init__(f"Output needs {required} more characters, only {capacity} left.")
        self.required = required
        self.capacity = capacity
