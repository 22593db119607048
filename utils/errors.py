"""
Error definitions and handling for the toolpath viewer.
"""
from enum import Enum
from dataclasses import dataclass
from typing import List


class ErrorType(Enum):
    SYNTAX = "syntax"
    SEMANTIC = "semantic"
    GEOMETRY = "geometry"


class ErrorSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"


class InvalidParameterError(ValueError):
    """Raised when a caller-supplied value (e.g. the display Z text) cannot be used."""


class RenderSurfaceError(RuntimeError):
    """Raised when a redraw is requested without a ready rendering surface."""


@dataclass
class GCodeError:
    """Represents an error in G-code processing with position information."""
    line_number: int
    char_start: int
    char_end: int
    message: str
    error_type: ErrorType
    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __str__(self):
        return f"Line {self.line_number}: {self.message}"


class ErrorCollector:
    """Collects and manages errors during G-code processing."""

    def __init__(self):
        self.errors: List[GCodeError] = []

    def add_error(self, line_number: int, char_start: int, char_end: int,
                  message: str, error_type: ErrorType,
                  severity: ErrorSeverity = ErrorSeverity.ERROR):
        """Add an error to the collection."""
        error = GCodeError(line_number, char_start, char_end, message,
                           error_type, severity)
        self.errors.append(error)

    def add_warning(self, line_number: int, message: str, error_type: ErrorType,
                    char_start: int = 0, char_end: int = 0):
        """Add a warning; warnings never count as errors."""
        self.add_error(line_number, char_start, char_end, message,
                       error_type, ErrorSeverity.WARNING)

    def get_errors_for_line(self, line_number: int) -> List[GCodeError]:
        """Get all errors for a specific line."""
        return [error for error in self.errors if error.line_number == line_number]

    def has_errors(self) -> bool:
        """Check if there are any errors (excluding warnings)."""
        return any(error.severity == ErrorSeverity.ERROR for error in self.errors)

    def warning_count(self) -> int:
        return len([e for e in self.errors if e.severity == ErrorSeverity.WARNING])

    def clear(self):
        """Clear all errors."""
        self.errors.clear()

    def get_all_errors(self) -> List[GCodeError]:
        """Get all errors sorted by line number."""
        return sorted(self.errors, key=lambda e: (e.line_number, e.char_start))
