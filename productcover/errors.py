"""
Error types for the substring set-cover pipeline.

Fatal conditions are raised as exceptions derived from CoverError. Partial
coverage and empty candidate universes are not errors; they are recorded as
notes on the catalog result (see core.reporting).
"""

from typing import Optional, Any, Dict, List


class CoverError(Exception):
    """
    Base exception for all pipeline errors.

    Carries a structured ``details`` dict so the CLI and reports can show
    the offending values.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize cover error.

        Args:
            message: Error message
            details: Optional detailed error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(CoverError):
    """
    Raised when the run parameters are invalid.

    Raised before any catalog is processed; values are never clamped.
    """

    def __init__(self, message: str,
                 problems: Optional[List[str]] = None,
                 details: Optional[Dict[str, Any]] = None):
        """
        Initialize config error.

        Args:
            message: Error message
            problems: Every validation problem found
            details: Additional error context
        """
        super().__init__(message, details)
        self.problems = problems or [message]

        self.details.update({
            'problems': self.problems
        })


class EmptyInputError(CoverError):
    """Raised when no catalogs were supplied."""

    def __init__(self, message: str,
                 location: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.location = location

        self.details.update({
            'location': location
        })


class CatalogLoadError(CoverError):
    """Raised when a catalog file cannot be read."""

    def __init__(self, message: str,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.file_path = file_path

        self.details.update({
            'file_path': file_path
        })


class CandidateLimitError(CoverError):
    """
    Raised when candidate generation exceeds the configured bound.

    Only raised when ``max_candidates`` is set; long part strings with a
    wide length window otherwise grow quadratically.
    """

    def __init__(self, message: str,
                 catalog: Optional[str] = None,
                 limit: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.catalog = catalog
        self.limit = limit

        self.details.update({
            'catalog': catalog,
            'limit': limit
        })


def is_config_error(error: Exception) -> bool:
    """Check if error comes from parameter validation."""
    return isinstance(error, ConfigError)


def is_input_error(error: Exception) -> bool:
    """Check if error is due to missing or unreadable catalogs."""
    return isinstance(error, (EmptyInputError, CatalogLoadError))
