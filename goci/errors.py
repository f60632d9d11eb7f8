"""
Exception classes for goci.

Resolving a configuration into an execution plan cannot fail, so the
hierarchy is small:
- GociError: base class for everything raised by this package
- ConfigError: configuration files that are missing, malformed or unusable
- UnsupportedOptionError: an option passed to a pipeline kind it cannot configure

Errors raised by the container engine are never wrapped; they reach the
caller unchanged.
"""

from typing import Dict, Optional


class GociError(Exception):
    """Base exception for all goci errors."""

    def __init__(self, message: str, pipeline: Optional[str] = None, details: Optional[Dict] = None):
        """Initialize goci error.

        Parameters
        ----------
        message : str
            Error message
        pipeline : str, optional
            Pipeline kind (base, test, lint) the error relates to
        details : dict, optional
            Additional error details
        """
        super().__init__(message)
        self.pipeline = pipeline
        self.details = details or {}


class ConfigError(GociError):
    """Raised when a configuration file cannot be loaded or translated."""

    def __init__(self, message: str, config_file: Optional[str] = None):
        """Initialize configuration error."""
        super().__init__(message, details={"config_file": config_file})
        self.config_file = config_file


class UnsupportedOptionError(GociError, TypeError):
    """Raised when an option is applied to a pipeline kind it does not support."""

    def __init__(self, option: object, pipeline: str):
        """Initialize unsupported option error."""
        message = f"Option {option!r} cannot configure {pipeline} pipelines"
        super().__init__(message, pipeline, {"option": type(option).__name__})
        self.option = option
