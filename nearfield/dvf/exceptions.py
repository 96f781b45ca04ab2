"""
Custom Exceptions Module

This module defines the exception hierarchy for the near-field filter package,
providing specific error types so callers can tell domain violations apart
from configuration and file problems.
"""

class NearFieldError(Exception):
    """Base exception class for all near-field filter errors."""
    pass


class ConfigurationError(NearFieldError):
    """Error in filter configuration."""
    pass


class ValidationError(NearFieldError):
    """Error during parameter validation."""
    pass


class FileFormatError(NearFieldError):
    """Error in file format handling."""
    pass


class MathError(NearFieldError):
    """Error in mathematical calculations."""
    
    class PrecisionError(NearFieldError):
        """Error due to numerical precision issues."""
        pass
    
    class DomainError(NearFieldError):
        """Error due to input values outside the valid domain."""
        pass
