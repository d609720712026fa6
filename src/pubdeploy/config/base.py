"""Base configuration classes and validation framework.

This module defines the pieces every publisher configuration builds on:

- Abstract Configuration base class with a validation interface
- ConfigValidationResult for structured validation responses
- Error hierarchy for configuration failures
- Dictionary serialization for logging and debugging
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List
from dataclasses import dataclass


class ConfigurationError(Exception):
    """Base exception for all configuration-related errors."""

    pass


class ValidationError(ConfigurationError):
    """Exception raised when configuration validation fails.

    Used for missing credentials, empty names, malformed URLs and other
    values that would make a publishing run fail later on.
    """

    pass


class SerializationError(ConfigurationError):
    """Exception raised when a configuration cannot be built from a dictionary."""

    pass


@dataclass
class ConfigValidationResult:
    """Result of configuration validation with success state and error details.

    Attributes:
        success: True if validation passed, False otherwise
        errors: List of error messages describing validation failures
    """

    success: bool
    errors: List[str]

    def add_error(self, error: str) -> None:
        """Add an error message and mark validation as failed.

        Args:
            error: Error message to add
        """
        self.errors.append(error)
        self.success = False

    @classmethod
    def success_result(cls) -> ConfigValidationResult:
        """Create a successful validation result."""
        return cls(success=True, errors=[])


class Configuration(ABC):
    """Abstract base class for configuration types.

    Subclasses must implement:
    - validate(): Perform configuration-specific validation
    - to_dict(): Convert configuration to dictionary
    - from_dict(): Create configuration from dictionary (class method)
    """

    @abstractmethod
    def validate(self) -> ConfigValidationResult:
        """Validate this configuration and return detailed results."""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        pass

    @classmethod
    @abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> Configuration:
        """Create configuration instance from dictionary data.

        Args:
            data: Dictionary containing configuration data

        Returns:
            New configuration instance

        Raises:
            SerializationError: If data cannot be deserialized
        """
        pass

    def validate_or_raise(self) -> None:
        """Validate configuration and raise ValidationError if invalid.

        Raises:
            ValidationError: If configuration validation fails
        """
        result = self.validate()
        if not result.success:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in result.errors)
            raise ValidationError(error_msg)
