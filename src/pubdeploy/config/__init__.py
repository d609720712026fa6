"""Configuration for publishing runs."""

from .base import (
    Configuration,
    ConfigValidationResult,
    ConfigurationError,
    SerializationError,
    ValidationError,
)
from .publisher import PublisherConfig

__all__ = [
    "Configuration",
    "ConfigValidationResult",
    "ConfigurationError",
    "SerializationError",
    "ValidationError",
    "PublisherConfig",
]
