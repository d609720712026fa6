"""Custom exceptions for the publisher.

Each exception carries a ``context`` dictionary with the details needed to
understand a failed run (paths, object keys, versions).
"""

from typing import Dict, Any, Optional


class PublisherError(Exception):
    """Base exception for all publishing failures.

    Attributes:
        context: Dictionary containing error details for debugging,
                such as package name, version and the step that failed.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Initialize PublisherError with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dictionary with error details for debugging
        """
        super().__init__(message)
        self.context = context or {}


class ArchiveError(PublisherError):
    """Exception raised when the package archive cannot be built.

    Raised for a missing package directory and for any tar or filesystem
    failure while writing the staging archive.
    """


class DescriptorError(PublisherError):
    """Exception raised when the package descriptor cannot be read.

    Raised when ``pubspec.yaml`` is missing, is not valid YAML, or does not
    contain a mapping at the top level.
    """


class PublishError(PublisherError):
    """Exception raised when an upload to object storage fails."""
