"""Data models for descriptors, the package index and step results."""

from .package import Descriptor, PackageIndex, Pubspec, VersionEntry
from .responses import (
    DeployResult,
    ErrorResponse,
    SuccessResponse,
    UploadFailure,
    UploadResult,
    UploadSuccess,
)

__all__ = [
    "Descriptor",
    "PackageIndex",
    "Pubspec",
    "VersionEntry",
    "DeployResult",
    "ErrorResponse",
    "SuccessResponse",
    "UploadFailure",
    "UploadResult",
    "UploadSuccess",
]
