"""pubdeploy - publish Dart/Flutter package versions to object storage.

This package archives a package directory, uploads the archive to an
S3-compatible bucket and records the version in the package's JSON index.
"""

from __future__ import annotations

from .constants import (
    DEFAULT_BUCKET,
    DEFAULT_REGION,
    DEFAULT_PUBLIC_BASE_URL,
    DEVELOPMENT_VERSION,
)
from .config import PublisherConfig
from .exceptions import ArchiveError, DescriptorError, PublishError, PublisherError
from .models import (
    DeployResult,
    Descriptor,
    PackageIndex,
    Pubspec,
    UploadFailure,
    UploadSuccess,
    VersionEntry,
)
from .publisher import Publisher

__version__ = "0.1.0"

__all__ = [
    # Constants
    "DEFAULT_BUCKET",
    "DEFAULT_REGION",
    "DEFAULT_PUBLIC_BASE_URL",
    "DEVELOPMENT_VERSION",
    # Configuration
    "PublisherConfig",
    # Publishing
    "Publisher",
    # Models
    "DeployResult",
    "Descriptor",
    "PackageIndex",
    "Pubspec",
    "UploadFailure",
    "UploadSuccess",
    "VersionEntry",
    # Errors
    "PublisherError",
    "ArchiveError",
    "DescriptorError",
    "PublishError",
]
