"""Publisher configuration.

This module provides PublisherConfig, which gathers everything a publishing
run needs in one explicit object passed to the Publisher:

- Package identity (name, version, development tag)
- Storage target (bucket, region, endpoint, public URL base)
- Credentials (COS_SECRET_ID / COS_SECRET_KEY)
- Local paths (package directory, staging directory)

Values resolve in priority order: explicit parameters, then environment
variables, then the defaults in ``pubdeploy.constants``.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from .. import constants
from .base import Configuration, ConfigValidationResult, SerializationError

# Environment variable for each overridable field.
ENVIRONMENT_VARIABLES = {
    "package_name": "PUBDEPLOY_PACKAGE_NAME",
    "version": "PUBDEPLOY_VERSION",
    "bucket": "PUBDEPLOY_BUCKET",
    "region": "PUBDEPLOY_REGION",
    "endpoint_url": "PUBDEPLOY_ENDPOINT_URL",
    "public_base_url": "PUBDEPLOY_PUBLIC_BASE_URL",
    "package_dir": "PUBDEPLOY_PACKAGE_DIR",
    "staging_dir": "PUBDEPLOY_STAGING_DIR",
    "development_version": "PUBDEPLOY_DEVELOPMENT_VERSION",
    "secret_id": constants.SECRET_ID_ENV,
    "secret_key": constants.SECRET_KEY_ENV,
}


class PublisherConfig(Configuration):
    """Configuration for one publishing run.

    Example usage:
        # From environment variables with CLI overrides
        config = PublisherConfig.with_defaults(package_name="shared_preferences")

        # Validate before touching the network
        config.validate_or_raise()
    """

    def __init__(
        self,
        package_name: str = constants.DEFAULT_PACKAGE_NAME,
        version: str = constants.DEFAULT_VERSION,
        bucket: str = constants.DEFAULT_BUCKET,
        region: str = constants.DEFAULT_REGION,
        secret_id: Optional[str] = None,
        secret_key: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        public_base_url: str = constants.DEFAULT_PUBLIC_BASE_URL,
        package_dir: Path | str = constants.DEFAULT_PACKAGE_DIR,
        staging_dir: Optional[Path | str] = None,
        development_version: str = constants.DEVELOPMENT_VERSION,
    ):
        self.package_name = package_name
        self.version = version
        self.bucket = bucket
        self.region = region
        self.secret_id = secret_id
        self.secret_key = secret_key
        self.endpoint_url = endpoint_url or constants.ENDPOINT_URL_TEMPLATE.format(region=region)
        self.public_base_url = public_base_url.rstrip("/")
        self.package_dir = Path(package_dir)
        self.staging_dir = Path(staging_dir) if staging_dir else Path(tempfile.gettempdir())
        self.development_version = development_version

    @property
    def descriptor_path(self) -> Path:
        """Location of the package's ``pubspec.yaml``."""
        return self.package_dir / constants.DESCRIPTOR_FILENAME

    @property
    def archive_path(self) -> Path:
        """Staging location of the version archive."""
        return self.staging_dir / f"{self.version}.tar.gz"

    @property
    def index_path(self) -> Path:
        """Staging location of the index copy."""
        return self.staging_dir / f"{self.package_name}.{constants.INDEX_FILENAME}"

    @property
    def archive_key(self) -> str:
        return constants.archive_key(self.package_name, self.version)

    @property
    def index_key(self) -> str:
        return constants.index_key(self.package_name)

    @property
    def archive_url(self) -> str:
        """Public URL the uploaded archive is served from."""
        return f"{self.public_base_url}/{self.archive_key}"

    @property
    def is_development(self) -> bool:
        return self.version == self.development_version

    def validate(self) -> ConfigValidationResult:
        """Validate the publisher configuration.

        Returns:
            ConfigValidationResult with validation status and detailed error messages
        """
        result = ConfigValidationResult.success_result()

        if not self.package_name or not self.package_name.strip():
            result.add_error("Package name is required")
        elif "/" in self.package_name:
            result.add_error(f"Package name '{self.package_name}' must not contain '/'")

        if not self.version or not self.version.strip():
            result.add_error("Version is required")
        elif "/" in self.version:
            result.add_error(f"Version '{self.version}' must not contain '/'")

        if not self.bucket:
            result.add_error("Bucket is required")
        elif not self._is_valid_bucket_name(self.bucket):
            result.add_error(
                f"Bucket name '{self.bucket}' is not valid. Bucket names must be 3-63 characters, "
                "contain only lowercase letters, numbers, periods, and hyphens, "
                "and start and end with a letter or number."
            )

        if not self.region:
            result.add_error("Region is required")

        if not self.secret_id:
            result.add_error(f"Missing credentials: set {constants.SECRET_ID_ENV}")
        if not self.secret_key:
            result.add_error(f"Missing credentials: set {constants.SECRET_KEY_ENV}")

        for error in self._validate_http_url("Public base URL", self.public_base_url):
            result.add_error(error)
        for error in self._validate_http_url("Endpoint URL", self.endpoint_url):
            result.add_error(error)

        return result

    def _validate_http_url(self, label: str, url: str) -> list[str]:
        """Validate that a URL is an absolute HTTP or HTTPS URL.

        Args:
            label: Name of the setting used in error messages
            url: URL to validate

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not url or not url.strip():
            errors.append(f"{label} is required")
            return errors

        if not (url.startswith("http://") or url.startswith("https://")):
            errors.append(f"{label} must start with 'http://' or 'https://' (got '{url}')")
            return errors

        if not urlparse(url).netloc:
            errors.append(f"{label} must specify a hostname (got '{url}')")

        return errors

    def _is_valid_bucket_name(self, bucket_name: str) -> bool:
        """Check if bucket name follows S3/COS naming rules.

        Args:
            bucket_name: Bucket name to validate

        Returns:
            True if bucket name is valid, False otherwise
        """
        if len(bucket_name) < 3 or len(bucket_name) > 63:
            return False

        if not (bucket_name[0].isalnum() and bucket_name[-1].isalnum()):
            return False

        if not re.match(r'^[a-z0-9.\-]+$', bucket_name):
            return False

        if '..' in bucket_name:
            return False

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary for logging.

        The secret key is masked; the secret id is kept so the credential
        in use can be identified.
        """
        return {
            "package_name": self.package_name,
            "version": self.version,
            "bucket": self.bucket,
            "region": self.region,
            "secret_id": self.secret_id,
            "secret_key": "***" if self.secret_key else None,
            "endpoint_url": self.endpoint_url,
            "public_base_url": self.public_base_url,
            "package_dir": str(self.package_dir),
            "staging_dir": str(self.staging_dir),
            "development_version": self.development_version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> PublisherConfig:
        """Create PublisherConfig from dictionary data.

        Keys that are absent or None keep their defaults.

        Raises:
            SerializationError: If data contains unknown keys
        """
        unknown = set(data) - set(ENVIRONMENT_VARIABLES)
        if unknown:
            raise SerializationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        try:
            return cls(**{key: value for key, value in data.items() if value is not None})
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to deserialize PublisherConfig: {e}") from e

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> PublisherConfig:
        """Create PublisherConfig from environment variables.

        Reads COS_SECRET_ID, COS_SECRET_KEY and the PUBDEPLOY_* variables.
        Empty variables are treated as unset.
        """
        environ = os.environ if environ is None else environ
        values = {field: environ.get(var) or None for field, var in ENVIRONMENT_VARIABLES.items()}
        return cls.from_dict(values)

    @classmethod
    def with_defaults(cls, environ: Optional[Mapping[str, str]] = None, **kwargs: Any) -> PublisherConfig:
        """Create PublisherConfig with explicit parameters taking precedence over environment.

        Priority order:
        1. Explicit keyword arguments that are not None
        2. Environment variables
        3. Defaults from ``pubdeploy.constants``
        """
        environ = os.environ if environ is None else environ
        values = {field: environ.get(var) or None for field, var in ENVIRONMENT_VARIABLES.items()}
        values.update({key: value for key, value in kwargs.items() if value is not None})
        return cls.from_dict(values)
