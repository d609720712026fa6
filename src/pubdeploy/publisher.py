"""Publish a package version to object storage.

The Publisher runs four ordered steps:

1. archive()         tar+gzip the package directory into the staging directory
2. upload()          store the archive under ``<name>/versions/<version>.tar.gz``
3. build_manifest()  turn ``pubspec.yaml`` into the version's index entry
4. publish_index()   merge the entry into ``<name>/package.json`` and write it back

deploy() chains them and stops at the first failure. The index update is a
plain fetch-modify-write: concurrent runs for the same package can lose
each other's entries.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from .archive import make_archive
from .config import PublisherConfig
from .constants import STORAGE_CLASS
from .descriptor import build_version_entry, load_descriptor
from .exceptions import PublishError
from .index import dump_index, merge_version, parse_index
from .models import (
    DeployResult,
    PackageIndex,
    UploadFailure,
    UploadResult,
    UploadSuccess,
    VersionEntry,
)
from .utilities.aws import S3Error, create_client, create_session, get_object, upload_file

logger = logging.getLogger(__name__)

ARCHIVE_CONTENT_TYPE = "application/gzip"
INDEX_CONTENT_TYPE = "application/json"


def create_storage_client(config: PublisherConfig) -> Any:
    """Build an S3 client for the configured bucket region and endpoint."""
    session = create_session(config.secret_id, config.secret_key, region=config.region)
    return create_client(session, region=config.region, endpoint_url=config.endpoint_url)


class Publisher:
    """Publishes one version of one package.

    Args:
        config: Run configuration (package, version, storage target, paths)
        client: S3 client; built from ``config`` when omitted
    """

    def __init__(self, config: PublisherConfig, client: Optional[Any] = None):
        self.config = config
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = create_storage_client(self.config)
        return self._client

    @property
    def name(self) -> str:
        return self.config.package_name

    @property
    def version(self) -> str:
        return self.config.version

    def archive(self) -> Path:
        """Archive the package directory into the staging directory."""
        return make_archive(self.config.package_dir, self.version, self.config.staging_dir)

    def _upload(self, path: Path, key: str, content_type: str, url: Optional[str] = None) -> UploadResult:
        bucket = self.config.bucket
        if not Path(path).is_file():
            return UploadFailure(bucket=bucket, key=key, error=f"Staging file {path} does not exist")

        try:
            result = upload_file(
                self.client, bucket, key, Path(path), content_type=content_type, storage_class=STORAGE_CLASS
            )
        except S3Error as e:
            logger.error(f"Upload of {key} to bucket {bucket} failed: {e}")
            return UploadFailure(bucket=bucket, key=key, error=str(e), cause=e.error_code)

        logger.info(f"Uploaded {path} to {bucket}/{key}")
        return UploadSuccess(bucket=bucket, key=key, url=url, etag=result.get("etag"), size=result.get("size"))

    def upload(self, path: Path) -> UploadResult:
        """Upload the version archive.

        On success the result carries the public archive URL, derived from
        the configured public base URL rather than the storage response.
        """
        return self._upload(path, self.config.archive_key, ARCHIVE_CONTENT_TYPE, url=self.config.archive_url)

    def build_manifest(self, archive_url: str) -> VersionEntry:
        """Build the index entry for this version from ``pubspec.yaml``."""
        descriptor = load_descriptor(self.config.descriptor_path)
        return build_version_entry(self.name, self.version, descriptor, archive_url)

    def fetch_index(self) -> PackageIndex:
        """Fetch the remote index; any failure yields an empty index."""
        key = self.config.index_key
        source = f"{self.config.bucket}/{key}"
        try:
            result = get_object(self.client, self.config.bucket, key)
        except S3Error as e:
            if e.is_missing_object:
                logger.info(f"No index at {source}, starting a new one")
            else:
                logger.warning(f"Could not fetch {source}, starting a new index: {e}")
            return PackageIndex()
        return parse_index(result["data"], source=source)

    def _merge_index(self, entry: VersionEntry) -> PackageIndex:
        return merge_version(self.fetch_index(), entry, self.name, self.config.development_version)

    def _write_index(self, index: PackageIndex) -> UploadResult:
        staging = self.config.index_path
        staging.parent.mkdir(parents=True, exist_ok=True)
        staging.write_text(dump_index(index), encoding="utf-8")
        logger.debug(f"Wrote index copy to {staging}")

        return self._upload(staging, self.config.index_key, INDEX_CONTENT_TYPE)

    def publish_index(self, entry: VersionEntry) -> UploadResult:
        """Merge ``entry`` into the remote index and write the index back.

        The remote document is overwritten unconditionally.
        """
        return self._write_index(self._merge_index(entry))

    def deploy(self) -> DeployResult:
        """Run all publishing steps in order.

        Raises:
            ArchiveError: If the archive cannot be built
            DescriptorError: If ``pubspec.yaml`` cannot be read
            PublishError: If either upload fails
        """
        logger.info(f"Publishing {self.name}@{self.version} to bucket {self.config.bucket}")

        archive_path = self.archive()

        uploaded = self.upload(archive_path)
        if not uploaded.success:
            raise PublishError(
                f"Archive upload failed: {uploaded.error}",
                {"package": self.name, "version": self.version, "key": uploaded.key},
            )

        entry = self.build_manifest(uploaded.url)

        index = self._merge_index(entry)
        published = self._write_index(index)
        if not published.success:
            raise PublishError(
                f"Index upload failed: {published.error}",
                {"package": self.name, "version": self.version, "key": published.key},
            )

        latest_updated = not self.config.is_development
        if not latest_updated:
            logger.info(f"{self.version} is the development version; latest left unchanged")
        logger.info(f"Published {self.name}@{self.version} at {uploaded.url}")

        return DeployResult(
            package=self.name,
            version=self.version,
            archive_path=archive_path,
            archive_url=uploaded.url,
            index_key=published.key,
            latest_updated=latest_updated,
            version_count=len(index.versions),
        )
