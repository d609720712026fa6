"""Build the gzipped tarball uploaded for each version."""

from __future__ import annotations

import logging
import tarfile
from pathlib import Path
from typing import List

from .exceptions import ArchiveError

logger = logging.getLogger(__name__)


def archive_members(package_dir: Path) -> List[Path]:
    """Top-level entries of ``package_dir`` that go into the archive.

    Hidden entries (``.git``, ``.dart_tool``) are skipped, the same set a
    shell ``*`` glob would match.
    """
    return sorted(entry for entry in package_dir.iterdir() if not entry.name.startswith("."))


def make_archive(package_dir: Path, version: str, staging_dir: Path) -> Path:
    """Archive ``package_dir`` into ``<staging_dir>/<version>.tar.gz``.

    Entries are stored relative to ``package_dir``. The archive is written
    under a temporary name and moved into place, replacing any archive left
    by an earlier run.

    Args:
        package_dir: Package root to archive
        version: Version being published, used for the file name
        staging_dir: Directory receiving the archive

    Returns:
        Path of the written archive

    Raises:
        ArchiveError: If the package directory is missing or writing fails
    """
    package_dir = Path(package_dir)
    staging_dir = Path(staging_dir)
    target = staging_dir / f"{version}.tar.gz"
    partial = staging_dir / f"{version}.tar.gz.partial"
    context = {"package_dir": str(package_dir), "archive": str(target)}

    if not package_dir.is_dir():
        raise ArchiveError(f"Package directory {package_dir} does not exist", context)

    try:
        staging_dir.mkdir(parents=True, exist_ok=True)
        members = archive_members(package_dir)
        with tarfile.open(partial, "w:gz") as tar:
            for member in members:
                # The staging directory may live inside the package tree
                if member.resolve() == staging_dir.resolve():
                    continue
                tar.add(member, arcname=member.name)
        partial.replace(target)
    except (OSError, tarfile.TarError) as e:
        partial.unlink(missing_ok=True)
        raise ArchiveError(f"Failed to archive {package_dir}: {e}", context) from e

    logger.info(f"Archived {len(members)} entries from {package_dir} into {target}")
    return target
