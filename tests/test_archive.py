"""Tests for building the version archive."""

from __future__ import annotations

import tarfile
from pathlib import Path
from unittest.mock import patch

import pytest

from pubdeploy.archive import archive_members, make_archive
from pubdeploy.exceptions import ArchiveError


def archive_names(path: Path) -> set[str]:
    with tarfile.open(path, "r:gz") as tar:
        return set(tar.getnames())


class TestArchiveMembers:
    def test_hidden_entries_are_skipped(self, package_dir: Path):
        names = [member.name for member in archive_members(package_dir)]

        assert names == ["README.md", "lib", "pubspec.yaml"]


class TestMakeArchive:
    def test_given_package_when_archiving_then_versioned_tarball_in_staging(self, package_dir: Path, staging_dir: Path):
        archive = make_archive(package_dir, "1.0.0", staging_dir)

        assert archive == staging_dir / "1.0.0.tar.gz"
        assert archive.is_file()
        assert archive_names(archive) == {
            "README.md",
            "lib",
            "lib/shared_preferences.dart",
            "pubspec.yaml",
        }

    def test_entries_are_relative_to_package_dir(self, package_dir: Path, staging_dir: Path):
        archive = make_archive(package_dir, "1.0.0", staging_dir)

        with tarfile.open(archive, "r:gz") as tar:
            content = tar.extractfile("pubspec.yaml").read().decode("utf-8")

        assert content == (package_dir / "pubspec.yaml").read_text()

    def test_existing_archive_is_replaced(self, package_dir: Path, staging_dir: Path):
        (staging_dir / "1.0.0.tar.gz").write_bytes(b"stale")

        archive = make_archive(package_dir, "1.0.0", staging_dir)

        assert "pubspec.yaml" in archive_names(archive)
        assert not (staging_dir / "1.0.0.tar.gz.partial").exists()

    def test_missing_staging_dir_is_created(self, package_dir: Path, tmp_path: Path):
        archive = make_archive(package_dir, "1.0.0", tmp_path / "new" / "staging")

        assert archive.is_file()

    def test_staging_dir_inside_package_is_not_archived(self, package_dir: Path):
        staging = package_dir / "build"

        archive = make_archive(package_dir, "1.0.0", staging)

        assert not any(name.startswith("build") for name in archive_names(archive))

    def test_given_missing_package_dir_when_archiving_then_archive_error(self, tmp_path: Path, staging_dir: Path):
        with pytest.raises(ArchiveError, match="does not exist") as excinfo:
            make_archive(tmp_path / "missing", "1.0.0", staging_dir)

        assert excinfo.value.context["archive"] == str(staging_dir / "1.0.0.tar.gz")

    def test_given_tar_failure_when_archiving_then_archive_error_and_no_partial_file(
        self, package_dir: Path, staging_dir: Path
    ):
        with patch("pubdeploy.archive.tarfile.TarFile.add", side_effect=OSError("disk full")):
            with pytest.raises(ArchiveError, match="disk full"):
                make_archive(package_dir, "1.0.0", staging_dir)

        assert list(staging_dir.iterdir()) == []
