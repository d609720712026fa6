"""Test configuration for pytest."""

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

# Add the src directory to Python path so pubdeploy can be imported without installing
src_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "src")
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from pubdeploy.config import PublisherConfig  # noqa: E402

from tests.helpers import InMemoryS3Client  # noqa: E402


PUBSPEC_YAML = """\
name: shared_preferences
description: Flutter plugin for reading and writing simple key-value pairs.
version: 1.0.0
author: MPFlutter Team
homepage: https://mpflutter.com
environment:
  sdk: ">=2.12.0 <3.0.0"
  flutter: ">=1.20.0"
dependencies:
  flutter:
    sdk: flutter
  mpcore: ^1.0.0
dev_dependencies:
  flutter_test:
    sdk: flutter
"""


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep real credentials and overrides out of every test."""
    for name in list(os.environ):
        if name.startswith("PUBDEPLOY_") or name in ("COS_SECRET_ID", "COS_SECRET_KEY"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def package_dir(tmp_path: Path) -> Path:
    """A small Flutter package tree with a pubspec.yaml."""
    root = tmp_path / "shared_preferences"
    (root / "lib").mkdir(parents=True)
    (root / "lib" / "shared_preferences.dart").write_text("library shared_preferences;\n")
    (root / "pubspec.yaml").write_text(PUBSPEC_YAML)
    (root / "README.md").write_text("# shared_preferences\n")
    (root / ".dart_tool").mkdir()
    (root / ".dart_tool" / "package_config.json").write_text("{}")
    return root


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def make_config(package_dir: Path, staging_dir: Path) -> Callable[..., PublisherConfig]:
    """Factory for a valid PublisherConfig pointing at the temporary package."""

    def factory(**overrides) -> PublisherConfig:
        values = {
            "package_name": "shared_preferences",
            "version": "1.0.0",
            "secret_id": "AKIDEXAMPLE",
            "secret_key": "secret",
            "package_dir": package_dir,
            "staging_dir": staging_dir,
        }
        values.update(overrides)
        return PublisherConfig(**values)

    return factory


@pytest.fixture
def s3_client() -> InMemoryS3Client:
    return InMemoryS3Client()
