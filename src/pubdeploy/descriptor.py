"""Read package descriptors and turn them into index entries."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from . import constants
from .exceptions import DescriptorError
from .models import Descriptor, Pubspec, VersionEntry

logger = logging.getLogger(__name__)

# Constraint keys copied from the descriptor's ``environment`` section.
ENVIRONMENT_KEYS = ("sdk", "flutter")


def load_descriptor(path: Path) -> Descriptor:
    """Parse ``pubspec.yaml`` at ``path``.

    An empty file yields an empty descriptor.

    Raises:
        DescriptorError: If the file is missing, is not valid YAML, or does not
            hold a mapping with the expected field types.
    """
    context = {"path": str(path)}
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorError(f"Cannot read descriptor {path}: {e}", context) from e

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DescriptorError(f"Descriptor {path} is not valid YAML: {e}", context) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise DescriptorError(
            f"Descriptor {path} must contain a mapping, got {type(raw).__name__}", context
        )

    try:
        return Descriptor.model_validate(raw)
    except ValidationError as e:
        raise DescriptorError(f"Descriptor {path} has invalid fields: {e}", context) from e


def escape_constraint(value: Any) -> str:
    """Escape comparison operators in a version constraint.

    >>> escape_constraint(">=2.0.0 <3.0.0")
    '&gt;=2.0.0 &lt;3.0.0'
    """
    return str(value).replace(">", "&gt;").replace("<", "&lt;")


def _environment(descriptor: Descriptor) -> Dict[str, str]:
    source = descriptor.environment or {}
    return {key: escape_constraint(source[key]) for key in ENVIRONMENT_KEYS if source.get(key)}


def build_pubspec(name: str, version: str, descriptor: Descriptor) -> Pubspec:
    """Build the sanitized descriptor copy recorded for a version.

    Falsy optional fields fall back to the defaults in ``pubdeploy.constants``.
    """
    return Pubspec(
        version=version,
        name=name,
        author=descriptor.author or constants.DEFAULT_AUTHOR,
        description=descriptor.description or constants.DEFAULT_DESCRIPTION,
        homepage=descriptor.homepage or constants.DEFAULT_HOMEPAGE,
        environment=_environment(descriptor),
        dependencies=descriptor.dependencies or {},
        dev_dependencies=descriptor.dev_dependencies or {},
    )


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """Format ``now`` (default: current time) as ISO-8601 UTC with milliseconds.

    >>> utc_timestamp(datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc))
    '2024-05-01T08:30:00.000Z'
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_version_entry(
    name: str,
    version: str,
    descriptor: Descriptor,
    archive_url: str,
    now: Optional[datetime] = None,
) -> VersionEntry:
    """Build the index record for one published version."""
    pubspec = build_pubspec(name, version, descriptor)
    entry = VersionEntry(
        version=version,
        pubspec=pubspec.model_dump(mode="json"),
        archive_url=archive_url,
        published=utc_timestamp(now),
    )
    logger.debug(f"Built version entry {name}@{version} published at {entry.published}")
    return entry
