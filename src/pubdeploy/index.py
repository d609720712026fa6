"""Parse, merge and serialize the remote package index.

Reading is lenient: a document that cannot be decoded is replaced by an empty
one, so the first publish of a package bootstraps its index. Each fallback is
logged as a warning. A decodable JSON object is always kept, including version
records that do not match the shape this tool writes.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Union

from . import constants
from .models import PackageIndex, VersionEntry

logger = logging.getLogger(__name__)


def parse_index(raw: Optional[Union[bytes, str]], source: str = "index") -> PackageIndex:
    """Parse an index document, falling back to an empty index.

    Args:
        raw: Document contents, or None when there is no document
        source: Description of where the document came from, for log messages

    Returns:
        The parsed index, or an empty PackageIndex
    """
    if raw is None:
        return PackageIndex()

    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning(f"Ignoring {source}: not UTF-8 ({e})")
            return PackageIndex()

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring {source}: malformed JSON ({e})")
        return PackageIndex()

    if not isinstance(document, dict):
        logger.warning(f"Ignoring {source}: expected a JSON object, got {type(document).__name__}")
        return PackageIndex()

    versions = document.get("versions")
    if versions is not None and not isinstance(versions, list):
        logger.warning(f"Resetting versions of {source}: expected a list, got {type(versions).__name__}")

    return PackageIndex.model_validate(document)


def merge_version(
    index: PackageIndex,
    entry: VersionEntry,
    name: str,
    development_version: str = constants.DEVELOPMENT_VERSION,
) -> PackageIndex:
    """Record ``entry`` in ``index`` and return the index.

    - ``name`` is always set.
    - ``latest`` points at ``entry`` unless it is the development version.
    - Records with the same version are replaced in place, otherwise the
      entry is appended. Other records are left exactly as they were.
    """
    record = entry.model_dump(mode="json")

    index.name = name
    if entry.version != development_version:
        index.latest = record

    replaced = False
    for position, existing in enumerate(index.versions):
        if isinstance(existing, dict) and existing.get("version") == entry.version:
            index.versions[position] = record
            replaced = True
    if not replaced:
        index.versions.append(record)

    logger.debug(
        f"Merged {name}@{entry.version} ({'replaced' if replaced else 'appended'}, "
        f"{len(index.versions)} versions)"
    )
    return index


def index_document(index: PackageIndex) -> Dict[str, Any]:
    """JSON-compatible dict of ``index``; ``latest`` is left out when unset."""
    document = index.model_dump(mode="json")
    if document.get("latest") is None:
        document.pop("latest", None)
    return document


def dump_index(index: PackageIndex) -> str:
    """Serialize ``index`` as compact JSON."""
    return json.dumps(index_document(index), separators=(",", ":"), ensure_ascii=False)
