"""Pydantic models for package descriptors and the remote package index.

The index document stored next to the archives has this shape::

    {
        "name": "shared_preferences",
        "latest": {...VersionEntry...},
        "versions": [{"version": ..., "pubspec": ..., "archive_url": ..., "published": ...}]
    }
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Descriptor(BaseModel):
    """Fields read from a package's ``pubspec.yaml``.

    Only the keys the index records are declared; anything else in the file
    is kept as an extra field and otherwise ignored.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    name: Optional[Any] = None
    version: Optional[Any] = None
    author: Optional[str] = None
    description: Optional[str] = None
    homepage: Optional[str] = None
    environment: Optional[Dict[str, Any]] = None
    dependencies: Optional[Dict[str, Any]] = None
    dev_dependencies: Optional[Dict[str, Any]] = None


class Pubspec(BaseModel):
    """Sanitized descriptor copy stored with each published version."""

    model_config = ConfigDict(frozen=True)

    version: str
    name: str
    author: str
    description: str
    homepage: str
    environment: Dict[str, str] = Field(default_factory=dict)
    dependencies: Dict[str, Any] = Field(default_factory=dict)
    dev_dependencies: Dict[str, Any] = Field(default_factory=dict)


class VersionEntry(BaseModel):
    """One published version's record within the index."""

    model_config = ConfigDict(extra="allow", frozen=True)

    version: str
    pubspec: Dict[str, Any]
    archive_url: str
    published: str


class PackageIndex(BaseModel):
    """Remote document tracking all published versions of a package.

    Existing ``latest`` and ``versions`` items are kept as the raw JSON values
    they were read as, so records written by other tools or older releases
    survive a merge even when they lack fields a new entry carries. Unknown
    top-level keys survive too.
    """

    model_config = ConfigDict(extra="allow")

    name: Optional[Any] = None
    latest: Optional[Any] = None
    versions: List[Any] = Field(default_factory=list)

    @field_validator("versions", mode="before")
    @classmethod
    def _versions_as_list(cls, value: Any) -> List[Any]:
        return value if isinstance(value, list) else []
