"""Pydantic models for publishing step results.

Uploads report success or failure explicitly so callers can react to a
failed write instead of mistaking it for success.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional, Union

from pydantic import BaseModel


# ============================================================================
# Base Response Models
# ============================================================================


class SuccessResponse(BaseModel):
    """Base model for successful operations."""

    success: Literal[True] = True


class ErrorResponse(BaseModel):
    """Base model for error responses."""

    success: Literal[False] = False
    error: str
    cause: Optional[str] = None


# ============================================================================
# Upload Results
# ============================================================================


class UploadSuccess(SuccessResponse):
    """An object was stored."""

    bucket: str
    key: str
    url: Optional[str] = None
    etag: Optional[str] = None
    size: Optional[int] = None


class UploadFailure(ErrorResponse):
    """An object could not be stored."""

    bucket: str
    key: str


UploadResult = Union[UploadSuccess, UploadFailure]


# ============================================================================
# Deploy Result
# ============================================================================


class DeployResult(SuccessResponse):
    """Summary of a completed publishing run."""

    package: str
    version: str
    archive_path: Path
    archive_url: str
    index_key: str
    latest_updated: bool
    version_count: int
