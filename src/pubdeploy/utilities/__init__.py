"""Reusable utilities for publishing runs."""

from __future__ import annotations

from .aws import (
    create_session,
    SessionError,
    create_client,
    get_object,
    put_object,
    upload_file,
    S3Error,
)

__all__ = [
    "create_session",
    "SessionError",
    "create_client",
    "get_object",
    "put_object",
    "upload_file",
    "S3Error",
]
