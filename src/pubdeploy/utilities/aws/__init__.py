"""Object storage utilities.

- Session management from explicit credentials
- S3 object operations against AWS or S3-compatible endpoints
"""

from __future__ import annotations

from .session import (
    create_session,
    SessionError,
)
from .s3 import (
    create_client,
    get_object,
    put_object,
    upload_file,
    S3Error,
)

__all__ = [
    # Session management
    "create_session",
    "SessionError",
    # S3 operations
    "create_client",
    "get_object",
    "put_object",
    "upload_file",
    "S3Error",
]
