"""AWS session management utilities.

Sessions are built from explicit credentials so that the storage target
(AWS S3 or an S3-compatible service such as Tencent COS) is fully described
by the publisher configuration.
"""

from __future__ import annotations

import logging
from typing import Optional

import boto3


logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Custom exception for session-related errors."""
    pass


def create_session(
    access_key_id: Optional[str],
    secret_access_key: Optional[str],
    region: Optional[str] = None,
) -> boto3.Session:
    """Create a boto3 session from explicit credentials.

    Args:
        access_key_id: Access key (COS SecretId)
        secret_access_key: Secret key (COS SecretKey)
        region: Region for the session

    Returns:
        Configured boto3 session

    Raises:
        SessionError: When a credential is missing or the session cannot be built

    Examples:
        >>> session = create_session(os.environ["COS_SECRET_ID"], os.environ["COS_SECRET_KEY"])
        >>> session = create_session("AKID...", "secret", region="ap-guangzhou")
    """
    if not access_key_id or not secret_access_key:
        raise SessionError(
            "No storage credentials found. Set COS_SECRET_ID and COS_SECRET_KEY "
            "in the environment or in a .env file in the working directory."
        )

    try:
        session = boto3.Session(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
        )
    except Exception as e:
        raise SessionError(f"Failed to create storage session: {e}") from e

    logger.debug(f"Created storage session for region {region}")
    return session
