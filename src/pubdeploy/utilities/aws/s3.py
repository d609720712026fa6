"""S3 object operations.

Thin wrappers around an S3 client for the handful of calls a publishing run
makes: fetch an object, put bytes and stream a local file.

Every wrapper raises S3Error on failure, keeping the service error code when
the underlying exception is a botocore ClientError.
"""

from __future__ import annotations

import time
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError


logger = logging.getLogger(__name__)

# Error codes that mean "the object is not there".
MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


class S3Error(Exception):
    """Custom exception for S3-related errors.

    Attributes:
        error_code: Service error code (e.g. ``NoSuchKey``) when known
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code

    @property
    def is_missing_object(self) -> bool:
        return self.error_code in MISSING_OBJECT_CODES


def _error_code(error: Exception) -> Optional[str]:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None


def create_client(
    session: boto3.Session,
    region: Optional[str] = None,
    endpoint_url: Optional[str] = None,
) -> Any:
    """Create an S3 client from a boto3 session.

    Args:
        session: A boto3 session
        region: Region for the client (overrides session region)
        endpoint_url: Endpoint of an S3-compatible service

    Returns:
        Configured S3 client

    Examples:
        >>> s3_client = create_client(session)
        >>> s3_client = create_client(session, region='ap-guangzhou',
        ...                           endpoint_url='https://cos.ap-guangzhou.myqcloud.com')
    """
    kwargs: Dict[str, Any] = {}
    if region:
        kwargs["region_name"] = region
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
        # COS only serves bucket-in-hostname requests
        kwargs["config"] = Config(s3={"addressing_style": "virtual"})
    return session.client('s3', **kwargs)


def get_object(client: Any, bucket: str, key: str, max_retries: int = 0, **kwargs: Any) -> Dict[str, Any]:
    """Get an object from S3.

    Args:
        client: S3 client instance
        bucket: S3 bucket name
        key: Object key
        max_retries: Maximum number of retry attempts (default: 0)
        **kwargs: Additional parameters to pass to get_object

    Returns:
        Dict with object data and metadata

    Raises:
        S3Error: When getting object fails after retries

    Examples:
        >>> result = get_object(s3_client, 'bucket', 'shared_preferences/package.json')
        >>> content = result['data']
    """
    params = {"Bucket": bucket, "Key": key, **kwargs}

    response = None
    for attempt in range(max_retries + 1):
        try:
            response = client.get_object(**params)
            break
        except Exception as e:
            code = _error_code(e)
            if attempt == max_retries or code in MISSING_OBJECT_CODES:
                raise S3Error(f"Failed to get object '{key}' from bucket '{bucket}': {e}", code) from e

            # Exponential backoff: 1s, 2s, 4s, 8s...
            delay = 2**attempt
            logger.debug(f"S3 get_object attempt {attempt + 1} failed, retrying in {delay}s: {e}")
            time.sleep(delay)

    body = response['Body']
    try:
        data = body.read()
    except Exception as e:
        raise S3Error(f"Failed to read object '{key}' from bucket '{bucket}': {e}") from e
    finally:
        body.close()

    return {
        "data": data,
        "content_length": response.get("ContentLength"),
        "content_type": response.get("ContentType"),
        "etag": response.get("ETag"),
        "last_modified": response.get("LastModified"),
    }


def put_object(
    client: Any,
    bucket: str,
    key: str,
    data: Any,
    content_type: Optional[str] = None,
    storage_class: Optional[str] = None,
    **kwargs: Any,
) -> Dict[str, Any]:
    """Put an object to S3.

    Args:
        client: S3 client instance
        bucket: S3 bucket name
        key: Object key
        data: Object data (bytes, string or readable file object)
        content_type: Content type for the object (default: None)
        storage_class: Storage class such as ``STANDARD`` (default: None)
        **kwargs: Additional parameters to pass to put_object

    Returns:
        Dict with upload result

    Raises:
        S3Error: When putting object fails
    """
    params: Dict[str, Any] = {"Bucket": bucket, "Key": key, "Body": data, **kwargs}

    if content_type:
        params["ContentType"] = content_type
    if storage_class:
        params["StorageClass"] = storage_class

    try:
        response = client.put_object(**params)
    except Exception as e:
        raise S3Error(f"Failed to put object '{key}' to bucket '{bucket}': {e}", _error_code(e)) from e

    return {
        "success": True,
        "etag": response.get("ETag"),
        "version_id": response.get("VersionId"),
        "size": len(data) if isinstance(data, (bytes, str)) else None,
    }


def upload_file(
    client: Any,
    bucket: str,
    key: str,
    path: Path,
    content_type: Optional[str] = None,
    storage_class: Optional[str] = None,
) -> Dict[str, Any]:
    """Stream a local file to S3.

    Args:
        client: S3 client instance
        bucket: S3 bucket name
        key: Object key
        path: Local file to upload
        content_type: Content type for the object (default: None)
        storage_class: Storage class such as ``STANDARD`` (default: None)

    Returns:
        Dict with upload result, ``size`` set to the file size

    Raises:
        S3Error: When the file cannot be read or the upload fails
    """
    try:
        handle = open(path, "rb")
    except OSError as e:
        raise S3Error(f"Failed to open '{path}' for upload: {e}") from e

    with handle:
        result = put_object(client, bucket, key, handle, content_type=content_type, storage_class=storage_class)
    result["size"] = path.stat().st_size
    return result
