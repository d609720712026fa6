"""Helper utilities for tests."""

import io
from typing import Any, Dict, Optional, Tuple

from botocore.exceptions import ClientError


def client_error(code: str, operation: str = "GetObject") -> ClientError:
    """Build a botocore ClientError carrying ``code``."""
    return ClientError({"Error": {"Code": code, "Message": f"{code} (test)"}}, operation)


class InMemoryS3Client:
    """Minimal stand-in for an S3 client keeping objects in a dict.

    Set ``fail_puts_for`` to a set of keys whose uploads should fail.
    """

    def __init__(self) -> None:
        self.objects: Dict[Tuple[str, str], bytes] = {}
        self.put_calls: list[Dict[str, Any]] = []
        self.fail_puts_for: set[str] = set()
        self.get_error: Optional[Exception] = None

    def put_object(self, **params: Any) -> Dict[str, Any]:
        key = params["Key"]
        if key in self.fail_puts_for:
            raise client_error("AccessDenied", "PutObject")
        body = params["Body"]
        data = body.read() if hasattr(body, "read") else body
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.objects[(params["Bucket"], key)] = data
        self.put_calls.append({**params, "Body": data})
        return {"ETag": '"etag-%d"' % len(self.put_calls)}

    def get_object(self, **params: Any) -> Dict[str, Any]:
        if self.get_error is not None:
            raise self.get_error
        try:
            data = self.objects[(params["Bucket"], params["Key"])]
        except KeyError:
            raise client_error("NoSuchKey")
        return {"Body": io.BytesIO(data), "ContentLength": len(data), "ContentType": "application/json"}

    def read(self, bucket: str, key: str) -> bytes:
        return self.objects[(bucket, key)]
