"""Default values for publishing runs.

Every value here is only a default: ``PublisherConfig`` takes explicit values
from the command line or environment first.
"""

DEFAULT_PACKAGE_NAME = "shared_preferences"
DEFAULT_VERSION = "1.0.0"

# Versions published under this tag never become ``latest`` in the index.
DEVELOPMENT_VERSION = "0.0.1-master"

DEFAULT_BUCKET = "mpflutter-dist-1253771526"
DEFAULT_REGION = "ap-guangzhou"
ENDPOINT_URL_TEMPLATE = "https://cos.{region}.myqcloud.com"
DEFAULT_PUBLIC_BASE_URL = "https://dist.mpflutter.com"
STORAGE_CLASS = "STANDARD"

DEFAULT_PACKAGE_DIR = ".."
DESCRIPTOR_FILENAME = "pubspec.yaml"
INDEX_FILENAME = "package.json"

# Credentials are read from these variables at startup.
SECRET_ID_ENV = "COS_SECRET_ID"
SECRET_KEY_ENV = "COS_SECRET_KEY"

DEFAULT_AUTHOR = "MPFlutter"
DEFAULT_DESCRIPTION = "/"
DEFAULT_HOMEPAGE = "/"


def archive_key(name: str, version: str) -> str:
    """Object key of a version archive."""
    return f"{name}/versions/{version}.tar.gz"


def index_key(name: str) -> str:
    """Object key of a package index document."""
    return f"{name}/{INDEX_FILENAME}"
