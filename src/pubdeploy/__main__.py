"""Run a publishing run with ``python -m pubdeploy``.

Environment variables:

- COS_SECRET_ID / COS_SECRET_KEY: storage credentials (required)
- PUBDEPLOY_*: overrides for package, version, bucket, region and paths
- LOG_LEVEL: Logging level (default: 'INFO')

Usage:
    python -m pubdeploy shared_preferences --version 1.0.1
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
