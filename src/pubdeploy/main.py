#!/usr/bin/env python3
"""Command-line entry point for publishing a package version."""

import argparse
import logging
import os
from typing import List, Optional

from dotenv import load_dotenv

from .config import ConfigurationError, PublisherConfig
from .exceptions import PublisherError
from .publisher import Publisher
from .utilities.aws import SessionError

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL (default INFO)."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pubdeploy",
        description="Archive a Dart package, upload it to object storage and update its version index",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Credentials are read from COS_SECRET_ID and COS_SECRET_KEY.\n"
            "Every option can also be set through its PUBDEPLOY_* environment variable."
        ),
    )
    parser.add_argument("name", nargs="?", help="Package name (default: shared_preferences)")
    parser.add_argument("--version", dest="version", help="Version to publish (default: 1.0.0)")
    parser.add_argument("--bucket", help="Target bucket")
    parser.add_argument("--region", help="Bucket region")
    parser.add_argument("--endpoint-url", help="S3-compatible endpoint (default: COS endpoint for the region)")
    parser.add_argument("--public-base-url", help="Base URL archives are served from")
    parser.add_argument("--package-dir", help="Package directory to archive (default: ..)")
    parser.add_argument("--staging-dir", help="Directory for the archive and index copy (default: system temp dir)")
    parser.add_argument(
        "--development-version",
        help="Version tag that never becomes latest (default: 0.0.1-master)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Publish one package version. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    # Loads from .env in current working directory
    load_dotenv()
    configure_logging()

    try:
        config = PublisherConfig.with_defaults(
            package_name=args.name,
            version=args.version,
            bucket=args.bucket,
            region=args.region,
            endpoint_url=args.endpoint_url,
            public_base_url=args.public_base_url,
            package_dir=args.package_dir,
            staging_dir=args.staging_dir,
            development_version=args.development_version,
        )
        config.validate_or_raise()
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    logger.debug(f"Configuration: {config.to_dict()}")

    try:
        result = Publisher(config).deploy()
    except (PublisherError, SessionError) as e:
        logger.error(f"Publishing {config.package_name}@{config.version} failed: {e}")
        return 1

    print(result.archive_url)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
