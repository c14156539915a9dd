"""Configuration for bucketfs."""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class BucketFSConfig:
    """Connection and behavior settings for a bucket-backed filesystem."""

    s3_region: str | None = None
    s3_endpoint_url: str | None = None
    s3_request_timeout_s: float = 10.0
    s3_max_attempts: int = 5
    stream_io: bool = True
    directory_markers: bool = True
    default_url_expires: int = 86400
    head_max_workers: int = 3


def _env_flag(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    return default


def config_from_env() -> BucketFSConfig:
    """Build config from ``BUCKETFS_*`` environment variables."""
    endpoint = os.getenv("BUCKETFS_S3_ENDPOINT_URL") or os.getenv("BUCKETFS_S3_ENDPOINT")
    region = os.getenv("BUCKETFS_S3_REGION")
    return BucketFSConfig(
        s3_region=region or None,
        s3_endpoint_url=endpoint or None,
        stream_io=_env_flag("BUCKETFS_STREAM_IO", True),
        directory_markers=_env_flag("BUCKETFS_DIRECTORY_MARKERS", True),
    )
