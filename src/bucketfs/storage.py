"""Storage URI parsing and filesystem construction."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from bucketfs.config import BucketFSConfig
from bucketfs.errors import ConfigError
from bucketfs.filesystem import BucketFileSystem


@dataclass(frozen=True)
class StorageTarget:
    """Resolved bucket and repository prefix from an ``s3://`` URI."""

    uri: str
    bucket: str
    prefix: str = ""


def parse_storage_target(storage_uri: str) -> StorageTarget:
    """Parse ``s3://bucket/prefix`` into a storage target."""
    if not storage_uri:
        raise ConfigError("parse_storage_uri", "storage URI is required")
    parsed = urlparse(storage_uri)
    if parsed.scheme != "s3":
        raise ConfigError(
            "parse_storage_uri",
            f"Unsupported storage URI scheme '{parsed.scheme}': {storage_uri}",
        )
    bucket = parsed.netloc
    if not bucket:
        raise ConfigError("parse_storage_uri", f"Invalid s3 URI: {storage_uri}")
    prefix = parsed.path.lstrip("/").rstrip("/")
    return StorageTarget(uri=storage_uri, bucket=bucket, prefix=prefix)


def open_filesystem(
    storage_uri: str,
    *,
    config: BucketFSConfig | None = None,
    ensure_root: bool = False,
) -> BucketFileSystem:
    """Open a bucket-backed filesystem from a storage URI."""
    target = parse_storage_target(storage_uri)
    return BucketFileSystem(
        target.bucket,
        target.prefix,
        config=config,
        ensure_root=ensure_root,
    )
