"""S3-backed filesystem: key mapping, head resolution, metadata and URLs."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Any

import boto3
from botocore.config import Config as BotoConfig

from bucketfs.base import AbstractFileSystem
from bucketfs.config import BucketFSConfig
from bucketfs.directory import BucketDirectory
from bucketfs.errors import (
    ConfigError,
    ErrorKind,
    FileSystemError,
    NotFoundError,
    classify_error,
    create_error,
    is_not_found,
)
from bucketfs.file import BucketFile
from bucketfs.paths import DELIMITER, ROOT, is_root, normalize_path
from bucketfs.types import (
    RESERVED_PROPS,
    EntryKind,
    HeadResult,
    Stats,
    URLOptions,
    to_epoch_ms,
)

logger = logging.getLogger(__name__)

_URL_METHODS = {
    "GET": "get_object",
    "READ": "get_object",
    "PUT": "put_object",
    "POST": "put_object",
    "WRITE": "put_object",
    "DELETE": "delete_object",
}

# Probe names in resolution priority order.
_FILE_PROBE = "file"
_MARKER_PROBE = "marker"
_LISTING_PROBE = "listing"
_PROBE_ORDER = (_FILE_PROBE, _MARKER_PROBE, _LISTING_PROBE)


class BucketFileSystem(AbstractFileSystem):
    """A directory tree emulated on top of one bucket and key prefix."""

    def __init__(
        self,
        bucket: str,
        repository: str,
        config: BucketFSConfig | None = None,
        *,
        client: Any = None,
        ensure_root: bool = False,
    ) -> None:
        bucket = (bucket or "").strip()
        if not bucket:
            raise ConfigError("init", "bucket name is required")
        super().__init__((repository or "").strip().strip("/"))
        self.bucket = bucket
        self.config = config or BucketFSConfig()
        self.ensure_root = ensure_root

        self._injected_client = client
        self._connect_lock = threading.Lock()
        self._connect_future: Future[Any] | None = None

    # --- Connection ---

    def connect(self) -> Any:
        """Return the S3 client, creating it (and the root marker) on first use."""
        with self._connect_lock:
            future = self._connect_future
            owner = future is None
            if future is None:
                future = Future()
                self._connect_future = future
        if not owner:
            return future.result()

        try:
            client = self._injected_client
            if client is None:
                client = self._build_client()
            if self.ensure_root:
                self._ensure_root_marker(client)
        except BaseException as e:
            with self._connect_lock:
                self._connect_future = None
            future.set_exception(e)
            raise
        future.set_result(client)
        return client

    def _build_client(self) -> Any:
        cfg = self.config
        logger.debug("Creating S3 client for bucket %s", self.bucket)
        session = boto3.Session(region_name=cfg.s3_region)
        return session.client(
            "s3",
            region_name=cfg.s3_region,
            endpoint_url=cfg.s3_endpoint_url,
            config=BotoConfig(
                connect_timeout=cfg.s3_request_timeout_s,
                read_timeout=cfg.s3_request_timeout_s,
                retries={"max_attempts": cfg.s3_max_attempts, "mode": "standard"},
            ),
        )

    def _ensure_root_marker(self, client: Any) -> None:
        key = self.key_for(ROOT, True)
        if not key:
            return
        try:
            client.head_object(Bucket=self.bucket, Key=key)
            return
        except Exception as e:
            if not is_not_found(e):
                raise self._error(ROOT, e, False) from e
        logger.warning("Root marker s3://%s/%s missing; creating it", self.bucket, key)
        try:
            client.put_object(Bucket=self.bucket, Key=key, Body=b"")
        except Exception as e:
            raise self._error(ROOT, e, True) from e

    def close(self) -> None:
        with self._connect_lock:
            future = self._connect_future
            self._connect_future = None
        if future is None or self._injected_client is not None:
            return
        if future.done() and future.exception() is None:
            close = getattr(future.result(), "close", None)
            if close is not None:
                close()

    def storage_info(self) -> dict[str, Any]:
        return {
            "backend": "s3",
            "bucket": self.bucket,
            "repository": self.repository,
            "endpoint_url": self.config.s3_endpoint_url,
            "region": self.config.s3_region,
            "stream_io": self.config.stream_io,
            "directory_markers": self.config.directory_markers,
        }

    # --- Key/error helpers ---

    def key_for(self, path: str, is_directory: bool) -> str:
        """Map a logical path to its store key."""
        if is_root(path):
            key = self.repository
        else:
            rel = normalize_path(path).lstrip("/")
            key = f"{self.repository}{DELIMITER}{rel}" if self.repository else rel
        if is_directory and key and not key.endswith(DELIMITER):
            key += DELIMITER
        return key

    def _error(self, path: str, e: BaseException, write: bool) -> FileSystemError:
        return create_error(
            classify_error(e, write),
            repository=self.repository,
            path=path,
            cause=e,
        )

    def build_custom_metadata(self, props: Stats | Mapping[str, Any]) -> dict[str, str]:
        """Custom attributes of ``props`` as a store metadata map, minus reserved names."""
        if isinstance(props, Stats):
            props = props.to_props()
        metadata: dict[str, str] = {}
        for key, value in props.items():
            if key in RESERVED_PROPS or value is None:
                continue
            metadata[str(key)] = str(value)
        return metadata

    # --- Handles ---

    def _get_file(self, path: str) -> BucketFile:
        return BucketFile(self, path)

    def _get_directory(self, path: str) -> BucketDirectory:
        return BucketDirectory(self, path)

    def supports_directory(self) -> bool:
        return False

    # --- Head ---

    def _head(self, path: str, kind: EntryKind | None = None) -> HeadResult:
        client = self.connect()
        file_key = self.key_for(path, False)
        dir_key = self.key_for(path, True)

        probes: dict[str, Callable[[], Any]] = {}
        if kind is not EntryKind.DIRECTORY and not is_root(path):
            probes[_FILE_PROBE] = lambda: client.head_object(Bucket=self.bucket, Key=file_key)
        if kind is not EntryKind.FILE:
            if dir_key:
                probes[_MARKER_PROBE] = lambda: client.head_object(Bucket=self.bucket, Key=dir_key)
            probes[_LISTING_PROBE] = lambda: client.list_objects_v2(
                Bucket=self.bucket, Prefix=dir_key, MaxKeys=1
            )
        if not probes:
            raise NotFoundError(self.repository, path, message="root is not a file")

        workers = max(1, min(len(probes), self.config.head_max_workers))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="bucketfs-head") as pool:
            futures = {name: pool.submit(fn) for name, fn in probes.items()}
            wait(futures.values(), return_when=ALL_COMPLETED)

        failures: list[BaseException] = []
        for name in _PROBE_ORDER:
            future = futures.get(name)
            if future is None:
                continue
            err = future.exception()
            if err is None:
                resp = future.result()
                if name == _FILE_PROBE:
                    logger.debug("head %s resolved as file", path)
                    return HeadResult(EntryKind.FILE, self._stats_from_head(resp, is_file=True))
                if name == _MARKER_PROBE:
                    logger.debug("head %s resolved as directory marker", path)
                    return HeadResult(
                        EntryKind.DIRECTORY, self._stats_from_head(resp, is_file=False)
                    )
                if _listing_count(resp) > 0:
                    logger.debug("head %s resolved as implicit directory", path)
                    return HeadResult(EntryKind.DIRECTORY, Stats())
                err = NotFoundError(self.repository, path, message="no objects under prefix")
            failures.append(err)

        first = failures[0]
        raise self._error(path, first, False) from first

    def _stats_from_head(self, resp: Mapping[str, Any], *, is_file: bool) -> Stats:
        metadata = {
            str(k): str(v)
            for k, v in (resp.get("Metadata") or {}).items()
            if k not in RESERVED_PROPS
        }
        size = resp.get("ContentLength")
        etag = resp.get("ETag")
        return Stats(
            size=int(size or 0) if is_file else None,
            modified=to_epoch_ms(resp.get("LastModified")),
            etag=etag if isinstance(etag, str) and etag else None,
            metadata=metadata,
        )

    # --- Metadata patch ---

    def _patch(self, path: str, props: Mapping[str, Any]) -> None:
        is_directory = "size" in props and props["size"] is None
        client = self.connect()
        key = self.key_for(path, is_directory)
        try:
            current = client.head_object(Bucket=self.bucket, Key=key)
            kwargs: dict[str, Any] = {
                "Bucket": self.bucket,
                "Key": key,
                "CopySource": {"Bucket": self.bucket, "Key": key},
                "Metadata": self.build_custom_metadata(props),
                "MetadataDirective": "REPLACE",
            }
            content_type = current.get("ContentType")
            if content_type:
                kwargs["ContentType"] = content_type
            client.copy_object(**kwargs)
        except Exception as e:
            raise self._error(path, e, True) from e

    # --- Signed URLs ---

    def _to_url(self, path: str, options: URLOptions) -> str:
        url_type = (options.url_type or "GET").upper()
        method = _URL_METHODS.get(url_type)
        if method is None:
            raise create_error(
                ErrorKind.UNSUPPORTED_OPERATION,
                repository=self.repository,
                path=path,
                message=f'"{options.url_type}" is not supported',
            )
        expires = options.expires
        if expires is None:
            expires = self.config.default_url_expires

        client = self.connect()
        try:
            return client.generate_presigned_url(
                ClientMethod=method,
                Params={"Bucket": self.bucket, "Key": self.key_for(path, False)},
                ExpiresIn=max(1, int(expires)),
            )
        except Exception as e:
            raise self._error(path, e, False) from e


def _listing_count(resp: Mapping[str, Any]) -> int:
    count = resp.get("KeyCount")
    if isinstance(count, int):
        return count
    return len(resp.get("Contents") or []) + len(resp.get("CommonPrefixes") or [])
