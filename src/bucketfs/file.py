"""File handle: whole-object reads, writes and deletes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from bucketfs.base import AbstractFile
from bucketfs.errors import is_not_found
from bucketfs.streams import ConcatReader, Data, is_buffer, to_bytes, to_reader
from bucketfs.types import Stats, WriteOptions

if TYPE_CHECKING:
    from bucketfs.filesystem import BucketFileSystem

logger = logging.getLogger(__name__)


class BucketFile(AbstractFile):
    def __init__(self, bfs: BucketFileSystem, path: str) -> None:
        super().__init__(bfs, path)
        self.bfs = bfs

    def _do_read(self) -> Any:
        """Open the object body.

        Returns the store's streaming body when ``stream_io`` is enabled, the
        full content as ``bytes`` otherwise. Callers own the returned stream.
        """
        bfs = self.bfs
        client = bfs.connect()
        key = bfs.key_for(self.path, False)
        try:
            resp = client.get_object(Bucket=bfs.bucket, Key=key)
            body = resp["Body"]
            if bfs.config.stream_io:
                return body
            try:
                return body.read()
            finally:
                body.close()
        except Exception as e:
            raise bfs._error(self.path, e, False) from e

    def _do_write(self, data: Data, stats: Stats | None, options: WriteOptions) -> None:
        bfs = self.bfs
        client = bfs.connect()
        key = bfs.key_for(self.path, False)
        streaming = bfs.config.stream_io

        extra: dict[str, Any] = {}
        if stats is not None:
            metadata = bfs.build_custom_metadata(stats)
            if metadata:
                extra["Metadata"] = metadata

        merged: ConcatReader | None = None
        try:
            if options.append:
                data = self._with_existing(client, key, data, streaming)
                if isinstance(data, ConcatReader):
                    merged = data
            if streaming and not is_buffer(data):
                logger.debug("Streaming upload to s3://%s/%s", bfs.bucket, key)
                client.upload_fileobj(to_reader(data), bfs.bucket, key, ExtraArgs=extra or None)
            else:
                client.put_object(Bucket=bfs.bucket, Key=key, Body=to_bytes(data), **extra)
        except Exception as e:
            raise bfs._error(self.path, e, True) from e
        finally:
            if merged is not None:
                merged.close()

    def _with_existing(self, client: Any, key: str, data: Data, streaming: bool) -> Data:
        """Prefix ``data`` with the current object content, if there is any."""
        try:
            resp = client.get_object(Bucket=self.bfs.bucket, Key=key)
        except Exception as e:
            if is_not_found(e):
                return data
            raise
        body = resp["Body"]
        if streaming:
            return ConcatReader(body, to_reader(data))
        try:
            existing = body.read()
        finally:
            body.close()
        return existing + to_bytes(data)

    def _do_rm(self) -> None:
        bfs = self.bfs
        client = bfs.connect()
        key = bfs.key_for(self.path, False)
        try:
            # S3 deletes succeed on missing keys; head first so absence is reported.
            client.head_object(Bucket=bfs.bucket, Key=key)
            client.delete_object(Bucket=bfs.bucket, Key=key)
        except Exception as e:
            raise bfs._error(self.path, e, True) from e

    def supports_append(self) -> bool:
        return False

    def supports_range_read(self) -> bool:
        return False

    def supports_range_write(self) -> bool:
        return False
