"""Directory handle: prefix listing and placeholder objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bucketfs.base import AbstractDirectory
from bucketfs.paths import DELIMITER, child_path

if TYPE_CHECKING:
    from bucketfs.filesystem import BucketFileSystem


class BucketDirectory(AbstractDirectory):
    def __init__(self, bfs: BucketFileSystem, path: str) -> None:
        super().__init__(bfs, path)
        self.bfs = bfs

    def _list(self) -> list[str]:
        bfs = self.bfs
        client = bfs.connect()
        prefix = bfs.key_for(self.path, True)
        paths: list[str] = []
        try:
            paginator = client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=bfs.bucket, Prefix=prefix, Delimiter=DELIMITER):
                for entry in page.get("CommonPrefixes") or []:
                    dir_key = entry.get("Prefix", "")
                    if dir_key == prefix:
                        continue
                    name = dir_key[len(prefix) :].rstrip(DELIMITER)
                    if name:
                        paths.append(child_path(self.path, name))
                for obj in page.get("Contents") or []:
                    key = obj.get("Key", "")
                    if key == prefix:
                        continue
                    name = key[len(prefix) :]
                    if name:
                        paths.append(child_path(self.path, name))
        except Exception as e:
            raise bfs._error(self.path, e, False) from e
        return paths

    def _mkcol(self) -> None:
        bfs = self.bfs
        key = bfs.key_for(self.path, True)
        if not bfs.config.directory_markers or not key:
            return
        client = bfs.connect()
        try:
            client.put_object(Bucket=bfs.bucket, Key=key, Body=b"")
        except Exception as e:
            raise bfs._error(self.path, e, True) from e

    def _rmdir(self) -> None:
        bfs = self.bfs
        key = bfs.key_for(self.path, True)
        if not bfs.config.directory_markers or not key:
            return
        client = bfs.connect()
        try:
            client.delete_object(Bucket=bfs.bucket, Key=key)
        except Exception as e:
            raise bfs._error(self.path, e, True) from e
