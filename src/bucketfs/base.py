"""Filesystem abstraction contract implemented by storage adapters.

The public methods normalize logical paths and delegate to underscore hooks
that each adapter provides. Recursive orchestration is left to callers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from bucketfs.errors import NotFoundError
from bucketfs.paths import basename, normalize_path
from bucketfs.streams import Data
from bucketfs.types import EntryKind, HeadResult, Stats, URLOptions, WriteOptions


class AbstractFileSystem(ABC):
    """A hierarchical filesystem rooted at ``repository``."""

    def __init__(self, repository: str) -> None:
        self.repository = repository

    # --- Adapter hooks ---

    @abstractmethod
    def _get_file(self, path: str) -> AbstractFile: ...

    @abstractmethod
    def _get_directory(self, path: str) -> AbstractDirectory: ...

    @abstractmethod
    def _head(self, path: str, kind: EntryKind | None = None) -> HeadResult: ...

    @abstractmethod
    def _patch(self, path: str, props: Mapping[str, Any]) -> None: ...

    @abstractmethod
    def _to_url(self, path: str, options: URLOptions) -> str: ...

    def supports_directory(self) -> bool:
        return True

    # --- Public API ---

    def get_file(self, path: str) -> AbstractFile:
        return self._get_file(normalize_path(path))

    def get_directory(self, path: str) -> AbstractDirectory:
        return self._get_directory(normalize_path(path))

    def head(self, path: str, kind: EntryKind | None = None) -> HeadResult:
        return self._head(normalize_path(path), kind)

    def stat(self, path: str, kind: EntryKind | None = None) -> Stats:
        return self.head(path, kind).stats

    def exists(self, path: str, kind: EntryKind | None = None) -> bool:
        try:
            self.head(path, kind)
        except NotFoundError:
            return False
        return True

    def patch(self, path: str, props: Stats | Mapping[str, Any]) -> None:
        if isinstance(props, Stats):
            props = props.to_props()
        self._patch(normalize_path(path), props)

    def to_url(self, path: str, url_type: str = "GET", expires: int | None = None) -> str:
        return self._to_url(normalize_path(path), URLOptions(url_type=url_type, expires=expires))

    def list(self, path: str, *, names: bool = False) -> list[str]:
        return self.get_directory(path).list(names=names)

    def read(self, path: str) -> Any:
        return self.get_file(path).read()

    def write(
        self,
        path: str,
        data: Data,
        stats: Stats | None = None,
        *,
        append: bool = False,
    ) -> None:
        self.get_file(path).write(data, stats, WriteOptions(append=append))

    def rm(self, path: str) -> None:
        self.get_file(path).rm()

    def mkdir(self, path: str) -> None:
        self.get_directory(path).mkdir()

    def rmdir(self, path: str) -> None:
        self.get_directory(path).rmdir()


class AbstractEntry:
    def __init__(self, fs: AbstractFileSystem, path: str) -> None:
        self.fs = fs
        self.path = normalize_path(path)

    @property
    def name(self) -> str:
        return basename(self.path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.fs.repository!r}, {self.path!r})"


class AbstractFile(AbstractEntry, ABC):
    @abstractmethod
    def _do_read(self) -> Any: ...

    @abstractmethod
    def _do_write(self, data: Data, stats: Stats | None, options: WriteOptions) -> None: ...

    @abstractmethod
    def _do_rm(self) -> None: ...

    def supports_append(self) -> bool:
        return True

    def supports_range_read(self) -> bool:
        return True

    def supports_range_write(self) -> bool:
        return True

    def read(self) -> Any:
        return self._do_read()

    def write(
        self,
        data: Data,
        stats: Stats | None = None,
        options: WriteOptions | None = None,
    ) -> None:
        self._do_write(data, stats, options or WriteOptions())

    def rm(self) -> None:
        self._do_rm()


class AbstractDirectory(AbstractEntry, ABC):
    @abstractmethod
    def _list(self) -> list[str]: ...

    @abstractmethod
    def _mkcol(self) -> None: ...

    @abstractmethod
    def _rmdir(self) -> None: ...

    def list(self, *, names: bool = False) -> list[str]:
        paths = self._list()
        if names:
            return [basename(p) for p in paths]
        return paths

    def mkdir(self) -> None:
        self._mkcol()

    def rmdir(self) -> None:
        self._rmdir()
