"""bucketfs: a hierarchical filesystem emulated on a flat object store."""

__version__ = "0.1.0"

from bucketfs.base import AbstractDirectory, AbstractFile, AbstractFileSystem
from bucketfs.config import BucketFSConfig, config_from_env
from bucketfs.directory import BucketDirectory
from bucketfs.errors import (
    BucketFSError,
    ConfigError,
    ErrorKind,
    FileSystemError,
    InvalidPathError,
    NoModificationAllowedError,
    NotFoundError,
    NotReadableError,
    UnsupportedOperationError,
    classify_error,
)
from bucketfs.file import BucketFile
from bucketfs.filesystem import BucketFileSystem
from bucketfs.storage import StorageTarget, open_filesystem, parse_storage_target
from bucketfs.types import EntryKind, HeadResult, Stats, URLOptions, WriteOptions

__all__ = [
    "__version__",
    "AbstractFileSystem",
    "AbstractFile",
    "AbstractDirectory",
    "BucketFileSystem",
    "BucketFile",
    "BucketDirectory",
    "BucketFSConfig",
    "config_from_env",
    "StorageTarget",
    "parse_storage_target",
    "open_filesystem",
    "EntryKind",
    "HeadResult",
    "Stats",
    "URLOptions",
    "WriteOptions",
    "BucketFSError",
    "FileSystemError",
    "ErrorKind",
    "NotFoundError",
    "NotReadableError",
    "NoModificationAllowedError",
    "UnsupportedOperationError",
    "InvalidPathError",
    "ConfigError",
    "classify_error",
]
