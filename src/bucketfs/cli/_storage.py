"""CLI helpers for filesystem construction and error reporting."""

from __future__ import annotations

import typer

from bucketfs.cli import _exitcodes as ec
from bucketfs.cli._output import print_error
from bucketfs.config import config_from_env
from bucketfs.errors import ErrorKind, FileSystemError
from bucketfs.filesystem import BucketFileSystem
from bucketfs.storage import open_filesystem


def open_fs() -> BucketFileSystem:
    """Open the filesystem selected by the global CLI options."""
    from bucketfs.cli import state

    if not state.storage_uri:
        print_error("No storage URI given (use --storage-uri or BUCKETFS_STORAGE_URI)")
        raise typer.Exit(ec.USAGE_ERROR)
    try:
        return open_filesystem(
            state.storage_uri,
            config=config_from_env(),
            ensure_root=state.ensure_root,
        )
    except Exception as e:
        print_error(f"Cannot open storage backend: {e}")
        raise typer.Exit(ec.USAGE_ERROR)


def fail(e: Exception) -> typer.Exit:
    """Report ``e`` and return the matching exit to raise."""
    print_error(str(e))
    if isinstance(e, FileSystemError) and e.kind is ErrorKind.NOT_FOUND:
        return typer.Exit(ec.NOT_FOUND)
    return typer.Exit(ec.EXECUTION_FAILURE)


def parse_meta(pairs: list[str] | None) -> dict[str, str]:
    """Parse repeated ``key=value`` options."""
    meta: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{pair}'")
        meta[key] = value
    return meta
