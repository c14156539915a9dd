"""bfs file commands: cat, put, rm, stat, patch, url."""

from __future__ import annotations

from typing import Any, Optional

import typer

from bucketfs.cli._output import print_object
from bucketfs.cli._storage import fail, open_fs, parse_meta
from bucketfs.errors import BucketFSError
from bucketfs.types import EntryKind, Stats


def cat_cmd(path: str = typer.Argument(..., help="File path")) -> None:
    """Write a file's content to stdout."""
    fs = open_fs()
    try:
        data = fs.read(path)
        if isinstance(data, bytes):
            typer.echo(data, nl=False)
            return
        try:
            for chunk in iter(lambda: data.read(1024 * 1024), b""):
                typer.echo(chunk, nl=False)
        finally:
            data.close()
    except BucketFSError as e:
        raise fail(e)
    finally:
        fs.close()


def put_cmd(
    path: str = typer.Argument(..., help="Destination file path"),
    src: str = typer.Argument("-", help="Local source file, or - for stdin"),
    append: bool = typer.Option(False, "--append", help="Append to existing content"),
    meta: Optional[list[str]] = typer.Option(None, "--meta", help="Custom metadata key=value"),
) -> None:
    """Upload content to a file."""
    metadata = parse_meta(meta)
    stats = Stats(metadata=metadata) if metadata else None
    fs = open_fs()
    try:
        if src == "-":
            fs.write(path, typer.get_binary_stream("stdin"), stats, append=append)
        else:
            with open(src, "rb") as f:
                fs.write(path, f, stats, append=append)
    except (BucketFSError, OSError) as e:
        raise fail(e)
    finally:
        fs.close()


def rm_cmd(path: str = typer.Argument(..., help="File path")) -> None:
    """Delete a file."""
    fs = open_fs()
    try:
        fs.rm(path)
    except BucketFSError as e:
        raise fail(e)
    finally:
        fs.close()


def stat_cmd(
    path: str = typer.Argument(..., help="Path to resolve"),
    file_only: bool = typer.Option(False, "--file", help="Only look for a file"),
    dir_only: bool = typer.Option(False, "--dir", help="Only look for a directory"),
) -> None:
    """Show whether a path is a file or directory, and its stats."""
    from bucketfs.cli import state

    if file_only and dir_only:
        raise typer.BadParameter("--file and --dir are mutually exclusive")
    kind = EntryKind.FILE if file_only else EntryKind.DIRECTORY if dir_only else None
    fs = open_fs()
    try:
        result = fs.head(path, kind)
    except BucketFSError as e:
        raise fail(e)
    finally:
        fs.close()

    data: dict[str, Any] = {
        "path": path,
        "kind": result.kind.value,
        "size": result.stats.size,
        "modified": result.stats.modified,
        "etag": result.stats.etag,
        "metadata": result.stats.metadata,
    }
    print_object(data, json_mode=state.json_output)


def patch_cmd(
    path: str = typer.Argument(..., help="Path to update"),
    meta: Optional[list[str]] = typer.Option(None, "--meta", help="Custom metadata key=value"),
    directory: bool = typer.Option(False, "--dir", help="Target the directory placeholder"),
) -> None:
    """Replace the custom metadata of a file or directory placeholder."""
    props: dict[str, Any] = dict(parse_meta(meta))
    if directory:
        props["size"] = None
    fs = open_fs()
    try:
        fs.patch(path, props)
    except BucketFSError as e:
        raise fail(e)
    finally:
        fs.close()


def url_cmd(
    path: str = typer.Argument(..., help="File path"),
    method: str = typer.Option("GET", "--method", help="GET, PUT, POST or DELETE"),
    expires: Optional[int] = typer.Option(None, "--expires", help="Lifetime in seconds"),
) -> None:
    """Print a presigned URL for a file."""
    fs = open_fs()
    try:
        typer.echo(fs.to_url(path, url_type=method, expires=expires))
    except BucketFSError as e:
        raise fail(e)
    finally:
        fs.close()
