"""bfs directory commands: ls, mkdir, rmdir."""

from __future__ import annotations

import typer

from bucketfs.cli._output import print_object
from bucketfs.cli._storage import fail, open_fs
from bucketfs.errors import BucketFSError


def ls_cmd(
    path: str = typer.Argument("/", help="Directory path"),
    names: bool = typer.Option(False, "--names", help="Print bare child names"),
) -> None:
    """List the children of a directory."""
    from bucketfs.cli import state

    fs = open_fs()
    try:
        children = fs.list(path, names=names)
    except BucketFSError as e:
        raise fail(e)
    finally:
        fs.close()
    print_object(children, json_mode=state.json_output)


def mkdir_cmd(path: str = typer.Argument(..., help="Directory path")) -> None:
    """Create a directory placeholder."""
    fs = open_fs()
    try:
        fs.mkdir(path)
    except BucketFSError as e:
        raise fail(e)
    finally:
        fs.close()


def rmdir_cmd(path: str = typer.Argument(..., help="Directory path")) -> None:
    """Remove a directory placeholder (children are left in place)."""
    fs = open_fs()
    try:
        fs.rmdir(path)
    except BucketFSError as e:
        raise fail(e)
    finally:
        fs.close()
