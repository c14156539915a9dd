"""bfs CLI: operator console for bucket-backed filesystems."""

from __future__ import annotations

from typing import Optional

import typer

from bucketfs.cli import dirs, files, info

app = typer.Typer(
    name="bfs",
    help="bfs: browse and edit an object store bucket as a directory tree.",
    no_args_is_help=True,
)


class _State:
    """Global CLI state shared across subcommands."""

    storage_uri: str | None = None
    ensure_root: bool = False
    json_output: bool = False


state = _State()


def _version_callback(value: bool) -> None:
    if value:
        try:
            from importlib.metadata import version

            v = version("bucketfs")
        except Exception:
            v = "unknown"
        print(f"bfs {v}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    storage_uri: Optional[str] = typer.Option(
        None,
        "--storage-uri",
        envvar="BUCKETFS_STORAGE_URI",
        help="Storage URI (e.g. s3://bucket/prefix)",
    ),
    ensure_root: bool = typer.Option(
        False, "--ensure-root", help="Create the root marker object if it is missing"
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output when supported"),
    version: bool = typer.Option(
        False, "--version", help="Show version", is_eager=True, callback=_version_callback
    ),
) -> None:
    """Global options for all bfs commands."""
    from bucketfs.storage import parse_storage_target

    if storage_uri:
        try:
            parse_storage_target(storage_uri)
        except Exception as e:
            raise typer.BadParameter(str(e))

    state.storage_uri = storage_uri
    state.ensure_root = ensure_root
    state.json_output = json_output
    if ctx.invoked_subcommand is None and not version:
        print(ctx.get_help())
        raise typer.Exit()


app.command(name="info")(info.info_cmd)
app.command(name="ls")(dirs.ls_cmd)
app.command(name="mkdir")(dirs.mkdir_cmd)
app.command(name="rmdir")(dirs.rmdir_cmd)
app.command(name="stat")(files.stat_cmd)
app.command(name="cat")(files.cat_cmd)
app.command(name="put")(files.put_cmd)
app.command(name="rm")(files.rm_cmd)
app.command(name="patch")(files.patch_cmd)
app.command(name="url")(files.url_cmd)


def main() -> None:
    """Entry point for the bfs CLI."""
    app()
