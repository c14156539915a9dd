"""bfs info: show the resolved storage binding."""

from __future__ import annotations

from bucketfs.cli._output import print_object
from bucketfs.cli._storage import open_fs


def info_cmd() -> None:
    """Show bucket, repository prefix and connection settings."""
    from bucketfs.cli import state

    fs = open_fs()
    try:
        data = {"storage_uri": state.storage_uri, **fs.storage_info()}
    finally:
        fs.close()
    print_object(data, json_mode=state.json_output)
