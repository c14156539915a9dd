"""Logical path helpers."""

from __future__ import annotations

from bucketfs.errors import InvalidPathError

ROOT = "/"
DELIMITER = "/"


def normalize_path(path: str | None) -> str:
    """Normalize a logical path to ``/a/b`` form; root is ``/``."""
    if path is None:
        return ROOT
    if "\x00" in path:
        raise InvalidPathError(path, "contains NUL character")
    parts: list[str] = []
    for segment in path.split(DELIMITER):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)
    return ROOT + DELIMITER.join(parts)


def is_root(path: str | None) -> bool:
    return not path or normalize_path(path) == ROOT


def child_path(parent: str, name: str) -> str:
    """Path of the entry ``name`` directly under the normalized ``parent``.

    ``name`` is a store key segment and is kept verbatim.
    """
    return parent.rstrip(DELIMITER) + DELIMITER + name


def basename(path: str) -> str:
    """Last segment of an already normalized path; empty for the root."""
    return path.rstrip(DELIMITER).rsplit(DELIMITER, 1)[-1]
