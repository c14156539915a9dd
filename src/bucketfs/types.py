"""Value types shared by the filesystem abstraction and the bucket adapter."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

RESERVED_PROPS = frozenset({"size", "etag", "created", "modified"})


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass
class Stats:
    """Stat record of a node.

    ``size`` is only set for files. Timestamps are epoch milliseconds.
    """

    size: int | None = None
    created: int | None = None
    modified: int | None = None
    etag: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def is_directory(self) -> bool:
        return self.size is None

    def to_props(self) -> dict[str, Any]:
        """Flatten into one mapping: reserved fields plus custom attributes.

        Unset fields are left out; an explicit ``size: None`` in a props
        mapping addresses the directory node and must be written by callers.
        """
        props: dict[str, Any] = dict(self.metadata)
        if self.size is not None:
            props["size"] = self.size
        if self.created is not None:
            props["created"] = self.created
        if self.modified is not None:
            props["modified"] = self.modified
        if self.etag is not None:
            props["etag"] = self.etag
        return props

    @classmethod
    def from_props(cls, props: Mapping[str, Any]) -> Stats:
        metadata = {
            str(k): str(v) for k, v in props.items() if k not in RESERVED_PROPS and v is not None
        }
        return cls(
            size=_opt_int(props.get("size")),
            created=_opt_int(props.get("created")),
            modified=_opt_int(props.get("modified")),
            etag=props.get("etag"),
            metadata=metadata,
        )


@dataclass(frozen=True)
class HeadResult:
    """Outcome of resolving a path: which kind of node it is, and its stats."""

    kind: EntryKind
    stats: Stats

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class WriteOptions:
    append: bool = False


@dataclass(frozen=True)
class URLOptions:
    url_type: str = "GET"
    expires: int | None = None


def _opt_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def to_epoch_ms(value: Any) -> int | None:
    """Convert a store timestamp (datetime or ISO string) to epoch milliseconds."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    if isinstance(value, (int, float)):
        return int(value)
    try:
        return int(datetime.fromisoformat(str(value).replace("Z", "+00:00")).timestamp() * 1000)
    except ValueError:
        return None
