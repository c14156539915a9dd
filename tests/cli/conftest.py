"""Shared fixtures for CLI tests."""

from __future__ import annotations

from typing import Any

import pytest
from typer.testing import CliRunner

from bucketfs import BucketFileSystem
from bucketfs.storage import parse_storage_target
from tests.fakes import FakeS3Client

STORAGE_URI = "s3://test-bucket/root"


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_s3(monkeypatch, s3: FakeS3Client) -> FakeS3Client:
    """Route every CLI-opened filesystem to the in-memory client."""

    def _open_filesystem(storage_uri: str, **kwargs: Any) -> BucketFileSystem:
        target = parse_storage_target(storage_uri)
        return BucketFileSystem(
            target.bucket,
            target.prefix,
            kwargs.get("config"),
            client=s3,
            ensure_root=kwargs.get("ensure_root", False),
        )

    monkeypatch.setattr("bucketfs.cli._storage.open_filesystem", _open_filesystem)
    monkeypatch.delenv("BUCKETFS_STORAGE_URI", raising=False)
    return s3


def invoke(runner: CliRunner, args: list[str], **kwargs: Any):
    """Invoke the CLI against the test storage URI."""
    from bucketfs.cli import app

    return runner.invoke(app, ["--storage-uri", STORAGE_URI, *args], **kwargs)
