"""Shared test fixtures for bucketfs tests."""

from __future__ import annotations

import pytest

from bucketfs import BucketFileSystem, BucketFSConfig
from tests.fakes import BUCKET, REPOSITORY, FakeS3Client


@pytest.fixture
def s3() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def fs(s3: FakeS3Client) -> BucketFileSystem:
    return BucketFileSystem(BUCKET, REPOSITORY, client=s3)


@pytest.fixture
def buffered_fs(s3: FakeS3Client) -> BucketFileSystem:
    return BucketFileSystem(BUCKET, REPOSITORY, BucketFSConfig(stream_io=False), client=s3)
