"""In-memory S3 client used by the unit tests."""

from __future__ import annotations

import hashlib
import io
import threading
import time
from datetime import datetime, timezone
from typing import Any

from botocore.exceptions import ClientError
from botocore.response import StreamingBody

BUCKET = "test-bucket"
REPOSITORY = "root"

_STATUS_CODES = {
    400: "EntityTooSmall",
    404: "404",
    403: "AccessDenied",
    500: "InternalError",
}


def client_error(status: int, operation: str = "HeadObject") -> ClientError:
    return ClientError(
        {
            "Error": {"Code": _STATUS_CODES.get(status, str(status)), "Message": "boom"},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


class _Object:
    def __init__(
        self, body: bytes, metadata: dict[str, str] | None, content_type: str | None
    ) -> None:
        self.body = body
        self.metadata = dict(metadata or {})
        self.content_type = content_type or "binary/octet-stream"
        self.last_modified = datetime.now(timezone.utc)
        self.etag = '"' + hashlib.md5(body).hexdigest() + '"'


class _Paginator:
    def __init__(self, client: FakeS3Client) -> None:
        self._client = client

    def paginate(self, **kwargs: Any):
        yield self._client.list_objects_v2(**kwargs)


class FakeS3Client:
    """In-memory stand-in for a boto3 S3 client.

    ``failures`` maps ``(method, key)`` to an HTTP status to raise; ``delays``
    maps ``(method, key)`` to seconds to sleep before answering.
    ``upload_fileobj`` reads in ``part_size`` chunks and rejects a short part
    that is not the last one, recording the part sizes in ``upload_parts``.
    """

    def __init__(self) -> None:
        self.objects: dict[str, dict[str, _Object]] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.failures: dict[tuple[str, str], int] = {}
        self.delays: dict[tuple[str, str], float] = {}
        self.part_size = 4
        self.upload_parts: list[list[int]] = []
        self._lock = threading.Lock()

    # --- test helpers ---

    def seed(self, key: str, body: bytes = b"", metadata: dict[str, str] | None = None) -> None:
        self.objects.setdefault(BUCKET, {})[key] = _Object(body, metadata, None)

    def body_of(self, key: str) -> bytes:
        return self.objects[BUCKET][key].body

    def metadata_of(self, key: str) -> dict[str, str]:
        return self.objects[BUCKET][key].metadata

    def called(self, method: str) -> list[dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == method]

    def _enter(self, method: str, key: str, kwargs: dict[str, Any]) -> None:
        with self._lock:
            self.calls.append((method, kwargs))
        delay = self.delays.get((method, key))
        if delay:
            time.sleep(delay)
        status = self.failures.get((method, key))
        if status is not None:
            raise client_error(status, method)

    def _get(self, bucket: str, key: str, method: str) -> _Object:
        obj = self.objects.get(bucket, {}).get(key)
        if obj is None:
            raise client_error(404, method)
        return obj

    # --- S3 API surface ---

    def head_object(self, *, Bucket: str, Key: str) -> dict[str, Any]:
        self._enter("head_object", Key, {"Bucket": Bucket, "Key": Key})
        obj = self._get(Bucket, Key, "HeadObject")
        return {
            "ContentLength": len(obj.body),
            "ContentType": obj.content_type,
            "ETag": obj.etag,
            "LastModified": obj.last_modified,
            "Metadata": dict(obj.metadata),
        }

    def get_object(self, *, Bucket: str, Key: str) -> dict[str, Any]:
        self._enter("get_object", Key, {"Bucket": Bucket, "Key": Key})
        obj = self._get(Bucket, Key, "GetObject")
        return {
            "Body": StreamingBody(io.BytesIO(obj.body), len(obj.body)),
            "ContentLength": len(obj.body),
            "Metadata": dict(obj.metadata),
        }

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes = b"",
        Metadata: dict[str, str] | None = None,
        ContentType: str | None = None,
    ) -> dict[str, Any]:
        self._enter("put_object", Key, {"Bucket": Bucket, "Key": Key, "Metadata": Metadata})
        obj = _Object(bytes(Body), Metadata, ContentType)
        self.objects.setdefault(Bucket, {})[Key] = obj
        return {"ETag": obj.etag}

    def upload_fileobj(
        self,
        Fileobj: Any,
        Bucket: str,
        Key: str,
        ExtraArgs: dict[str, Any] | None = None,
    ) -> None:
        self._enter("upload_fileobj", Key, {"Bucket": Bucket, "Key": Key, "ExtraArgs": ExtraArgs})
        # Like s3transfer on a non-seekable stream: every read(part_size) is
        # one part, and only the last part may be smaller than part_size.
        chunks: list[bytes] = []
        while True:
            chunk = Fileobj.read(self.part_size)
            if not chunk:
                break
            if chunks and len(chunks[-1]) < self.part_size:
                raise client_error(400, "CompleteMultipartUpload")
            chunks.append(bytes(chunk))
        self.upload_parts.append([len(c) for c in chunks])
        extra = ExtraArgs or {}
        self.objects.setdefault(Bucket, {})[Key] = _Object(
            b"".join(chunks), extra.get("Metadata"), extra.get("ContentType")
        )

    def copy_object(
        self,
        *,
        Bucket: str,
        Key: str,
        CopySource: dict[str, str],
        Metadata: dict[str, str] | None = None,
        MetadataDirective: str = "COPY",
        ContentType: str | None = None,
    ) -> dict[str, Any]:
        self._enter(
            "copy_object",
            Key,
            {"Bucket": Bucket, "Key": Key, "Metadata": Metadata, "MetadataDirective": MetadataDirective},
        )
        source = self._get(CopySource["Bucket"], CopySource["Key"], "CopyObject")
        metadata = Metadata if MetadataDirective == "REPLACE" else source.metadata
        obj = _Object(source.body, metadata, ContentType or source.content_type)
        self.objects.setdefault(Bucket, {})[Key] = obj
        return {"CopyObjectResult": {"ETag": obj.etag}}

    def delete_object(self, *, Bucket: str, Key: str) -> dict[str, Any]:
        self._enter("delete_object", Key, {"Bucket": Bucket, "Key": Key})
        self.objects.get(Bucket, {}).pop(Key, None)
        return {}

    def list_objects_v2(
        self,
        *,
        Bucket: str,
        Prefix: str = "",
        Delimiter: str | None = None,
        MaxKeys: int = 1000,
    ) -> dict[str, Any]:
        self._enter(
            "list_objects_v2",
            Prefix,
            {"Bucket": Bucket, "Prefix": Prefix, "Delimiter": Delimiter, "MaxKeys": MaxKeys},
        )
        contents: list[dict[str, Any]] = []
        prefixes: list[str] = []
        for key in sorted(self.objects.get(Bucket, {})):
            if not key.startswith(Prefix):
                continue
            rest = key[len(Prefix) :]
            if Delimiter and Delimiter in rest:
                common = Prefix + rest.split(Delimiter, 1)[0] + Delimiter
                if common not in prefixes:
                    prefixes.append(common)
                continue
            contents.append({"Key": key, "Size": len(self.objects[Bucket][key].body)})
        contents = contents[:MaxKeys]
        resp: dict[str, Any] = {"KeyCount": len(contents) + len(prefixes), "Prefix": Prefix}
        if contents:
            resp["Contents"] = contents
        if prefixes:
            resp["CommonPrefixes"] = [{"Prefix": p} for p in prefixes]
        return resp

    def get_paginator(self, operation: str) -> _Paginator:
        assert operation == "list_objects_v2"
        return _Paginator(self)

    def generate_presigned_url(
        self, *, ClientMethod: str, Params: dict[str, Any], ExpiresIn: int
    ) -> str:
        self._enter(
            "generate_presigned_url",
            Params["Key"],
            {"ClientMethod": ClientMethod, "Params": Params, "ExpiresIn": ExpiresIn},
        )
        return f"https://{Params['Bucket']}.example/{Params['Key']}?m={ClientMethod}&ttl={ExpiresIn}"

