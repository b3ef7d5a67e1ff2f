"""S3 transfer and head lookup via boto3. Imported only when an S3 backend is requested."""
from __future__ import annotations

from web_uploader.core.config import get_settings
from web_uploader.services.destinations import bucket_from_url, object_key_from_url
from web_uploader.services.files import FileHandle
from web_uploader.services.headers import HeaderInspector
from web_uploader.services.transfers.base import Transfer


def _get_client():
    import boto3
    settings = get_settings()
    return boto3.client("s3", region_name=settings.aws_region, endpoint_url=settings.s3_endpoint_url)


def _resolve_bucket(bucket: str | None, url: str) -> str:
    resolved = bucket_from_url(url) or bucket
    if not resolved:
        raise ValueError("S3 transfer requires a bucket (argument, s3:// URL or s3_bucket setting)")
    return resolved


class S3Transfer(Transfer):
    """Upload to the object key taken from the destination URL path.

    The destination dir can be s3://bucket/prefix, or the public URL the bucket is
    served from (https://cdn.example.com/prefix) together with ``bucket``.
    """

    name = "s3"

    def __init__(self, bucket: str | None = None, key_prefix: str = "", client=None) -> None:
        self._bucket = bucket or get_settings().s3_bucket
        self._key_prefix = key_prefix
        self._client = client or _get_client()

    def transfer(self, file: FileHandle, destination_url: str) -> None:
        bucket = _resolve_bucket(self._bucket, destination_url)
        key = object_key_from_url(destination_url, self._key_prefix)
        # ContentType is what a later HEAD reports back, so it must match the source.
        self._client.upload_file(
            str(file.path),
            bucket,
            key,
            ExtraArgs={"ContentType": file.mime_type},
        )


class S3HeaderInspector(HeaderInspector):
    """HeadObject on the key derived the same way S3Transfer derives it."""

    def __init__(self, bucket: str | None = None, key_prefix: str = "", client=None) -> None:
        self._bucket = bucket or get_settings().s3_bucket
        self._key_prefix = key_prefix
        self._client = client or _get_client()

    def get_headers(self, url: str, parsed: bool = True) -> dict[str, str] | list[str]:
        bucket = _resolve_bucket(self._bucket, url)
        key = object_key_from_url(url, self._key_prefix)
        try:
            resp = self._client.head_object(Bucket=bucket, Key=key)
        except Exception as e:
            err = getattr(e, "response", None)
            code = (err.get("Error", {}).get("Code") if isinstance(err, dict) else None)
            if code in ("404", "NoSuchKey", "NotFound"):
                return {} if parsed else ["HTTP/1.1 404 Not Found"]
            raise
        headers = {}
        if resp.get("ContentLength") is not None:
            headers["Content-Length"] = str(resp["ContentLength"])
        if resp.get("ContentType"):
            headers["Content-Type"] = resp["ContentType"]
        if parsed:
            return headers
        return ["HTTP/1.1 200 OK"] + [f"{k}: {v}" for k, v in headers.items()]
