"""Transfer factory: local copy, HTTP PUT or S3. The S3 module is loaded only when asked for (no boto3 otherwise)."""
from web_uploader.core.config import get_settings
from web_uploader.services.transfers.base import Transfer
from web_uploader.services.transfers.http import HttpPutTransfer
from web_uploader.services.transfers.local import LocalCopyTransfer


def get_transfer(name: str | None = None, **kwargs) -> Transfer:
    """Return the named transfer (defaults to UPLOADER_TRANSFER_BACKEND)."""
    name = name or get_settings().transfer_backend
    if name == "local":
        return LocalCopyTransfer(**kwargs)
    if name == "http":
        return HttpPutTransfer(**kwargs)
    if name == "s3":
        from web_uploader.services.transfers.s3 import S3Transfer
        return S3Transfer(**kwargs)
    raise ValueError(f"Unknown transfer backend: {name}")


__all__ = ["Transfer", "LocalCopyTransfer", "HttpPutTransfer", "get_transfer"]
