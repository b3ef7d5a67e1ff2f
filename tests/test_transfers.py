"""Transfers: local copy, HTTP PUT (mock transport), S3 upload_file (mocked client), factory."""
from unittest.mock import MagicMock

import httpx
import pytest

from web_uploader.services.files import UploadedFile
from web_uploader.services.transfers import HttpPutTransfer, LocalCopyTransfer, get_transfer
from web_uploader.services.transfers.s3 import S3Transfer


def test_local_copy_to_path(text_file, destination_dir):
    LocalCopyTransfer().transfer(text_file, f"{destination_dir}/test.txt")
    assert (destination_dir / "test.txt").read_bytes() == text_file.path.read_bytes()


def test_local_copy_to_file_url_creates_dirs(text_file, tmp_path):
    target = tmp_path / "nested" / "dir" / "copy.txt"
    LocalCopyTransfer().transfer(text_file, target.as_uri())
    assert target.read_bytes() == text_file.path.read_bytes()


def test_local_copy_without_create_dirs(text_file, tmp_path):
    with pytest.raises(FileNotFoundError):
        LocalCopyTransfer(create_dirs=False).transfer(text_file, str(tmp_path / "nope" / "copy.txt"))


def test_http_put_sends_body_and_content_type(text_file):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    HttpPutTransfer(client=client, headers={"Authorization": "Bearer abc"}).transfer(
        text_file, "https://dav.example.com/media/test.txt"
    )
    request = seen[0]
    assert request.method == "PUT"
    assert str(request.url) == "https://dav.example.com/media/test.txt"
    assert request.content == b"hello world\n"
    assert request.headers["Content-Type"] == "text/plain"
    assert request.headers["Authorization"] == "Bearer abc"


def test_http_put_error_status_raises(text_file):
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(403)))
    with pytest.raises(httpx.HTTPStatusError):
        HttpPutTransfer(client=client).transfer(text_file, "https://dav.example.com/media/test.txt")


def test_s3_transfer_uses_url_path_as_key(text_file):
    client = MagicMock()
    S3Transfer(bucket="test-bucket", client=client).transfer(text_file, "https://cdn.example.com/media/test.txt")
    client.upload_file.assert_called_once_with(
        str(text_file.path),
        "test-bucket",
        "media/test.txt",
        ExtraArgs={"ContentType": "text/plain"},
    )


def test_s3_transfer_with_s3_url_and_prefix(source_dir):
    client = MagicMock()
    file = UploadedFile(source_dir / "test.txt", "notes.txt")
    S3Transfer(key_prefix="uploads/", client=client).transfer(file, "s3://assets/2024/notes.txt")
    args, kwargs = client.upload_file.call_args
    assert args[1:] == ("assets", "uploads/2024/notes.txt")
    assert kwargs["ExtraArgs"]["ContentType"] == "text/plain"


def test_s3_transfer_uses_configured_bucket(monkeypatch, text_file):
    from web_uploader.core.config import get_settings

    monkeypatch.setenv("UPLOADER_S3_BUCKET", "env-bucket")
    get_settings.cache_clear()
    client = MagicMock()
    S3Transfer(client=client).transfer(text_file, "https://cdn.example.com/test.txt")
    assert client.upload_file.call_args[0][1] == "env-bucket"


def test_get_transfer():
    assert isinstance(get_transfer("local"), LocalCopyTransfer)
    assert isinstance(get_transfer("http"), HttpPutTransfer)
    assert isinstance(get_transfer("s3", bucket="b", client=MagicMock()), S3Transfer)
    with pytest.raises(ValueError, match="Unknown transfer backend"):
        get_transfer("ftp")


def test_get_transfer_default_from_settings(monkeypatch):
    from web_uploader.core.config import get_settings

    monkeypatch.setenv("UPLOADER_TRANSFER_BACKEND", "http")
    get_settings.cache_clear()
    assert isinstance(get_transfer(), HttpPutTransfer)
