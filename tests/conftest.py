"""Pytest fixtures: source/destination dirs, settings, header-inspector doubles."""
import logging
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from web_uploader.core.config import get_settings
from web_uploader.services.files import FileHandle, guess_mime_type
from web_uploader.services.headers import HeaderInspector, LocalHeaderInspector
from web_uploader.services.transfers.local import LocalCopyTransfer
from web_uploader.services.upload_session import UploadSession

TEST_TXT = b"hello world\n"  # 12 bytes
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 2000  # > 1000 bytes


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Keep UPLOADER_* from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("UPLOADER_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    # configure_logging() binds a handler to the (captured) stderr of the test that called it
    for h in logging.getLogger("web_uploader").handlers[:]:
        logging.getLogger("web_uploader").removeHandler(h)


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    d = tmp_path / "source"
    d.mkdir()
    (d / "test.txt").write_bytes(TEST_TXT)
    (d / "my_image.jpg").write_bytes(JPEG_BYTES)
    return d


@pytest.fixture
def destination_dir(tmp_path: Path) -> Path:
    d = tmp_path / "destination"
    d.mkdir()
    return d


@pytest.fixture
def settings(destination_dir: Path) -> dict:
    return {
        "destination_dir": str(destination_dir) + "/",
        "allowed_upload_size": "1000",
        "allowed_upload_types": ["video/mp4", "text/plain"],
    }


@pytest.fixture
def text_file(source_dir: Path) -> FileHandle:
    return FileHandle(source_dir / "test.txt")


@pytest.fixture
def image_file(source_dir: Path) -> FileHandle:
    return FileHandle(source_dir / "my_image.jpg")


def headers_inspector_mock(headers_for_url) -> MagicMock:
    inspector = MagicMock(spec=HeaderInspector)
    inspector.get_headers.side_effect = lambda url, parsed=True: headers_for_url(url)
    return inspector


@pytest.fixture
def successful_inspector() -> MagicMock:
    """Reports whatever actually landed at the destination path."""
    return headers_inspector_mock(lambda url: {
        "Content-Length": Path(url).stat().st_size,
        "Content-Type": guess_mime_type(url),
    })


@pytest.fixture
def failing_inspector() -> MagicMock:
    return headers_inspector_mock(lambda url: {"Content-Length": 0, "Content-Type": "nonexistent/type"})


@pytest.fixture
def session(settings: dict, successful_inspector: MagicMock) -> UploadSession:
    return UploadSession(LocalCopyTransfer(), settings=settings, header_inspector=successful_inspector)


@pytest.fixture
def local_session(settings: dict) -> UploadSession:
    return UploadSession(LocalCopyTransfer(), settings=settings, header_inspector=LocalHeaderInspector())
