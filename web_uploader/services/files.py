"""File abstraction consumed by upload sessions: path, size, MIME type, and the client's original name for uploads."""
from __future__ import annotations

import mimetypes
from pathlib import Path

DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime_type(path: str | Path) -> str:
    content_type, _ = mimetypes.guess_type(str(path))
    return content_type or DEFAULT_MIME_TYPE


class FileHandle:
    """A file on local disk. Size and MIME type are read on access, so they track the file."""

    def __init__(self, path: str | Path, mime_type: str | None = None):
        self.path = Path(path)
        if not self.path.is_file():
            raise FileNotFoundError(f"File not found: {self.path}")
        self._mime_type = mime_type

    @property
    def filename(self) -> str:
        """Storage name: the basename of the file on disk."""
        return self.path.name

    @property
    def size(self) -> int:
        return self.path.stat().st_size

    @property
    def mime_type(self) -> str:
        return self._mime_type or guess_mime_type(self.path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"


class UploadedFile(FileHandle):
    """A file received from a client: stored under a temporary name, uploaded as client_original_name."""

    def __init__(self, path: str | Path, client_original_name: str, mime_type: str | None = None):
        super().__init__(path, mime_type=mime_type)
        self.client_original_name = client_original_name

    @property
    def mime_type(self) -> str:
        # Temporary storage names usually carry no extension; fall back to the client's name.
        if self._mime_type:
            return self._mime_type
        content_type, _ = mimetypes.guess_type(str(self.path))
        return content_type or guess_mime_type(self.client_original_name)
