"""Uploader errors. Transport errors (httpx, botocore, OSError) are not wrapped and propagate as-is."""
from __future__ import annotations

import enum
from typing import Any


class UploaderError(Exception):
    """Base for every error raised by the uploader itself."""


class ConfigurationError(UploaderError, RuntimeError):
    """Neither a settings retriever nor a settings mapping was given."""


class SettingNotFound(UploaderError, RuntimeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Setting {name} not found")


class FileError(UploaderError):
    """Problem with the file being uploaded or with where it ended up."""


class DestinationNotConfigured(FileError):
    def __init__(self, message: str = "Remote upload directory not set. Call set_upload_dir() first"):
        super().__init__(message)


class FileNotAttached(FileError):
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"No file attached. Call set_file() before {operation}()")


class FileValidationError(FileError):
    """File rejected by upload policy."""


class DisallowedFileType(FileValidationError):
    def __init__(self, mime_type: str | None, allowed_types: list[str]):
        self.mime_type = mime_type
        self.allowed_types = allowed_types
        super().__init__("File type is not allowed")


class FileTooLarge(FileValidationError):
    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(f"File cannot be bigger than {max_size} bytes")


class VerificationFailure(str, enum.Enum):
    NOT_FOUND = "not_found"
    SIZE_MISMATCH = "size_mismatch"
    TYPE_MISMATCH = "type_mismatch"


class UploadVerificationFailed(FileError):
    """Destination headers do not match the source file."""

    def __init__(
        self,
        url: str,
        reason: VerificationFailure,
        detail: str,
        expected: Any = None,
        actual: Any = None,
    ):
        self.url = url
        self.reason = reason
        self.expected = expected
        self.actual = actual
        super().__init__(f"File {url} did not upload correctly: {detail}")
