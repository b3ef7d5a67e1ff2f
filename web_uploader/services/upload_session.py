"""Upload session: validate one file, hand it to a transfer, then verify the destination's headers.

Typical use::

    session = UploadSession(LocalCopyTransfer(), settings={"destination_dir": "/srv/static"})
    session.set_upload_dir("destination_dir")
    session.set_file(FileHandle("report.pdf")).upload().check_if_successful()

Verification trusts the destination's Content-Length / Content-Type as a stand-in for
"the bytes arrived": nothing is downloaded back or hashed.
"""
from __future__ import annotations

import enum
import logging
from typing import Any, Mapping

from web_uploader.core.exceptions import (
    DestinationNotConfigured,
    DisallowedFileType,
    FileNotAttached,
    FileTooLarge,
    UploadVerificationFailed,
    VerificationFailure,
)
from web_uploader.core.logging_config import log_event
from web_uploader.core.metrics import record_attach, record_transfer, record_verification
from web_uploader.services.destinations import join_url
from web_uploader.services.files import FileHandle
from web_uploader.services.headers import HeaderInspector, HttpHeaderInspector
from web_uploader.services.name_changers import NameChangerLike, apply_name_changer
from web_uploader.services.settings_provider import SettingsProvider, build_settings_provider
from web_uploader.services.transfers.base import Transfer
from web_uploader.services.upload_validation import validate_file

logger = logging.getLogger("web_uploader.session")


class SessionState(enum.IntEnum):
    UNCONFIGURED = 0
    DIRECTORY_SET = 1
    FILE_ATTACHED = 2
    TRANSFERRED = 3


def _header(headers: Mapping[str, Any], name: str) -> Any:
    """Case-insensitive lookup; None when absent."""
    if name in headers:
        return headers[name]
    lowered = name.lower()
    for k, v in headers.items():
        if str(k).lower() == lowered:
            return v
    return None


def _is_zero(value: Any) -> bool:
    """Content-Length of 0, "0" or empty counts as no content."""
    return not value or str(value).strip() in ("", "0")


def _same_size(reported: Any, size: int) -> bool:
    try:
        return float(str(reported).strip()) == size
    except ValueError:
        return False


class UploadSession:
    """One file, one destination. Not reusable across files; not shared across threads."""

    def __init__(
        self,
        transfer: Transfer,
        settings_retriever: Any = None,
        settings: Mapping[str, Any] | None = None,
        header_inspector: HeaderInspector | None = None,
    ):
        self._settings: SettingsProvider = build_settings_provider(settings_retriever, settings)
        self.transfer = transfer
        self._owns_inspector = header_inspector is None
        self.header_inspector = header_inspector or HttpHeaderInspector()
        self.state = SessionState.UNCONFIGURED
        self._upload_dir: str | None = None
        self.file: FileHandle | None = None
        self._filename: str | None = None

    @property
    def upload_dir(self) -> str | None:
        return self._upload_dir

    @property
    def new_filename(self) -> str | None:
        return self._filename

    @property
    def destination_url(self) -> str:
        return join_url(self._upload_dir or "", self._filename or "")

    def get_setting(self, name: str, suppress_errors: bool = False) -> Any:
        return self._settings.get(name, suppress_errors)

    def set_upload_dir(self, setting_name: str) -> "UploadSession":
        """Resolve the remote base URL from a setting. Missing setting raises SettingNotFound."""
        self._upload_dir = str(self.get_setting(setting_name)).rstrip("/")
        if self.state < SessionState.DIRECTORY_SET:
            self.state = SessionState.DIRECTORY_SET
        return self

    def set_file(
        self,
        file: FileHandle,
        name_changer: NameChangerLike | None = None,
        should_validate: bool = True,
    ) -> "UploadSession":
        """Attach file and decide the destination filename, then check type and size.

        The file and filename are assigned before validation runs, so after a
        rejected attach ``file`` and ``new_filename`` describe the rejected file.
        A rejection also drops any earlier attach: ``state`` falls back to
        DIRECTORY_SET, so upload() and check_if_successful() refuse to run.
        """
        if not self._upload_dir:
            raise DestinationNotConfigured()
        self.file = file
        self._filename = getattr(file, "client_original_name", None) or file.filename
        if name_changer:
            self._filename = apply_name_changer(name_changer, self._filename)
        if should_validate:
            try:
                validate_file(file, self._settings)
            except DisallowedFileType as e:
                self.state = SessionState.DIRECTORY_SET
                record_attach("disallowed_type")
                log_event(logger, "attach_rejected", logging.WARNING, filename=self._filename,
                          mime_type=e.mime_type, allowed_types=e.allowed_types)
                raise
            except FileTooLarge as e:
                self.state = SessionState.DIRECTORY_SET
                record_attach("too_large")
                log_event(logger, "attach_rejected", logging.WARNING, filename=self._filename,
                          size=e.size, max_size=e.max_size)
                raise
        record_attach("accepted")
        self.state = SessionState.FILE_ATTACHED
        return self

    def upload(self) -> "UploadSession":
        """Hand the attached file to the transfer. Transport errors propagate; nothing is retried."""
        if self.file is None or self.state < SessionState.FILE_ATTACHED:
            raise FileNotAttached("upload")
        url = self.destination_url
        backend = getattr(self.transfer, "name", type(self.transfer).__name__)
        try:
            self.transfer.transfer(self.file, url)
        except Exception:
            record_transfer(backend, False)
            log_event(logger, "transfer_failed", logging.ERROR, backend=backend, url=url)
            raise
        record_transfer(backend, True)
        log_event(logger, "transferred", backend=backend, url=url, size=self.file.size)
        self.state = SessionState.TRANSFERRED
        return self

    def check_if_successful(self) -> bool:
        """Compare the destination's Content-Length / Content-Type with the source file.

        Raises UploadVerificationFailed with reason NOT_FOUND, SIZE_MISMATCH or
        TYPE_MISMATCH. Does not change session state, so it can be called again.
        """
        if self.file is None or self.state < SessionState.FILE_ATTACHED:
            raise FileNotAttached("check_if_successful")
        url = self.destination_url
        headers = self.header_inspector.get_headers(url, parsed=True) or {}
        length = _header(headers, "Content-Length")
        content_type = _header(headers, "Content-Type")
        size = self.file.size
        mime_type = self.file.mime_type
        if length is None or content_type is None:
            self._fail(url, VerificationFailure.NOT_FOUND, "no file found in destination")
        if _is_zero(length) or not _same_size(length, size):
            self._fail(
                url,
                VerificationFailure.SIZE_MISMATCH,
                f"destination size is {length} while original size is {size}",
                expected=size,
                actual=length,
            )
        if not content_type or content_type != mime_type:
            self._fail(
                url,
                VerificationFailure.TYPE_MISMATCH,
                f"destination type is {content_type} while original type is {mime_type}",
                expected=mime_type,
                actual=content_type,
            )
        record_verification("success")
        log_event(logger, "verified", url=url, size=size, mime_type=mime_type)
        return True

    def close(self) -> None:
        """Close the header inspector if this session created it."""
        if self._owns_inspector:
            self.header_inspector.close()

    def __enter__(self) -> "UploadSession":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _fail(self, url: str, reason: VerificationFailure, detail: str, expected: Any = None, actual: Any = None) -> None:
        record_verification(reason.value)
        log_event(logger, "verification_failed", logging.WARNING, url=url, reason=reason.value,
                  expected=expected, actual=actual)
        raise UploadVerificationFailed(url, reason, detail, expected=expected, actual=actual)
