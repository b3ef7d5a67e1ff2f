"""Validate a file, transfer it to a remote destination, and verify the result from the destination's headers."""
from .core.exceptions import (
    ConfigurationError,
    DestinationNotConfigured,
    DisallowedFileType,
    FileError,
    FileNotAttached,
    FileTooLarge,
    FileValidationError,
    SettingNotFound,
    UploaderError,
    UploadVerificationFailed,
    VerificationFailure,
)
from .services.files import FileHandle, UploadedFile
from .services.headers import HeaderInspector, HttpHeaderInspector, LocalHeaderInspector
from .services.name_changers import NameChanger, PrefixNameChanger, SanitizingNameChanger, UniqueNameChanger
from .services.settings_provider import (
    AppSettingsProvider,
    DelegatedSettingsProvider,
    MappingSettingsProvider,
    SettingsProvider,
)
from .services.transfers import HttpPutTransfer, LocalCopyTransfer, Transfer, get_transfer
from .services.upload_session import SessionState, UploadSession

__all__ = [
    "ConfigurationError",
    "DestinationNotConfigured",
    "DisallowedFileType",
    "FileError",
    "FileNotAttached",
    "FileTooLarge",
    "FileValidationError",
    "SettingNotFound",
    "UploaderError",
    "UploadVerificationFailed",
    "VerificationFailure",
    "FileHandle",
    "UploadedFile",
    "HeaderInspector",
    "HttpHeaderInspector",
    "LocalHeaderInspector",
    "NameChanger",
    "PrefixNameChanger",
    "SanitizingNameChanger",
    "UniqueNameChanger",
    "AppSettingsProvider",
    "DelegatedSettingsProvider",
    "MappingSettingsProvider",
    "SettingsProvider",
    "HttpPutTransfer",
    "LocalCopyTransfer",
    "Transfer",
    "get_transfer",
    "SessionState",
    "UploadSession",
]

__version__ = "0.1.0"
