"""Upload policy: MIME allow-list (allowed_upload_types) and size ceiling (allowed_upload_size).

Both settings are optional: a missing or empty value means no restriction.
"""
import re
from typing import Any

from web_uploader.core.exceptions import DisallowedFileType, FileTooLarge
from web_uploader.services.files import FileHandle
from web_uploader.services.settings_provider import SettingsProvider

ALLOWED_TYPES_SETTING = "allowed_upload_types"
ALLOWED_SIZE_SETTING = "allowed_upload_size"
_MAX_FILENAME = 200


def sanitize_storage_filename(filename: str | None) -> str:
    """Safe destination filename: no path separators, no control chars, bounded length."""
    if not filename or not filename.strip():
        return ""
    # Remove path components and restrict to alphanumeric, dash, underscore, dot
    base = filename.strip().split("/")[-1].split("\\")[-1]
    safe = re.sub(r"[^\w\-.]", "_", base)
    return safe[:_MAX_FILENAME] if len(safe) > _MAX_FILENAME else safe


def parse_allowed_types(value: Any) -> list[str] | None:
    """'a/b, c/d' or ['a/b', 'c/d'] -> list; anything else -> None (no restriction)."""
    if isinstance(value, str) and value:
        return [t for t in value.replace(" ", "").split(",") if t]
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return None


def coerce_size(value: Any) -> int:
    """Leading-integer coercion: '1000' -> 1000, '1000 bytes' -> 1000, 'abc' / None / False -> 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    m = re.match(r"\s*([+-]?\d+)", str(value))
    return int(m.group(1)) if m else 0


def check_mime_type(file: FileHandle, provider: SettingsProvider) -> None:
    allowed = parse_allowed_types(provider.get(ALLOWED_TYPES_SETTING, True))
    if allowed is None:
        return
    if file.mime_type not in allowed:
        raise DisallowedFileType(file.mime_type, allowed)


def check_size(file: FileHandle, provider: SettingsProvider) -> None:
    max_size = coerce_size(provider.get(ALLOWED_SIZE_SETTING, True))
    if not max_size:
        return
    size = file.size
    if size > max_size:
        raise FileTooLarge(size, max_size)


def validate_file(file: FileHandle, provider: SettingsProvider) -> None:
    """Raise DisallowedFileType or FileTooLarge. Type is checked first."""
    check_mime_type(file, provider)
    check_size(file, provider)
