"""Upload policy: allow-list parsing, size coercion, check order."""
import pytest

from web_uploader.core.exceptions import DisallowedFileType, FileTooLarge
from web_uploader.services.settings_provider import MappingSettingsProvider
from web_uploader.services.upload_validation import (
    check_mime_type,
    check_size,
    coerce_size,
    parse_allowed_types,
    sanitize_storage_filename,
    validate_file,
)


def test_sanitize_storage_filename():
    assert sanitize_storage_filename("a/b/c.png") == "c.png"
    assert sanitize_storage_filename("C:\\Users\\me\\c.png") == "c.png"
    assert sanitize_storage_filename("normal.png") == "normal.png"
    assert sanitize_storage_filename("weird name!.png") == "weird_name_.png"
    assert sanitize_storage_filename("") == ""
    assert sanitize_storage_filename(None) == ""
    assert len(sanitize_storage_filename("x" * 500 + ".png")) == 200


def test_parse_allowed_types():
    assert parse_allowed_types("image/png, image/jpeg,video/mp4") == ["image/png", "image/jpeg", "video/mp4"]
    assert parse_allowed_types("text/plain") == ["text/plain"]
    assert parse_allowed_types(["text/plain"]) == ["text/plain"]
    assert parse_allowed_types(("a/b", "c/d")) == ["a/b", "c/d"]
    assert parse_allowed_types("") is None
    assert parse_allowed_types(False) is None
    assert parse_allowed_types(None) is None


@pytest.mark.parametrize(
    "value, expected",
    [("1000", 1000), (" 1000 bytes", 1000), (1000, 1000), (12.9, 12), ("abc", 0), ("", 0), (None, 0), (False, 0)],
)
def test_coerce_size(value, expected):
    assert coerce_size(value) == expected


def test_no_policy_settings_means_no_restriction(image_file):
    provider = MappingSettingsProvider({"destination_dir": "/srv"})
    validate_file(image_file, provider)


def test_check_mime_type_rejects(image_file):
    provider = MappingSettingsProvider({"allowed_upload_types": "text/plain,video/mp4"})
    with pytest.raises(DisallowedFileType) as exc:
        check_mime_type(image_file, provider)
    assert exc.value.allowed_types == ["text/plain", "video/mp4"]


def test_check_mime_type_accepts(text_file):
    check_mime_type(text_file, MappingSettingsProvider({"allowed_upload_types": ["text/plain"]}))


def test_check_size_boundary(text_file):
    check_size(text_file, MappingSettingsProvider({"allowed_upload_size": "12"}))
    with pytest.raises(FileTooLarge, match="File cannot be bigger than 11 bytes"):
        check_size(text_file, MappingSettingsProvider({"allowed_upload_size": "11"}))


def test_check_size_zero_means_unlimited(image_file):
    check_size(image_file, MappingSettingsProvider({"allowed_upload_size": 0}))
    check_size(image_file, MappingSettingsProvider({"allowed_upload_size": "unlimited"}))


def test_validate_file_checks_type_first(image_file):
    provider = MappingSettingsProvider({"allowed_upload_types": "text/plain", "allowed_upload_size": "10"})
    with pytest.raises(DisallowedFileType):
        validate_file(image_file, provider)
