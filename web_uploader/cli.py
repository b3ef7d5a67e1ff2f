"""CLI: web-uploader upload FILE --dir-setting NAME [options]."""
import argparse
import json
import sys
from pathlib import Path

import httpx

from web_uploader.core.config import get_settings
from web_uploader.core.exceptions import UploaderError
from web_uploader.core.logging_config import configure_logging
from web_uploader.services.files import FileHandle, UploadedFile
from web_uploader.services.headers import get_header_inspector
from web_uploader.services.name_changers import (
    NameChanger,
    PrefixNameChanger,
    SanitizingNameChanger,
    UniqueNameChanger,
)
from web_uploader.services.settings_provider import AppSettingsProvider
from web_uploader.services.transfers import get_transfer
from web_uploader.services.upload_session import UploadSession


def _parse_overrides(pairs: list[str]) -> dict[str, str]:
    out = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        out[key.strip()] = value
    return out


def _name_changer(args: argparse.Namespace) -> NameChanger | None:
    if args.prefix:
        return PrefixNameChanger(args.prefix)
    if args.unique:
        return UniqueNameChanger()
    if args.sanitize:
        return SanitizingNameChanger()
    return None


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="web-uploader", description="Validate, upload and verify a file")
    parser.add_argument("--log-level", default=None, help="Log level (default: UPLOADER_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_upload = sub.add_parser("upload", help="Upload one file and verify it")
    p_upload.add_argument("file", help="Local file path")
    p_upload.add_argument("--dir-setting", default="destination_dir", help="Setting holding the destination base URL")
    p_upload.add_argument("--backend", choices=["local", "http", "s3"], default=None, help="Transfer backend")
    p_upload.add_argument("--inspector", choices=["http", "local", "s3"], default=None,
                          help="Header inspector (default: local for the local backend, s3 for s3, else http)")
    p_upload.add_argument("--bucket", default=None, help="S3 bucket (s3 backend / inspector)")
    p_upload.add_argument("--original-name", default=None, help="Client-provided name to upload the file as")
    p_upload.add_argument("--mime-type", default=None, help="Override the guessed MIME type")
    names = p_upload.add_mutually_exclusive_group()
    names.add_argument("--prefix", default=None, help="Prefix the destination filename")
    names.add_argument("--unique", action="store_true", help="Append a random suffix to the destination filename")
    names.add_argument("--sanitize", action="store_true", help="Replace unsafe characters in the destination filename")
    p_upload.add_argument("--no-validate", action="store_true", help="Skip type/size policy checks")
    p_upload.add_argument("--no-verify", action="store_true", help="Skip the post-upload header check")
    p_upload.add_argument("--set", dest="overrides", action="append", default=[], metavar="KEY=VALUE",
                          help="Setting override (repeatable), e.g. --set allowed_upload_size=1000")
    p_upload.set_defaults(func=cmd_upload)

    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)
    try:
        return args.func(args)
    except (UploaderError, httpx.HTTPError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_upload(args: argparse.Namespace) -> int:
    settings = get_settings()
    overrides = _parse_overrides(args.overrides)
    backend = args.backend or settings.transfer_backend
    inspector_name = args.inspector or {"local": "local", "s3": "s3"}.get(backend, "http")
    s3_kwargs = {"bucket": args.bucket} if args.bucket else {}

    path = Path(args.file)
    if args.original_name:
        file = UploadedFile(path, args.original_name, mime_type=args.mime_type)
    else:
        file = FileHandle(path, mime_type=args.mime_type)

    transfer = get_transfer(backend, **(s3_kwargs if backend == "s3" else {}))
    inspector = get_header_inspector(inspector_name, **(s3_kwargs if inspector_name == "s3" else {}))
    if overrides:
        base = AppSettingsProvider(settings)
        provider_settings = {}
        for k in (args.dir_setting, "allowed_upload_types", "allowed_upload_size"):
            value = base.get(k, True)
            if value is not False:
                provider_settings[k] = value
        provider_settings.update(overrides)
        session = UploadSession(transfer, settings=provider_settings, header_inspector=inspector)
    else:
        session = UploadSession(transfer, settings_retriever=AppSettingsProvider(settings), header_inspector=inspector)
    try:
        session.set_upload_dir(args.dir_setting)
        session.set_file(file, _name_changer(args), should_validate=not args.no_validate)
        session.upload()
        verified = None if args.no_verify else session.check_if_successful()
    finally:
        transfer.close()
        inspector.close()
    print(json.dumps({
        "url": session.destination_url,
        "filename": session.new_filename,
        "size": file.size,
        "mime_type": file.mime_type,
        "verified": verified,
    }, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
