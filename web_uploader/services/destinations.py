"""Destination URL helpers shared by transfers and header inspectors."""
from pathlib import Path
from urllib.parse import unquote, urlsplit


def join_url(base: str, filename: str) -> str:
    return f"{base}/{filename}"


def is_local_destination(url: str) -> bool:
    scheme = urlsplit(url).scheme
    # len == 1: Windows drive letter (C:\...)
    return scheme in ("", "file") or len(scheme) == 1


def local_path_from_url(url: str) -> Path:
    """file:///srv/static/a.txt or /srv/static/a.txt -> Path('/srv/static/a.txt')."""
    if url.startswith("file://"):
        return Path(unquote(urlsplit(url).path))
    return Path(url)


def object_key_from_url(url: str, key_prefix: str = "") -> str:
    """https://cdn.example.com/media/a.txt -> 'media/a.txt'; s3://bucket/media/a.txt -> 'media/a.txt'."""
    path = unquote(urlsplit(url).path).lstrip("/")
    return f"{key_prefix}{path}"


def bucket_from_url(url: str) -> str | None:
    parts = urlsplit(url)
    if parts.scheme == "s3":
        return parts.netloc or None
    return None
