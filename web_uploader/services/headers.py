"""Header inspectors: header-only lookups (HTTP HEAD or equivalent) used to verify a finished upload.

``get_headers(url, parsed=True)`` returns a mapping of header name to value; with
``parsed=False`` it returns raw lines, status line first. A destination that does
not exist yields an empty mapping rather than an error; transport failures
(connection refused, timeouts) propagate.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import httpx

from web_uploader.core.config import get_settings
from web_uploader.core.logging_redaction import redact_url
from web_uploader.services.destinations import local_path_from_url
from web_uploader.services.files import guess_mime_type

logger = logging.getLogger("web_uploader.headers")

HeaderMap = dict[str, str]


def canonical_header_name(name: str) -> str:
    """content-length -> Content-Length."""
    return "-".join(p.capitalize() for p in name.split("-"))


class HeaderInspector(ABC):
    @abstractmethod
    def get_headers(self, url: str, parsed: bool = True) -> HeaderMap | list[str]:
        ...

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class HttpHeaderInspector(HeaderInspector):
    """HEAD request via httpx. Responses with status >= 400 count as 'no file'."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float | None = None,
        follow_redirects: bool | None = None,
    ):
        settings = get_settings()
        self._timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self._follow_redirects = (
            follow_redirects if follow_redirects is not None else settings.http_follow_redirects
        )
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def get_headers(self, url: str, parsed: bool = True) -> HeaderMap | list[str]:
        r = self._get_client().head(url, follow_redirects=self._follow_redirects)
        logger.debug("HEAD %s -> %s", redact_url(url), r.status_code)
        if not parsed:
            status = f"{r.http_version} {r.status_code} {r.reason_phrase}"
            return [status] + [f"{canonical_header_name(k)}: {v}" for k, v in r.headers.items()]
        if r.status_code >= 400:
            return {}
        return {canonical_header_name(k): v for k, v in r.headers.items()}

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None


class LocalHeaderInspector(HeaderInspector):
    """Headers for a local path or file:// URL: size from stat, type guessed from the name."""

    def get_headers(self, url: str, parsed: bool = True) -> HeaderMap | list[str]:
        path = local_path_from_url(url)
        if not path.is_file():
            return {} if parsed else ["HTTP/1.1 404 Not Found"]
        headers = {
            "Content-Length": str(path.stat().st_size),
            "Content-Type": guess_mime_type(path),
        }
        if parsed:
            return headers
        return ["HTTP/1.1 200 OK"] + [f"{k}: {v}" for k, v in headers.items()]


def get_header_inspector(name: str = "http", **kwargs) -> HeaderInspector:
    """http | local | s3. The S3 inspector is imported only when asked for (boto3 not needed otherwise)."""
    if name == "http":
        return HttpHeaderInspector(**kwargs)
    if name == "local":
        return LocalHeaderInspector()
    if name == "s3":
        from web_uploader.services.transfers.s3 import S3HeaderInspector
        return S3HeaderInspector(**kwargs)
    raise ValueError(f"Unknown header inspector: {name}")
