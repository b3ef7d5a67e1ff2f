"""HTTP PUT: send the file body to the destination URL (WebDAV shares, presigned PUT URLs, static hosts)."""
import httpx

from web_uploader.core.config import get_settings
from web_uploader.services.files import FileHandle
from web_uploader.services.transfers.base import Transfer


class HttpPutTransfer(Transfer):
    name = "http"

    def __init__(
        self,
        client: httpx.Client | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ):
        self._timeout = timeout if timeout is not None else get_settings().http_timeout_seconds
        self._client = client
        self._owns_client = client is None
        self._extra_headers = dict(headers or {})

    def _get_session(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout, follow_redirects=True)
        return self._client

    def transfer(self, file: FileHandle, destination_url: str) -> None:
        size = file.size
        body = file.path.read_bytes()
        if len(body) != size:
            raise ValueError(f"File size changed: expected {size}, got {len(body)}")
        r = self._get_session().put(
            destination_url,
            content=body,
            headers={**self._extra_headers, "Content-Type": file.mime_type},
        )
        r.raise_for_status()

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None
