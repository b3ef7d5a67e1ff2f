"""Transfer interface: move a file's bytes to a destination URL. Implementations: local copy, HTTP PUT, S3."""
from abc import ABC, abstractmethod

from web_uploader.services.files import FileHandle


class Transfer(ABC):
    """One transfer mechanism. No retries; transport errors propagate to the caller."""

    name: str  # e.g. "local", "http", "s3"

    @abstractmethod
    def transfer(self, file: FileHandle, destination_url: str) -> None:
        """Write file to destination_url (base dir + '/' + target filename)."""
        ...

    def close(self) -> None:
        pass
