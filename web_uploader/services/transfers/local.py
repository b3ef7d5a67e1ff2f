"""Local copy: destination is a directory on this machine (plain path or file:// URL)."""
import shutil

from web_uploader.services.destinations import local_path_from_url
from web_uploader.services.files import FileHandle
from web_uploader.services.transfers.base import Transfer


class LocalCopyTransfer(Transfer):
    name = "local"

    def __init__(self, create_dirs: bool = True) -> None:
        self.create_dirs = create_dirs

    def transfer(self, file: FileHandle, destination_url: str) -> None:
        destination = local_path_from_url(destination_url)
        if self.create_dirs:
            destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(file.path, destination)
