"""Name changers: map the original filename to the name used at the destination."""
from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import Any, Callable, Mapping, Union

from web_uploader.services.upload_validation import sanitize_storage_filename


class NameChanger(ABC):
    @abstractmethod
    def change_name(self, original_filename: str) -> str:
        ...

    def set_parameters(self, parameters: Mapping[str, Any]) -> None:
        """Pre-configure the changer. Unknown keys are ignored."""
        for key, value in parameters.items():
            if hasattr(self, key) and not key.startswith("_"):
                setattr(self, key, value)


NameChangerLike = Union[NameChanger, Callable[[str], str]]


class PrefixNameChanger(NameChanger):
    def __init__(self, prefix: str = "changed_"):
        self.prefix = prefix

    def change_name(self, original_filename: str) -> str:
        return self.prefix + original_filename


class UniqueNameChanger(NameChanger):
    """photo.jpg -> photo-3f2a...e1.jpg; avoids collisions at the destination."""

    def __init__(self, separator: str = "-", length: int = 32):
        self.separator = separator
        self.length = length

    def change_name(self, original_filename: str) -> str:
        p = PurePosixPath(original_filename)
        suffix = "".join(p.suffixes)
        stem = p.name[: len(p.name) - len(suffix)] if suffix else p.name
        token = uuid.uuid4().hex[: self.length]
        return f"{stem}{self.separator}{token}{suffix}"


class SanitizingNameChanger(NameChanger):
    def __init__(self, lowercase: bool = False, fallback: str = "file"):
        self.lowercase = lowercase
        self.fallback = fallback

    def change_name(self, original_filename: str) -> str:
        safe = sanitize_storage_filename(original_filename) or self.fallback
        return safe.lower() if self.lowercase else safe


def apply_name_changer(name_changer: NameChangerLike, filename: str) -> str:
    if isinstance(name_changer, NameChanger) or hasattr(name_changer, "change_name"):
        return name_changer.change_name(filename)
    return name_changer(filename)
