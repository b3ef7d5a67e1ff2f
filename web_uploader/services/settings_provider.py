"""Settings providers: where an upload session looks up destination dirs and upload policy.

Two explicit variants back a session: a plain mapping, or a delegated settings
service (any object with ``get(name, suppress_errors)``). ``AppSettingsProvider``
serves the same names from the env-driven ``Settings``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from web_uploader.core.config import Settings, get_settings
from web_uploader.core.exceptions import ConfigurationError, SettingNotFound

# Returned for a missing setting when errors are suppressed
NOT_FOUND = False


class SettingsProvider(ABC):
    @abstractmethod
    def get(self, name: str, suppress_errors: bool = False) -> Any:
        """Return the named setting. Raise SettingNotFound if missing, or return NOT_FOUND when suppress_errors."""
        ...


class MappingSettingsProvider(SettingsProvider):
    def __init__(self, settings: Mapping[str, Any]):
        if not settings:
            raise ConfigurationError("Settings mapping must not be empty")
        self._settings = dict(settings)

    def get(self, name: str, suppress_errors: bool = False) -> Any:
        value = self._settings.get(name)
        if value is not None:
            return value
        if not suppress_errors:
            raise SettingNotFound(name)
        return NOT_FOUND


class DelegatedSettingsProvider(SettingsProvider):
    """Defers entirely to an external settings service, including how it reports missing keys."""

    def __init__(self, retriever: Any):
        if not is_settings_retriever(retriever):
            raise ConfigurationError(f"{type(retriever).__name__} has no callable get()")
        self._retriever = retriever

    def get(self, name: str, suppress_errors: bool = False) -> Any:
        return self._retriever.get(name, suppress_errors)


class AppSettingsProvider(SettingsProvider):
    """Upload settings from UPLOADER_* env vars; names not declared on Settings are read from UPLOADER_EXTRA_SETTINGS."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

    def get(self, name: str, suppress_errors: bool = False) -> Any:
        value = self._settings.extra_settings.get(name)
        if value is None and name in type(self._settings).model_fields and name != "extra_settings":
            value = getattr(self._settings, name)
        if value is not None and value != "":
            return value
        if not suppress_errors:
            raise SettingNotFound(name)
        return NOT_FOUND


def is_settings_retriever(obj: Any) -> bool:
    return obj is not None and not isinstance(obj, Mapping) and callable(getattr(obj, "get", None))


def build_settings_provider(
    retriever: Any = None,
    settings: Mapping[str, Any] | None = None,
) -> SettingsProvider:
    """A valid retriever wins; otherwise a non-empty mapping is required."""
    if isinstance(retriever, SettingsProvider):
        return retriever
    if is_settings_retriever(retriever):
        return DelegatedSettingsProvider(retriever)
    if not settings:
        raise ConfigurationError("Either a settings retriever or settings must be defined")
    return MappingSettingsProvider(settings)
