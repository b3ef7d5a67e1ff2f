"""Redact credentials from structured logs: URL userinfo passwords, signed query strings, secret-looking keys."""
import re
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

REDACTED = "[REDACTED]"

# Keys (case-insensitive substring match) that must be redacted in dicts and query strings
REDACT_KEYS = frozenset({
    "password", "token", "secret", "authorization", "cookie", "signature",
    "credential", "access_key", "api_key", "sig",
})


def _redact_key(key: str) -> bool:
    k = key.lower()
    return any(r in k for r in REDACT_KEYS)


def redact_url(url: str) -> str:
    """Drop the password from userinfo and mask secret query parameters (presigned S3 URLs, tokens)."""
    if "://" not in url:
        return url
    parts = urlsplit(url)
    netloc = parts.netloc
    if parts.password is not None:
        user = parts.username or ""
        host = netloc.rsplit("@", 1)[1]
        netloc = f"{user}:{REDACTED}@{host}"
    query = parts.query
    if query:
        pairs = parse_qsl(query, keep_blank_values=True)
        query = urlencode([(k, REDACTED if _redact_key(k) else v) for k, v in pairs], safe="[]")
    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


def redact_for_log(obj: Any) -> Any:
    """Return a copy of obj safe for logging: sensitive keys replaced with '[REDACTED]', URLs scrubbed."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return {
            k: REDACTED if _redact_key(str(k)) else redact_for_log(v)
            for k, v in obj.items()
        }
    if isinstance(obj, (list, tuple)):
        return type(obj)(redact_for_log(x) for x in obj)
    if isinstance(obj, str):
        if _looks_like_secret(obj):
            return REDACTED
        if "://" in obj:
            return redact_url(obj)
    return obj


def _looks_like_secret(s: str) -> bool:
    """Heuristic: JWT-like or bearer token."""
    if len(s) > 64 and re.match(r"^[A-Za-z0-9_-]+\.([A-Za-z0-9_-]+)\.", s):
        return True  # JWT-like
    if s.lower().startswith("bearer "):
        return True
    return False
