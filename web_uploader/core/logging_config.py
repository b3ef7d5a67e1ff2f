"""Logging setup and one-line structured events. Optional JSON output for log shippers (CloudWatch, etc.)."""
import json
import logging
from typing import Any

from web_uploader.core.config import get_settings
from web_uploader.core.logging_redaction import redact_for_log

ROOT_LOGGER = "web_uploader"


def configure_logging(level: str | None = None, json_lines: bool | None = None) -> logging.Logger:
    """Install a single stream handler on the web_uploader logger. Safe to call more than once."""
    settings = get_settings()
    if json_lines is None:
        json_lines = settings.log_json
    logger = logging.getLogger(ROOT_LOGGER)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    h = logging.StreamHandler()
    if json_lines:
        h.setFormatter(logging.Formatter("%(message)s"))
    else:
        h.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(h)
    logger.setLevel((level or settings.log_level).upper())
    return logger


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Log one structured line; fields are redacted before they reach any handler."""
    extra = redact_for_log(fields)
    if get_settings().log_json:
        logger.log(level, json.dumps({"event": event, **extra}, default=str))
    else:
        rendered = " ".join(f"{k}={v}" for k, v in extra.items())
        logger.log(level, "%s %s", event, rendered, extra={"event_fields": extra})
