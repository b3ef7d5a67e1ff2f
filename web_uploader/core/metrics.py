"""Prometheus metrics: attach (policy) outcomes, transfers by backend, verification outcomes."""
from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST

ATTACH_TOTAL = Counter(
    "uploader_attach_total",
    "File attach attempts",
    ["result"],  # accepted | disallowed_type | too_large
)
TRANSFER_TOTAL = Counter(
    "uploader_transfer_total",
    "Transfers by backend",
    ["backend", "result"],  # success | failure
)
VERIFICATION_TOTAL = Counter(
    "uploader_verification_total",
    "Post-transfer verifications",
    ["result"],  # success | not_found | size_mismatch | type_mismatch
)


def record_attach(result: str) -> None:
    ATTACH_TOTAL.labels(result=result).inc()


def record_transfer(backend: str, success: bool) -> None:
    TRANSFER_TOTAL.labels(backend=backend, result="success" if success else "failure").inc()


def record_verification(result: str) -> None:
    VERIFICATION_TOTAL.labels(result=result).inc()


def get_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
