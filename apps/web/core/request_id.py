"""Request id propagation for log records."""

import logging
import secrets
from contextvars import ContextVar

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def generate_request_id() -> str:
    """Short random id, prefixed to tell server-issued ids apart."""
    return f"be-{secrets.token_hex(6)}"


class RequestIDFilter(logging.Filter):
    """Stamp the current request id on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True
