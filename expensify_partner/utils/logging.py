"""Logging helpers with secret redaction."""

import itertools
import logging
import sys
from typing import Any

from expensify_partner.utils.redaction import redact_for_logging

REQUEST_LOGGER_NAME = "expensify_partner.requests"

_request_logger_ids = itertools.count(1)


def get_logger(name: str, level: str | None = "INFO") -> logging.Logger:
    """Get a configured logger instance.

    Passing ``level=None`` attaches the handler without touching the level.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if level is not None:
        logger.setLevel(getattr(logging, level.upper()))
    return logger


class RequestLogger:
    """Logs partner API calls without leaking credentials.

    Each instance writes through its own child of ``expensify_partner.requests``
    so one client's level never changes another's. Records propagate to the
    handler on the shared parent.
    """

    def __init__(self, level: str = "INFO"):
        get_logger(REQUEST_LOGGER_NAME, level=None)
        self._logger = logging.getLogger(f"{REQUEST_LOGGER_NAME}.{next(_request_logger_ids)}")
        self._logger.setLevel(getattr(logging, level.upper()))

    def log_request(self, action: str, url: str, form: dict[str, Any], files: dict | None = None):
        """Log an outbound form post."""
        self._logger.debug(
            f"POST {url} action={action} form={redact_for_logging(form)}"
            + (f" files={redact_for_logging(files)}" if files else "")
        )

    def log_response(self, action: str, status_code: int, body: str):
        """Log the response to a form post."""
        if status_code == 200:
            self._logger.debug(f"{action} succeeded (length: {len(body)})")
        elif status_code == 407:
            self._logger.warning(f"{action} rejected: Expensify sso expired")
        else:
            self._logger.error(f"{action} failed with status {status_code}: {body}")

    def log_transport_error(self, action: str, error: Exception):
        """Log a request that never produced a response."""
        self._logger.error(f"{action} transport error: {error}")

    def log_rejected(self, action: str, error: Exception):
        """Log a call stopped before any network activity."""
        self._logger.warning(f"{action} not sent: {error}")
