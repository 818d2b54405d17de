"""Utilities module - Logging and secret redaction."""

from .redaction import mask_secret, redact_for_logging
from .logging import get_logger, RequestLogger

__all__ = [
    "mask_secret",
    "redact_for_logging",
    "get_logger",
    "RequestLogger",
]
