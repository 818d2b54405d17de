"""Models module - Pydantic request models."""

from .sso import SsoPayload, SSO_LIFETIME_SECONDS
from .transaction import (
    PartnerRequest,
    ExpenseTransaction,
    DistanceTransaction,
    ReceiptUpload,
    ReceiptFetch,
)

__all__ = [
    "SsoPayload",
    "SSO_LIFETIME_SECONDS",
    "PartnerRequest",
    "ExpenseTransaction",
    "DistanceTransaction",
    "ReceiptUpload",
    "ReceiptFetch",
]
