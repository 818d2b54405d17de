"""Client for the Expensify partner API."""

from .client import AsyncExpensifyClient, ExpensifyClient
from .config import ExpensifySettings
from .errors import (
    ArgumentMissing,
    ConfigurationMissing,
    ExpensifyError,
    InvalidConfiguration,
    RemoteFailure,
    SsoExpired,
    TransportFailure,
)
from .models import DistanceTransaction, ExpenseTransaction, ReceiptFetch, ReceiptUpload

__all__ = [
    "ExpensifyClient",
    "AsyncExpensifyClient",
    "ExpensifySettings",
    "ExpensifyError",
    "ConfigurationMissing",
    "InvalidConfiguration",
    "ArgumentMissing",
    "SsoExpired",
    "RemoteFailure",
    "TransportFailure",
    "ExpenseTransaction",
    "DistanceTransaction",
    "ReceiptUpload",
    "ReceiptFetch",
]
