"""Request construction and response mapping for the partner API actions.

Everything here is pure: building a request reads only the settings and the
request model, and interpreting a response reads only its status and body.
The clients in ``expensify_partner.client`` do the I/O around these.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from expensify_partner.config import ExpensifySettings
from expensify_partner.errors import ArgumentMissing, ConfigurationMissing, RemoteFailure, SsoExpired
from expensify_partner.models import (
    DistanceTransaction,
    ExpenseTransaction,
    PartnerRequest,
    ReceiptFetch,
    ReceiptUpload,
)


class Action(str, Enum):
    """Partner API actions with their payload field and fallback error."""

    CREATE_TRANSACTION = "CreateTransaction"
    CREATE_DISTANCE_TRANSACTION = "CreateDistanceTransaction"
    UPLOAD_RECEIPT = "UploadReceipt"
    FETCH_RECEIPT = "FetchReceipt"

    @property
    def payload_field(self) -> str:
        return _PAYLOAD_FIELDS[self]

    @property
    def fallback_message(self) -> str:
        return _FALLBACK_MESSAGES[self]

    @property
    def request_type(self) -> type[PartnerRequest]:
        return _REQUEST_TYPES[self]


# Both create actions post under "distanceTransaction", which is what the
# partner endpoint has always been sent for them.
_PAYLOAD_FIELDS = {
    Action.CREATE_TRANSACTION: "distanceTransaction",
    Action.CREATE_DISTANCE_TRANSACTION: "distanceTransaction",
    Action.UPLOAD_RECEIPT: "transaction",
    Action.FETCH_RECEIPT: "transaction",
}

_FALLBACK_MESSAGES = {
    Action.CREATE_TRANSACTION: "Error creating expense",
    Action.CREATE_DISTANCE_TRANSACTION: "Error creating expense",
    Action.UPLOAD_RECEIPT: "Error uploading receipt",
    Action.FETCH_RECEIPT: "Error fetching receipt",
}

_REQUEST_TYPES: dict[Action, type[PartnerRequest]] = {
    Action.CREATE_TRANSACTION: ExpenseTransaction,
    Action.CREATE_DISTANCE_TRANSACTION: DistanceTransaction,
    Action.UPLOAD_RECEIPT: ReceiptUpload,
    Action.FETCH_RECEIPT: ReceiptFetch,
}


@dataclass(frozen=True)
class PreparedRequest:
    """A form post ready to hand to an HTTP transport."""

    action: Action
    url: str
    form: dict[str, str]
    files: dict[str, tuple[str, bytes, str]] | None = field(default=None)


def check_preconditions(settings: ExpensifySettings, request: PartnerRequest) -> None:
    """Raise if the SSO token, partner name or partner user id is missing."""
    if not request.sso:
        raise ArgumentMissing("No Expensify SSO available")
    if not settings.partner_name:
        raise ConfigurationMissing("No Expensify partner name provided")
    if not request.partner_user_id:
        raise ArgumentMissing("No partner user id provided")


def serialize_payload(payload: dict[str, Any]) -> str:
    """Minified JSON text for a nested transaction payload."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def build_request(
    settings: ExpensifySettings,
    action: Action,
    request: PartnerRequest,
) -> PreparedRequest:
    """Validate a request and lay it out as form fields.

    Raises:
        ArgumentMissing: If the SSO token or partner user id is empty
        ConfigurationMissing: If no partner name is configured
        TypeError: If the request model does not belong to the action
    """
    if not isinstance(request, action.request_type):
        raise TypeError(
            f"{action.value} expects {action.request_type.__name__}, "
            f"got {type(request).__name__}"
        )

    check_preconditions(settings, request)

    form: dict[str, Any] = {
        "action": action.value,
        action.payload_field: serialize_payload(request.transaction_payload()),
    }
    if isinstance(request, ReceiptFetch):
        form["receiptURL"] = request.receipt_url
    form["comment"] = request.comment
    form["sso"] = request.sso
    form["partnerName"] = settings.partner_name
    form["partnerUserID"] = request.partner_user_id

    files = None
    if isinstance(request, ReceiptUpload):
        files = {"file": (request.filename, request.file, request.content_type)}

    return PreparedRequest(
        action=action,
        url=f"{settings.api_url}?action={action.value}",
        form={key: value for key, value in form.items() if value is not None},
        files=files,
    )


def interpret_response(action: Action, status_code: int, body: str) -> str:
    """Map an HTTP status to the response body or an error.

    Returns:
        The raw body for 200

    Raises:
        SsoExpired: For 407
        RemoteFailure: For any other status, with the body (or the action's
            fallback message when the body is empty) as its message
    """
    if status_code == 200:
        return body
    if status_code == 407:
        raise SsoExpired()
    raise RemoteFailure(body or action.fallback_message, status_code=status_code, body=body)
