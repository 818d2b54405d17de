"""Transaction request models."""

from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def _date_text(value: date | str) -> str:
    """Render a creation date as YYYY-MM-DD."""
    return value.isoformat() if isinstance(value, date) else value


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    """Remove keys whose value is None, keeping insertion order."""
    return {key: value for key, value in payload.items() if value is not None}


class PartnerRequest(BaseModel, ABC):
    """Fields every partner API call carries alongside its transaction."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    sso: str | None = Field(default=None, description="Expensify SSO token")
    partner_user_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("partner_user_id", "partnerUserId", "partnerUserID"),
        description="Partner user ID",
    )
    comment: str | None = Field(default=None, description="Transaction comment")

    @abstractmethod
    def transaction_payload(self) -> dict[str, Any]:
        """Nested record serialized into the form body."""


class ExpenseTransaction(PartnerRequest):
    """An expense entry, e.g. a purchase at a merchant."""

    created: date | str = Field(description="Date of the transaction")
    merchant: str | None = Field(default=None, description="Merchant name")
    amount: int | None = Field(
        default=None, description="Amount in minor currency units (cents)"
    )
    currency: str | None = Field(default=None, description="ISO 4217 currency code")

    def transaction_payload(self) -> dict[str, Any]:
        return _drop_none({
            "created": _date_text(self.created),
            "merchant": self.merchant,
            "amount": self.amount,
            "currency": self.currency,
        })


class DistanceTransaction(PartnerRequest):
    """A mileage entry."""

    created: date | str = Field(description="Date of the trip")
    distance: float = Field(allow_inf_nan=False, description="Distance travelled")
    units: Literal["Mi", "Km"] = Field(default="Mi", description="Distance units")

    def transaction_payload(self) -> dict[str, Any]:
        return {
            "created": _date_text(self.created),
            "distance": int(self.distance) if self.distance.is_integer() else self.distance,
            "units": self.units,
        }


class ReceiptUpload(ExpenseTransaction):
    """An expense with a receipt image or PDF attached."""

    file: bytes = Field(repr=False, description="Receipt file contents")
    filename: str = Field(description="Name sent with the multipart file part")
    content_type: str = Field(
        default="application/octet-stream", description="MIME type of the receipt"
    )

    @classmethod
    def from_path(cls, path: Path | str, **fields: Any) -> "ReceiptUpload":
        """Build an upload from a file on disk."""
        path = Path(path)
        fields.setdefault("filename", path.name)
        return cls(file=path.read_bytes(), **fields)


class ReceiptFetch(ExpenseTransaction):
    """An expense whose receipt Expensify downloads from a remote location."""

    receipt_url: str = Field(
        validation_alias=AliasChoices("receipt_url", "receiptURL", "receiptUrl"),
        description="Location of the receipt image",
    )
