"""SSO payload model."""

import json

from pydantic import BaseModel, ConfigDict, Field

SSO_LIFETIME_SECONDS = 60 * 30


class SsoPayload(BaseModel):
    """The record encrypted into an SSO token."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    expires: int = Field(description="Unix timestamp after which the token is rejected")
    partner_password: str = Field(alias="partnerPassword")
    partner_user_secret: str = Field(alias="partnerUserSecret", repr=False)

    @classmethod
    def issue(cls, partner_password: str, user_secret: str, now: float) -> "SsoPayload":
        """Build a payload that expires 30 minutes after ``now``."""
        return cls(
            expires=int(now) + SSO_LIFETIME_SECONDS,
            partner_password=partner_password,
            partner_user_secret=user_secret,
        )

    def to_text(self) -> str:
        """Canonical minified JSON: expires, partnerPassword, partnerUserSecret."""
        return json.dumps(
            self.model_dump(by_alias=True),
            separators=(",", ":"),
            ensure_ascii=False,
        )
