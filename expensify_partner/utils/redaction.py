"""Secret masking utilities."""

from typing import Any

# Form and payload keys that carry credentials.
SENSITIVE_FIELDS = {
    "sso",
    "partnerpassword",
    "partner_password",
    "partnerusersecret",
    "partner_user_secret",
    "user_secret",
    "aes_key",
    "aes_iv",
    "password",
    "secret",
    "token",
}


def mask_secret(value: str | None) -> str:
    """Mask a secret, showing only the last 4 characters."""
    if not value:
        return ""
    if len(value) <= 4:
        return "****"
    return f"****{value[-4:]}"


def redact_for_logging(data: dict) -> dict:
    """Redact sensitive fields from a dictionary for logging."""
    redacted = {}
    for key, value in data.items():
        if key.lower() in SENSITIVE_FIELDS:
            redacted[key] = mask_secret(value) if isinstance(value, str) else "[REDACTED]"
        elif isinstance(value, (bytes, bytearray)):
            redacted[key] = f"<{len(value)} bytes>"
        elif isinstance(value, dict):
            redacted[key] = redact_for_logging(value)
        elif isinstance(value, (list, tuple)):
            redacted[key] = [
                redact_for_logging(v) if isinstance(v, dict) else _describe(v)
                for v in value
            ]
        else:
            redacted[key] = value

    return redacted


def _describe(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    return value
