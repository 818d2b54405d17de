"""SSO token generation and authorization URL construction."""

import json
import time

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from expensify_partner.config import ExpensifySettings
from expensify_partner.errors import ArgumentMissing, ConfigurationMissing, InvalidConfiguration
from expensify_partner.models.sso import SsoPayload

AES_KEY_BYTES = 32
AES_IV_BYTES = 16


def _decode_hex(value: str, name: str, expected_length: int) -> bytes:
    try:
        raw = bytes.fromhex(value)
    except ValueError as e:
        raise InvalidConfiguration(f"Expensify AES {name} is not valid hex") from e
    if len(raw) != expected_length:
        raise InvalidConfiguration(
            f"Expensify AES {name} must be {expected_length} bytes, got {len(raw)}"
        )
    return raw


def _cipher(settings: ExpensifySettings) -> Cipher:
    """AES-256-CBC cipher for the configured key and IV."""
    if not settings.aes_key:
        raise ConfigurationMissing("No Expensify AES key provided")
    if not settings.aes_iv:
        raise ConfigurationMissing("No Expensify AES IV provided")

    key = _decode_hex(settings.aes_key, "key", AES_KEY_BYTES)
    iv = _decode_hex(settings.aes_iv, "IV", AES_IV_BYTES)
    return Cipher(algorithms.AES(key), modes.CBC(iv))


def generate_sso_token(
    settings: ExpensifySettings,
    user_secret: str | None,
    now: float | None = None,
) -> str:
    """Encrypt a 30-minute SSO payload for a partner user.

    Args:
        settings: Partner credentials
        user_secret: The Expensify partner user secret
        now: Unix time to issue the token at (defaults to the current time)

    Returns:
        Lowercase hex ciphertext of the payload

    Raises:
        ConfigurationMissing: If the user secret, partner password, AES key or IV is empty
        InvalidConfiguration: If the AES key or IV is malformed
    """
    if not user_secret:
        raise ConfigurationMissing("No Expensify user secret provided")
    if not settings.partner_password:
        raise ConfigurationMissing("No Expensify partner password provided")

    cipher = _cipher(settings)
    payload = SsoPayload.issue(
        settings.partner_password,
        user_secret,
        time.time() if now is None else now,
    )

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    plaintext = padder.update(payload.to_text().encode("utf-8")) + padder.finalize()

    encryptor = cipher.encryptor()
    ciphertext = encryptor.update(plaintext) + encryptor.finalize()
    return ciphertext.hex()


def decrypt_sso_token(settings: ExpensifySettings, token: str) -> SsoPayload:
    """Decrypt a token produced by generate_sso_token."""
    cipher = _cipher(settings)
    try:
        ciphertext = bytes.fromhex(token)
        decryptor = cipher.decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
        return SsoPayload.model_validate(json.loads(plaintext.decode("utf-8")))
    except ValueError as e:
        raise InvalidConfiguration(f"SSO token could not be decrypted: {e}") from e


def build_authorize_url(
    settings: ExpensifySettings,
    sso: str | None,
    partner_user_id: str | None,
    exit_to: str | None = None,
) -> str:
    """Build the Auth redirect URL.

    Values are concatenated as given; callers pre-encode anything that
    contains reserved URL characters.
    """
    if not sso:
        raise ArgumentMissing("No Expensify SSO available")
    if not settings.partner_name:
        raise ConfigurationMissing("No Expensify partner name provided")
    if not partner_user_id:
        raise ArgumentMissing("No partner user id provided")

    url = settings.api_url
    url += "?action=Auth&sso=" + sso
    url += "&partnerName=" + settings.partner_name
    url += "&partnerUserID=" + partner_user_id

    if exit_to:
        url += "&exitTo=" + exit_to

    return url
