"""Shared fixtures for the client tests."""

from urllib.parse import parse_qs

import httpx
import pytest

from expensify_partner.config import ExpensifySettings

TEST_KEY = "000102030405060708090a0b0c0d0e0f101112131415161718191a1b1c1d1e1f"
TEST_IV = "0f0e0d0c0b0a09080706050403020100"
TEST_API_URL = "https://expensify.test/api/v1/"
FIXED_NOW = 1_700_000_000


def make_settings(**overrides) -> ExpensifySettings:
    """Settings that ignore the environment and any .env file."""
    fields = {
        "partner_password": "partner-pass",
        "partner_name": "acme",
        "aes_key": TEST_KEY,
        "aes_iv": TEST_IV,
        "api_url": TEST_API_URL,
    }
    fields.update(overrides)
    return ExpensifySettings(_env_file=None, **fields)


class RecordingTransport(httpx.MockTransport):
    """Mock transport that answers with a fixed response and keeps every request."""

    def __init__(self, status_code: int = 200, text: str = "", error: Exception | None = None):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.text = text
        self.error = error
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.text)

    def form(self, index: int = 0) -> dict[str, str]:
        """Decode a recorded urlencoded body into single values."""
        parsed = parse_qs(self.requests[index].content.decode("utf-8"), keep_blank_values=True)
        return {key: values[0] for key, values in parsed.items()}


@pytest.fixture
def settings() -> ExpensifySettings:
    """Settings with the test credentials."""
    return make_settings()


@pytest.fixture
def clock():
    """A clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW
