"""Exceptions raised by the Expensify partner client."""


class ExpensifyError(Exception):
    """Base class for every error surfaced by the client."""
    pass


class ConfigurationMissing(ExpensifyError):
    """Raised when a required partner credential is absent."""
    pass


class InvalidConfiguration(ExpensifyError):
    """Raised when the AES key or IV cannot be used."""
    pass


class ArgumentMissing(ExpensifyError):
    """Raised when a required per-call field is absent."""
    pass


class SsoExpired(ExpensifyError):
    """Raised when Expensify answers 407 (the SSO token is no longer valid)."""

    def __init__(self, message: str = "Expensify sso expired"):
        super().__init__(message)


class RemoteFailure(ExpensifyError):
    """Raised for any response that is neither 200 nor 407."""

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportFailure(ExpensifyError):
    """Raised when the request never produced an HTTP response."""
    pass
