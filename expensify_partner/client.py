"""Expensify partner API clients."""

import time
from typing import Callable

import httpx

from expensify_partner.actions import Action, PreparedRequest, build_request, interpret_response
from expensify_partner.config import ExpensifySettings
from expensify_partner.errors import ExpensifyError, TransportFailure
from expensify_partner.models import (
    DistanceTransaction,
    ExpenseTransaction,
    PartnerRequest,
    ReceiptFetch,
    ReceiptUpload,
)
from expensify_partner.sso import build_authorize_url, generate_sso_token
from expensify_partner.utils.logging import RequestLogger

Callback = Callable[[ExpensifyError | None, str | None], None]


def _deliver(callback: Callback | None, outcome: Callable[[], str]) -> str | None:
    """Return or raise the outcome, or hand it to the callback instead."""
    if callback is None:
        return outcome()
    try:
        body = outcome()
    except ExpensifyError as e:
        callback(e, None)
    else:
        callback(None, body)
    return None


class _BaseClient:
    """Credentials, token and URL handling shared by both clients."""

    def __init__(
        self,
        settings: ExpensifySettings | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings or ExpensifySettings()
        self._clock = clock
        self._request_logger = RequestLogger(self.settings.log_level)

    def authenticate(self, user_secret: str | None) -> str:
        """Generate an SSO token for a partner user secret.

        Raises:
            ConfigurationMissing: If the secret or a credential is missing
            InvalidConfiguration: If the AES key or IV is malformed
        """
        return generate_sso_token(self.settings, user_secret, now=self._clock())

    def authorize_url(
        self,
        sso: str | None,
        partner_user_id: str | None,
        exit_to: str | None = None,
    ) -> str:
        """Build the URL that signs a user into Expensify."""
        return build_authorize_url(self.settings, sso, partner_user_id, exit_to)

    def _prepare(self, action: Action, request: PartnerRequest) -> PreparedRequest:
        try:
            prepared = build_request(self.settings, action, request)
        except ExpensifyError as e:
            self._request_logger.log_rejected(action.value, e)
            raise
        self._request_logger.log_request(action.value, prepared.url, prepared.form, prepared.files)
        return prepared

    def _finish(self, prepared: PreparedRequest, response: httpx.Response) -> str:
        self._request_logger.log_response(prepared.action.value, response.status_code, response.text)
        return interpret_response(prepared.action, response.status_code, response.text)

    def _transport_failure(self, prepared: PreparedRequest, error: httpx.RequestError) -> TransportFailure:
        self._request_logger.log_transport_error(prepared.action.value, error)
        return TransportFailure(f"{prepared.action.value} request failed: {error}")


class ExpensifyClient(_BaseClient):
    """Synchronous client over an httpx.Client.

    Submission methods return the raw response body, or raise an
    ExpensifyError. Passing ``callback`` delivers ``callback(error, body)``
    instead and returns None.
    """

    def __init__(
        self,
        settings: ExpensifySettings | None = None,
        http_client: httpx.Client | None = None,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(settings, clock)
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self.settings.timeout)

    def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> "ExpensifyClient":
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _submit(self, action: Action, request: PartnerRequest) -> str:
        prepared = self._prepare(action, request)
        try:
            response = self._http.post(prepared.url, data=prepared.form, files=prepared.files)
        except httpx.RequestError as e:
            raise self._transport_failure(prepared, e) from e
        return self._finish(prepared, response)

    def create_transaction(
        self, transaction: ExpenseTransaction, callback: Callback | None = None
    ) -> str | None:
        """Create an expense."""
        return _deliver(callback, lambda: self._submit(Action.CREATE_TRANSACTION, transaction))

    def create_distance_transaction(
        self, transaction: DistanceTransaction, callback: Callback | None = None
    ) -> str | None:
        """Create a mileage expense."""
        return _deliver(
            callback, lambda: self._submit(Action.CREATE_DISTANCE_TRANSACTION, transaction)
        )

    def upload_receipt(
        self, upload: ReceiptUpload, callback: Callback | None = None
    ) -> str | None:
        """Create an expense with a receipt file attached."""
        return _deliver(callback, lambda: self._submit(Action.UPLOAD_RECEIPT, upload))

    def fetch_receipt(
        self, fetch: ReceiptFetch, callback: Callback | None = None
    ) -> str | None:
        """Create an expense whose receipt Expensify downloads from a URL."""
        return _deliver(callback, lambda: self._submit(Action.FETCH_RECEIPT, fetch))


class AsyncExpensifyClient(_BaseClient):
    """Asynchronous client over an httpx.AsyncClient.

    Same surface as ExpensifyClient; the submission methods are coroutines.
    """

    def __init__(
        self,
        settings: ExpensifySettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(settings, clock)
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self.settings.timeout)

    async def aclose(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    async def __aenter__(self) -> "AsyncExpensifyClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def _submit(self, action: Action, request: PartnerRequest) -> str:
        prepared = self._prepare(action, request)
        try:
            response = await self._http.post(prepared.url, data=prepared.form, files=prepared.files)
        except httpx.RequestError as e:
            raise self._transport_failure(prepared, e) from e
        return self._finish(prepared, response)

    async def _deliver(self, callback: Callback | None, action: Action, request: PartnerRequest) -> str | None:
        if callback is None:
            return await self._submit(action, request)
        try:
            body = await self._submit(action, request)
        except ExpensifyError as e:
            callback(e, None)
        else:
            callback(None, body)
        return None

    async def create_transaction(
        self, transaction: ExpenseTransaction, callback: Callback | None = None
    ) -> str | None:
        """Create an expense."""
        return await self._deliver(callback, Action.CREATE_TRANSACTION, transaction)

    async def create_distance_transaction(
        self, transaction: DistanceTransaction, callback: Callback | None = None
    ) -> str | None:
        """Create a mileage expense."""
        return await self._deliver(callback, Action.CREATE_DISTANCE_TRANSACTION, transaction)

    async def upload_receipt(
        self, upload: ReceiptUpload, callback: Callback | None = None
    ) -> str | None:
        """Create an expense with a receipt file attached."""
        return await self._deliver(callback, Action.UPLOAD_RECEIPT, upload)

    async def fetch_receipt(
        self, fetch: ReceiptFetch, callback: Callback | None = None
    ) -> str | None:
        """Create an expense whose receipt Expensify downloads from a URL."""
        return await self._deliver(callback, Action.FETCH_RECEIPT, fetch)
