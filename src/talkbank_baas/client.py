"""HTTP client for the partner BaaS API."""

from __future__ import annotations

import asyncio
import json
import ssl
import warnings
from collections.abc import Callable, Coroutine, Mapping
from datetime import date, datetime, timezone
from typing import Any
from urllib.parse import quote, urljoin

import aiohttp
from yarl import URL

from talkbank_baas import models
from talkbank_baas.common.errors import (
    ConfigurationError,
    EncodingError,
    HttpStatusError,
    TransportError,
)
from talkbank_baas.common.logging import get_logger
from talkbank_baas.common.settings import Settings, get_settings
from talkbank_baas.signing import (
    Credential,
    RequestSpec,
    SignedRequest,
    serialize_body,
    sign_request,
)

logger = get_logger(__name__)

# (filename, content, content type)
UploadFile = tuple[str, bytes, str | None]


def decode_payload(payload: bytes) -> Any:
    """
    Decode a successful response payload.

    JSON documents (first byte ``{`` or ``[``) are parsed; anything else is
    passed through as text, or as bytes when it is not valid UTF-8.
    """
    if payload[:1] in (b"{", b"["):
        try:
            return json.loads(payload)
        except ValueError as e:
            raise EncodingError(f"Malformed JSON response: {e}") from e
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError:
        return payload


def _segment(value: Any) -> str:
    """Percent-encode one path segment so the signed and sent paths match."""
    return quote(str(value), safe="")


def _iso(value: datetime | date | str) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc).isoformat()
    return value


def _deprecated_alias(
    replacement: str,
) -> Callable[..., Coroutine[Any, Any, Any]]:
    async def alias(self: BaasClient, *args: Any, **kwargs: Any) -> Any:
        warnings.warn(
            f"use BaasClient.{replacement}() instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return await getattr(self, replacement)(*args, **kwargs)

    alias.__doc__ = f"Deprecated alias of :meth:`BaasClient.{replacement}`."
    return alias


class BaasClient:
    """
    Client for the partner BaaS API.

    Every call except the ``unsigned_*`` client-side ones is signed with
    TB1-HMAC-SHA256. The credential is fixed for the lifetime of a client;
    use :meth:`with_credential` to rotate it.
    """

    def __init__(
        self,
        base_url: str,
        credential: Credential,
        timeout: float = 30.0,
        ssl_context: ssl.SSLContext | bool | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL, request paths are appended to it verbatim
            credential: Partner id and shared secret
            timeout: Total request timeout in seconds
            ssl_context: TLS context, ``False`` to disable verification
        """
        self._base_url = base_url
        self._credential = credential
        self._timeout_seconds = timeout
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._ssl = ssl_context
        self._session: aiohttp.ClientSession | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "BaasClient":
        """Build a client from settings (environment by default)."""
        settings = settings or get_settings()
        if not settings.partner_id or not settings.token:
            raise ConfigurationError("partner_id and token must be configured")

        ssl_context: ssl.SSLContext | bool | None = None
        if settings.tls_insecure:
            ssl_context = False
        elif settings.tls_ca_cert:
            ssl_context = ssl.create_default_context(cafile=settings.tls_ca_cert)

        return cls(
            settings.base_url,
            Credential(partner_id=settings.partner_id, token=settings.token),
            timeout=settings.http_timeout,
            ssl_context=ssl_context,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def credential(self) -> Credential:
        return self._credential

    def with_credential(self, credential: Credential) -> "BaasClient":
        """Return a new client signing with ``credential``; this one is unchanged."""
        return type(self)(
            self._base_url,
            credential,
            timeout=self._timeout_seconds,
            ssl_context=self._ssl,
        )

    async def __aenter__(self) -> "BaasClient":
        """Enter async context."""
        self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        await self.close()

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session exists."""
        if not self._session:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    # === Execution ===

    async def _send(
        self,
        method: str,
        url: URL,
        **kwargs: Any,
    ) -> tuple[int, bytes]:
        """
        Dispatch one HTTP request and read the whole payload.

        Raises:
            TransportError: On network, TLS or timeout failure
        """
        session = self._ensure_session()
        if self._ssl is not None:
            kwargs["ssl"] = self._ssl

        try:
            response = await session.request(method, url, **kwargs)
            async with response:
                payload = await response.read()
                return response.status, payload
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("Transport failure", method=method, url=str(url), error=str(e))
            raise TransportError(f"Request failed: {e!r}") from e

    def _result(self, method: str, path: str, status: int, payload: bytes) -> Any:
        if not 200 <= status < 300:
            body = payload.decode("utf-8", errors="replace")
            logger.warning("Request rejected", method=method, path=path, status=status)
            logger.debug("Rejected response body", status=status, body=body)
            raise HttpStatusError(status, body, method, path)
        return decode_payload(payload)

    def sign(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        now: datetime | None = None,
    ) -> SignedRequest:
        """Sign a request with this client's credential without sending it."""
        spec = RequestSpec(method=method.upper(), path=path, query=query or {}, body=body)
        return sign_request(spec, self._credential, self._base_url, now)

    async def request(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Execute a signed JSON request.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            query: Query parameters
            body: JSON body parameters, an empty mapping sends no body

        Returns:
            Decoded JSON, or the raw payload for non-JSON responses

        Raises:
            HttpStatusError: Non-2xx response
            TransportError: Network failure
            EncodingError: Body not serializable or malformed JSON response
        """
        signed = self.sign(method, path, query, body)
        logger.debug("Signed request", method=signed.canonical.method, path=signed.canonical.path)

        status, payload = await self._send(
            signed.canonical.method,
            URL(signed.url, encoded=True),
            data=signed.body.encode("utf-8"),
            headers=signed.headers,
        )
        return self._result(signed.canonical.method, signed.canonical.path, status, payload)

    async def request_multipart(
        self,
        method: str,
        path: str,
        fields: Mapping[str, Any] | None = None,
        files: Mapping[str, UploadFile] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Execute a signed multipart request.

        Only JSON bodies are covered by the signature: the content hash is
        taken over an empty body whatever the multipart payload is.
        """
        signed = self.sign(method, path, query)
        headers = {name: value for name, value in signed.headers.items() if name != "Content-Type"}

        form = aiohttp.FormData()
        for name, value in (fields or {}).items():
            if value is not None:
                form.add_field(name, str(value))
        for name, (filename, content, content_type) in (files or {}).items():
            form.add_field(name, content, filename=filename, content_type=content_type)

        logger.debug(
            "Signed multipart request",
            method=signed.canonical.method,
            path=signed.canonical.path,
            files=sorted(files or {}),
        )
        status, payload = await self._send(
            signed.canonical.method,
            URL(signed.url, encoded=True),
            data=form,
            headers=headers,
        )
        return self._result(signed.canonical.method, signed.canonical.path, status, payload)

    async def request_unsigned(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        """Execute a client-side call; ``path`` is resolved against the host of the base URL."""
        url = urljoin(self._base_url, path)
        status, payload = await self._send(
            method.upper(),
            URL(url),
            data=serialize_body(body).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
        return self._result(method.upper(), path, status, payload)

    # === Account ===

    async def account_balance(self) -> Any:
        """Get account balance."""
        return await self.request("GET", "balance")

    async def account_transactions(self) -> Any:
        """Get account history."""
        return await self.request("GET", "transactions")

    async def account_cards_transactions(
        self,
        from_date: datetime | date | str,
        to_date: datetime | date | str,
        page: int = 1,
        limit: int = 1000,
    ) -> Any:
        """
        Get transactions for all partner's cards.

        Args:
            from_date: Period start, ISO-8601 strings are passed as-is
            to_date: Period end
            page: Page number
            limit: Page size
        """
        return await self.request(
            "GET",
            "cards-transactions",
            query={
                "fromDate": _iso(from_date),
                "toDate": _iso(to_date),
                "page": page,
                "limit": limit,
            },
        )

    # === Cards ===

    async def card_list(self, client_id: str) -> Any:
        return await self.request("GET", f"clients/{_segment(client_id)}/cards")

    async def card_details(self, client_id: str, barcode: str) -> Any:
        return await self.request("GET", f"clients/{_segment(client_id)}/cards/{_segment(barcode)}")

    async def card_order_status(self, client_id: str, barcode: str, order_id: str) -> Any:
        """Get direct transaction's status, alias of ``payment_status`` scoped to a card."""
        return await self.request(
            "GET",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/{_segment(order_id)}",
        )

    async def card_balance(self, client_id: str, barcode: str) -> Any:
        return await self.request(
            "GET",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/balance",
        )

    async def card_lock_status(self, client_id: str, barcode: str) -> Any:
        return await self.request(
            "GET",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/lock",
        )

    async def card_lock(self, client_id: str, barcode: str, reason: str | None = None) -> Any:
        """Block the card."""
        return await self.request(
            "POST",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/lock",
            body=models.CardLock(reason=reason).to_body(),
        )

    async def card_unlock(self, client_id: str, barcode: str) -> Any:
        """Unblock the card."""
        return await self.request(
            "DELETE",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/lock",
        )

    async def card_activate_virtual(self, client_id: str) -> Any:
        """Issue a virtual card."""
        return await self.request("POST", f"clients/{_segment(client_id)}/virtual-cards")

    async def card_activate(self, client_id: str, barcode: str, type: str | None = None) -> Any:
        return await self.request(
            "POST",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/activate",
            body=models.CardActivate(type=type).to_body(),
        )

    async def card_activation(self, client_id: str, barcode: str) -> Any:
        """Get card activation status."""
        return await self.request(
            "GET",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/activation",
        )

    async def card_cvv(self, client_id: str, barcode: str) -> Any:
        """Send the CVV to the client's phone."""
        return await self.request(
            "GET",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/security-code",
        )

    async def card_cardholder_data(self, client_id: str, barcode: str) -> Any:
        return await self.request(
            "GET",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/cardholder/data",
        )

    async def card_limits(self, client_id: str, barcode: str) -> Any:
        return await self.request(
            "GET",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/limits",
        )

    async def card_set_pin(self, client_id: str, barcode: str, pin_code: str) -> Any:
        return await self.request(
            "POST",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/set/pin",
            body={"pin": pin_code},
        )

    async def card_transactions(
        self,
        client_id: str,
        barcode: str,
        from_date: datetime | date | str,
        to_date: datetime | date | str,
        page: int = 1,
        limit: int = 1000,
    ) -> Any:
        """Get card history."""
        return await self.request(
            "GET",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/transactions",
            query={
                "fromDate": _iso(from_date),
                "toDate": _iso(to_date),
                "page": page,
                "limit": limit,
            },
        )

    async def card_refill(
        self,
        client_id: str,
        barcode: str,
        amount: float,
        order_id: str | None = None,
    ) -> Any:
        """Refill card from account."""
        return await self.request(
            "POST",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/refill",
            body=models.CardMoney(amount=amount, order_id=order_id).to_body(),
        )

    async def card_withdrawal(
        self,
        client_id: str,
        barcode: str,
        amount: float,
        order_id: str | None = None,
    ) -> Any:
        """Withdraw money from the card to the account."""
        return await self.request(
            "POST",
            f"clients/{_segment(client_id)}/cards/{_segment(barcode)}/withdrawal",
            body=models.CardMoney(amount=amount, order_id=order_id).to_body(),
        )

    # === Card deliveries ===

    async def card_delivery_store(self, client_id: str, params: Mapping[str, Any]) -> Any:
        """Order card delivery; ``params`` is the delivery document as the API defines it."""
        return await self.request(
            "POST",
            f"clients/{_segment(client_id)}/card-deliveries",
            body=params,
        )

    async def card_delivery_show(self, client_id: str, delivery_id: str) -> Any:
        return await self.request(
            "GET",
            f"clients/{_segment(client_id)}/card-deliveries/{_segment(delivery_id)}",
        )

    # === Event subscriptions ===

    async def event_subscription_list(self) -> Any:
        return await self.request("GET", "event-subscriptions")

    async def event_subscription_store(self, url: str, events: list[str] | None = None) -> Any:
        """Subscribe ``url`` to callbacks; an empty event list subscribes to all events."""
        return await self.request(
            "POST",
            "event-subscriptions",
            body={"url": url, "events": list(events or [])},
        )

    async def event_subscription_remove(self, subscription_id: str) -> Any:
        return await self.request("DELETE", f"event-subscriptions/{_segment(subscription_id)}")

    # === Holds ===

    async def hold(
        self,
        amount: int | None = None,
        order_slug: str | None = None,
        card_info: dict[str, Any] | None = None,
        card_ref_id: str | None = None,
        redirect_url: str | None = None,
    ) -> Any:
        """
        Hold money on a registered or unregistered card.

        Args:
            amount: Amount in minor units
            order_slug: Partner order id
            card_info: Card data for an unregistered card
            card_ref_id: Reference of a registered card
            redirect_url: Where to return after 3-D Secure
        """
        body = models.Hold(
            amount=amount,
            order_slug=order_slug,
            card_info=card_info,
            card_ref_id=card_ref_id,
            redirect_url=redirect_url,
        )
        return await self.request("POST", "hold", body=body.to_body())

    async def hold_with_form(
        self,
        client_id: str,
        redirect_url: str,
        amount: int,
        order_slug: str | None = None,
        card_token: str | None = None,
    ) -> Any:
        """Hold money through the payment form."""
        body = models.HoldWithForm(
            redirect_url=redirect_url,
            amount=amount,
            order_slug=order_slug,
            card_token=card_token,
        )
        return await self.request(
            "POST",
            f"hold/{_segment(client_id)}/with/form",
            body=body.to_body(),
        )

    async def hold_confirm(self, order_slug: str, amount: int | None = None) -> Any:
        """Confirm a hold, partially when ``amount`` is given."""
        return await self.request(
            "POST",
            f"hold/confirm/{_segment(order_slug)}",
            body=models.HoldAmount(amount=amount).to_body(),
        )

    async def hold_reverse(self, order_slug: str, amount: int | None = None) -> Any:
        """Reverse a hold, partially when ``amount`` is given."""
        return await self.request(
            "POST",
            f"hold/reverse/{_segment(order_slug)}",
            body=models.HoldAmount(amount=amount).to_body(),
        )

    # === Payments ===

    async def payment_from_unregistered_card(
        self,
        client_id: str,
        amount: int,
        card_info: dict[str, Any],
        redirect_url: str | None = None,
        order_slug: str | None = None,
    ) -> Any:
        """Charge an unregistered card to the account."""
        body = models.PaymentFromUnregisteredCard(
            amount=amount,
            card_info=card_info,
            redirect_url=redirect_url,
            order_slug=order_slug,
        )
        return await self.request(
            "POST",
            f"charge/{_segment(client_id)}/unregistered/card",
            body=body.to_body(),
        )

    async def payment_from_unregistered_card_token(
        self,
        client_id: str,
        redirect_url: str,
        amount: int,
    ) -> Any:
        """Create a token for a client-side charge."""
        return await self.request(
            "POST",
            f"charge/{_segment(client_id)}/token",
            body={"redirect_url": redirect_url, "amount": amount},
        )

    async def payment_from_unregistered_card_with_form(
        self,
        client_id: str,
        amount: int,
        order_slug: str | None = None,
        redirect_url: str | None = None,
    ) -> Any:
        body = models.PaymentWithForm(amount=amount, order_slug=order_slug, redirect_url=redirect_url)
        return await self.request(
            "POST",
            f"charge/{_segment(client_id)}/unregistered/card/with/form",
            body=body.to_body(),
        )

    async def payment_from_registered_card(
        self,
        client_id: str,
        amount: int,
        card_token: str,
        order_slug: str | None = None,
    ) -> Any:
        """Charge a registered card without 3-D Secure."""
        body = models.PaymentFromRegisteredCard(
            amount=amount,
            card_token=card_token,
            order_slug=order_slug,
        )
        return await self.request(
            "POST",
            f"payment/from/{_segment(client_id)}/registered/card",
            body=body.to_body(),
        )

    async def payment_to_unregistered_card_token(
        self,
        client_id: str,
        amount: int,
        order_slug: str | None = None,
    ) -> Any:
        body = models.PaymentToken(amount=amount, order_slug=order_slug)
        return await self.request(
            "POST",
            f"refill/{_segment(client_id)}/token",
            body=body.to_body(),
        )

    async def payment_to_unregistered_card(
        self,
        card_number: str,
        amount: int | None = None,
        order_slug: str | None = None,
    ) -> Any:
        """Refill a card by its number."""
        body = models.PaymentToUnregisteredCard(
            card_number=card_number,
            amount=amount,
            order_slug=order_slug,
        )
        return await self.request("POST", "refill/unregistered/card", body=body.to_body())

    async def payment_to_unregistered_card_with_form(
        self,
        client_id: str,
        amount: int,
        order_slug: str | None = None,
        redirect_url: str | None = None,
    ) -> Any:
        body = models.PaymentWithForm(amount=amount, order_slug=order_slug, redirect_url=redirect_url)
        return await self.request(
            "POST",
            f"refill/{_segment(client_id)}/unregistered/card/with/form",
            body=body.to_body(),
        )

    async def payment_to_registered_card(
        self,
        client_id: str,
        card_token: str,
        amount: int,
        order_slug: str | None = None,
    ) -> Any:
        body = models.PaymentToRegisteredCard(
            card_token=card_token,
            amount=amount,
            order_slug=order_slug,
        )
        return await self.request(
            "POST",
            f"payment/to/{_segment(client_id)}/registered/card",
            body=body.to_body(),
        )

    async def payment_to_account(
        self,
        amount: int,
        account: str,
        bik: str,
        name: str,
        inn: str | None = None,
        description: str | None = None,
        order_slug: str | None = None,
    ) -> Any:
        """
        Transfer money to a bank account.

        Args:
            amount: Amount in minor units
            account: Beneficiary account number
            bik: Beneficiary bank BIK
            name: Beneficiary name
            inn: Beneficiary INN
            description: Payment purpose
            order_slug: Partner order id
        """
        body = models.PaymentToAccount(
            amount=amount,
            account=account,
            bik=bik,
            name=name,
            inn=inn,
            description=description,
            order_slug=order_slug,
        )
        return await self.request("POST", "account/transfer", body=body.to_body())

    async def payment_authorization(
        self,
        client_id: str,
        card_info: dict[str, Any],
        redirect_url: str | None = None,
    ) -> Any:
        """Authorize (register) a card."""
        body = models.PaymentAuthorization(card_info=card_info, redirect_url=redirect_url)
        return await self.request(
            "POST",
            f"authorize/card/{_segment(client_id)}",
            body=body.to_body(),
        )

    async def payment_authorization_token(
        self,
        client_id: str,
        redirect_url: str | None = None,
    ) -> Any:
        """Get a token for client-side card authorization."""
        body = models.PaymentAuthorization(redirect_url=redirect_url)
        return await self.request(
            "POST",
            f"authorize/card/{_segment(client_id)}/token",
            body=body.to_body(),
        )

    async def payment_authorization_with_form(
        self,
        client_id: str,
        redirect_url: str | None = None,
        order_slug: str | None = None,
    ) -> Any:
        body = models.PaymentAuthorization(redirect_url=redirect_url, order_slug=order_slug)
        return await self.request(
            "POST",
            f"authorize/card/{_segment(client_id)}/with/form",
            body=body.to_body(),
        )

    async def payment_status(self, order_slug: str) -> Any:
        """Get direct payment status."""
        return await self.request("GET", f"payment/{_segment(order_slug)}")

    async def charge_unregistered_card_status(self, order_id: str) -> Any:
        return await self.request("GET", f"charge/unregistered/card/{_segment(order_id)}")

    # === Clients ===

    async def client_store(self, client_id: str, person: Mapping[str, Any]) -> Any:
        """Create the client."""
        return await self.request(
            "POST",
            "clients",
            body={"client_id": client_id, "person": dict(person)},
        )

    async def client_edit(self, client_id: str, person: Mapping[str, Any]) -> Any:
        return await self.request(
            "PUT",
            f"clients/{_segment(client_id)}",
            body={"client_id": client_id, "person": dict(person)},
        )

    async def client_show(self, client_id: str) -> Any:
        """Get client's status."""
        return await self.request("GET", f"clients/{_segment(client_id)}")

    async def client_pdf(self, client_id: str) -> Any:
        """Get the identification PDF of a client; returned raw."""
        return await self.request("GET", f"clients/{_segment(client_id)}/pdf")

    async def client_document_upload(
        self,
        client_id: str,
        document_type: str,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> Any:
        """
        Upload an identity document scan for a client.

        Args:
            client_id: Client identifier
            document_type: Document kind as the API names it (e.g. ``passport``)
            filename: File name reported to the server
            content: File content
            content_type: MIME type of the file
        """
        return await self.request_multipart(
            "POST",
            f"clients/{_segment(client_id)}/documents",
            fields={"type": document_type},
            files={"file": (filename, content, content_type)},
        )

    # === Self-employment ===

    async def selfemployments_registration_status(self, client_id: str) -> Any:
        return await self.request("GET", f"selfemployments/{_segment(client_id)}")

    async def selfemployments_register(self, client_id: str, inn: str) -> Any:
        """Register the client as self-employed with the tax service."""
        return await self.request(
            "POST",
            f"selfemployments/{_segment(client_id)}",
            body={"inn": inn},
        )

    async def selfemployments_receipt_store(
        self,
        client_id: str,
        amount: float,
        service_name: str,
        operation_time: datetime | str | None = None,
        payer_inn: str | None = None,
        payer_name: str | None = None,
    ) -> Any:
        """Register an income receipt."""
        body = models.SelfemploymentReceipt(
            amount=amount,
            service_name=service_name,
            operation_time=_iso(operation_time) if operation_time is not None else None,
            payer_inn=payer_inn,
            payer_name=payer_name,
        )
        return await self.request(
            "POST",
            f"selfemployments/{_segment(client_id)}/receipts",
            body=body.to_body(),
        )

    async def selfemployments_receipt_cancel(
        self,
        client_id: str,
        receipt_id: str,
        reason: str,
    ) -> Any:
        return await self.request(
            "DELETE",
            f"selfemployments/{_segment(client_id)}/receipts/{_segment(receipt_id)}",
            body={"reason": reason},
        )

    # === SBP ===

    async def sbp_banks(self) -> Any:
        """List banks reachable through the fast payment system."""
        return await self.request("GET", "sbp/banks")

    async def sbp_payment(
        self,
        amount: int,
        phone: str,
        bank_id: str,
        order_slug: str | None = None,
        description: str | None = None,
    ) -> Any:
        """Send an instant payment by phone number."""
        body = models.SbpPayment(
            amount=amount,
            phone=phone,
            bank_id=bank_id,
            order_slug=order_slug,
            description=description,
        )
        return await self.request("POST", "sbp/payments", body=body.to_body())

    async def sbp_payment_status(self, order_slug: str) -> Any:
        return await self.request("GET", f"sbp/payments/{_segment(order_slug)}")

    # === Beneficiaries ===

    async def beneficiary_list(self, client_id: str) -> Any:
        return await self.request("GET", f"clients/{_segment(client_id)}/beneficiaries")

    async def beneficiary_store(
        self,
        client_id: str,
        name: str,
        account: str,
        bik: str,
        inn: str | None = None,
        kpp: str | None = None,
        description: str | None = None,
    ) -> Any:
        body = models.Beneficiary(
            name=name,
            account=account,
            bik=bik,
            inn=inn,
            kpp=kpp,
            description=description,
        )
        return await self.request(
            "POST",
            f"clients/{_segment(client_id)}/beneficiaries",
            body=body.to_body(),
        )

    async def beneficiary_show(self, client_id: str, beneficiary_id: str) -> Any:
        return await self.request(
            "GET",
            f"clients/{_segment(client_id)}/beneficiaries/{_segment(beneficiary_id)}",
        )

    async def beneficiary_remove(self, client_id: str, beneficiary_id: str) -> Any:
        return await self.request(
            "DELETE",
            f"clients/{_segment(client_id)}/beneficiaries/{_segment(beneficiary_id)}",
        )

    # === Client-side (unsigned) ===

    async def unsigned_payment_from_unregistered_card(
        self,
        token: str,
        amount: int,
        card_info: dict[str, Any],
    ) -> Any:
        """Charge a card on the client side with a token from ``payment_from_unregistered_card_token``."""
        return await self.request_unsigned(
            "POST",
            "/client/v1/charge",
            body={"token": token, "amount": amount, "card_info": card_info},
        )

    async def unsigned_payment_to_unregistered_card(self, token: str, card_number: str) -> Any:
        """Refill a card on the client side with a token from ``payment_to_unregistered_card_token``."""
        return await self.request_unsigned(
            "POST",
            "/client/v1/refill",
            body={"token": token, "card_number": card_number},
        )

    async def unsigned_payment_authorization(self, token: str, card_info: dict[str, Any]) -> Any:
        return await self.request_unsigned(
            "POST",
            "/client/v1/authorize",
            body={"token": token, "card_info": card_info},
        )

    async def unsigned_hold(self, token: str, card_info: dict[str, Any]) -> Any:
        return await self.request_unsigned(
            "POST",
            "/client/v1/hold",
            body={"token": token, "card_info": card_info},
        )

    async def unsigned_payment_status_by_hash(self, hash: str) -> Any:
        return await self.request_unsigned("GET", f"/client/v1/status/{_segment(hash)}")

    # === Deprecated aliases ===

    get_balance = _deprecated_alias("account_balance")
    get_transactions = _deprecated_alias("account_transactions")
    get_cards_transactions = _deprecated_alias("account_cards_transactions")
    add_delivery = _deprecated_alias("card_delivery_store")
    get_delivery = _deprecated_alias("card_delivery_show")
    get_card_transactions = _deprecated_alias("card_transactions")
    get_event_subscriptions = _deprecated_alias("event_subscription_list")
    refill = _deprecated_alias("card_refill")
    withdrawal = _deprecated_alias("card_withdrawal")
    charge_token = _deprecated_alias("payment_from_unregistered_card_token")
    client_charge = _deprecated_alias("unsigned_payment_from_unregistered_card")
