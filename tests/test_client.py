"""Tests for the signed request executor."""

import asyncio
import ssl
from unittest.mock import patch

import aiohttp
import pytest
from yarl import URL

from conftest import BASE_URL, EMPTY_HASH, make_response
from talkbank_baas.client import BaasClient, decode_payload
from talkbank_baas.common.errors import (
    ConfigurationError,
    EncodingError,
    HttpStatusError,
    RequestFailed,
    TransportError,
)
from talkbank_baas.common.hmac import sha256_hex, verify
from talkbank_baas.common.settings import Settings
from talkbank_baas.signing import Credential, canonical_headers


def _server_side_verify(call, secret: str) -> bool:
    """Recompute the signature from what was put on the wire."""
    method, url = call.args[0], call.args[1]
    headers = call.kwargs["headers"]
    data = call.kwargs["data"]
    body = data.decode("utf-8") if isinstance(data, bytes) else ""

    assert headers["TB-Content-SHA256"] == sha256_hex(body)

    header_block = "\n".join(
        f"{name}:{value}"
        for name, value in canonical_headers(
            {"TB-Content-SHA256": headers["TB-Content-SHA256"], "Date": headers["Date"]}
        )
    )
    canonical = f"{method}\n{url.raw_path}\n{url.raw_query_string}\n{header_block}\n{sha256_hex(body)}"
    scheme, _, credentials = headers["Authorization"].partition(" ")
    _, _, signature = credentials.partition(":")
    assert scheme == "TB1-HMAC-SHA256"
    return verify(secret, canonical, signature)


class TestDecodePayload:
    def test_json_object(self):
        assert decode_payload(b'{"amount": 100}') == {"amount": 100}

    def test_json_array(self):
        assert decode_payload(b'[{"id": 1}]') == [{"id": 1}]

    def test_plain_text_not_parsed(self):
        assert decode_payload(b"1500.50") == "1500.50"

    def test_json_scalar_not_parsed(self):
        assert decode_payload(b'"quoted"') == '"quoted"'

    def test_empty_payload(self):
        assert decode_payload(b"") == ""

    def test_binary_passthrough(self):
        pdf = b"%PDF-1.4\n\xff\xfe\x00"
        assert decode_payload(pdf) == pdf

    def test_malformed_json(self):
        with pytest.raises(EncodingError):
            decode_payload(b"{not json")


class TestSignedRequest:
    @pytest.mark.asyncio
    async def test_get_balance_dispatch(self, client, session):
        session.request.return_value = make_response(200, b'{"balance": "10.00"}')

        result = await client.request("GET", "balance")

        assert result == {"balance": "10.00"}
        call = session.request.await_args
        assert call.args[0] == "GET"
        assert call.args[1] == URL(f"{BASE_URL}balance", encoded=True)
        assert call.kwargs["data"] == b""
        headers = call.kwargs["headers"]
        assert headers["Content-Type"] == "application/json"
        assert headers["TB-Content-SHA256"] == EMPTY_HASH
        assert headers["Date"].endswith(" GMT")
        assert headers["Authorization"].startswith("TB1-HMAC-SHA256 partner-1:")

    @pytest.mark.asyncio
    async def test_server_can_verify_signature(self, client, session):
        await client.request(
            "POST",
            "hold",
            query={"z": "last", "a": "first value"},
            body={"amount": 100, "name": "Иван"},
        )

        assert _server_side_verify(session.request.await_args, "s3cr3t") is True
        assert _server_side_verify(session.request.await_args, "wrong") is False

    @pytest.mark.asyncio
    async def test_query_sent_as_signed(self, client, session):
        await client.request("GET", "cards-transactions", query={"page": 1, "fromDate": "a b"})

        url = session.request.await_args.args[1]
        assert url.raw_query_string == "fromDate=a%20b&page=1"

    @pytest.mark.asyncio
    async def test_round_trip_body(self, client, session):
        session.request.return_value = make_response(200, b'{"amount": 100}')

        result = await client.request("POST", "echo", body={"amount": 100})

        assert session.request.await_args.kwargs["data"] == b'{"amount":100}'
        assert result == {"amount": 100}

    @pytest.mark.asyncio
    async def test_raw_payload_returned(self, client, session):
        session.request.return_value = make_response(200, b"1500.50")

        assert await client.request("GET", "balance") == "1500.50"

    @pytest.mark.asyncio
    async def test_http_401(self, client, session):
        session.request.return_value = make_response(401, b'{"message": "Invalid signature"}')

        with pytest.raises(HttpStatusError) as exc_info:
            await client.request("GET", "balance")

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == '{"message": "Invalid signature"}'
        assert exc_info.value.path == "/api/v1/balance"
        assert isinstance(exc_info.value, RequestFailed)

    @pytest.mark.asyncio
    async def test_http_500(self, client, session):
        session.request.return_value = make_response(500, b"Server Error")

        with pytest.raises(HttpStatusError) as exc_info:
            await client.request("POST", "hold", body={"amount": 1})

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == "Server Error"

    @pytest.mark.asyncio
    async def test_network_error(self, client, session):
        session.request.side_effect = aiohttp.ClientConnectionError("connection refused")

        with pytest.raises(TransportError) as exc_info:
            await client.request("GET", "balance")

        assert exc_info.value.status_code is None
        assert exc_info.value.body is None
        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)

    @pytest.mark.asyncio
    async def test_timeout(self, client, session):
        session.request.side_effect = asyncio.TimeoutError()

        with pytest.raises(TransportError):
            await client.request("GET", "balance")

    @pytest.mark.asyncio
    async def test_unserializable_body_not_sent(self, client, session):
        with pytest.raises(EncodingError):
            await client.request("POST", "hold", body={"amount": object()})

        session.request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_finite_amount_not_sent(self, client, session):
        with pytest.raises(EncodingError):
            await client.card_refill("c1", "b1", float("nan"))

        session.request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_path_ids_percent_encoded(self, client, session):
        await client.card_balance("c 1", "б/2")

        url = session.request.await_args.args[1]
        assert url.raw_path == "/api/v1/clients/c%201/cards/%D0%B1%2F2/balance"
        assert _server_side_verify(session.request.await_args, "s3cr3t") is True

    @pytest.mark.asyncio
    async def test_ssl_forwarded(self, credential, session):
        client = BaasClient(BASE_URL, credential, ssl_context=False)
        client._session = session

        await client.request("GET", "balance")

        assert session.request.await_args.kwargs["ssl"] is False

    @pytest.mark.asyncio
    async def test_no_ssl_kwarg_by_default(self, client, session):
        await client.request("GET", "balance")

        assert "ssl" not in session.request.await_args.kwargs


class TestMultipart:
    @pytest.mark.asyncio
    async def test_signed_over_empty_body(self, client, session):
        await client.request_multipart(
            "POST",
            "clients/c1/documents",
            fields={"type": "passport"},
            files={"file": ("scan.jpg", b"\xff\xd8binary", "image/jpeg")},
        )

        call = session.request.await_args
        headers = call.kwargs["headers"]
        assert "Content-Type" not in headers
        assert headers["TB-Content-SHA256"] == EMPTY_HASH
        assert headers["Authorization"].startswith("TB1-HMAC-SHA256 partner-1:")
        assert isinstance(call.kwargs["data"], aiohttp.FormData)
        assert _server_side_verify(call, "s3cr3t") is True


class TestUnsigned:
    @pytest.mark.asyncio
    async def test_resolved_against_host(self, client, session):
        await client.request_unsigned("POST", "/client/v1/charge", body={"token": "t"})

        call = session.request.await_args
        assert call.args[1] == URL("https://baas.test/client/v1/charge")
        assert call.kwargs["data"] == b'{"token":"t"}'
        assert call.kwargs["headers"] == {"Content-Type": "application/json"}


class TestCredentialRotation:
    def test_with_credential_returns_new_client(self, client, credential):
        rotated = client.with_credential(Credential(partner_id="partner-2", token="new"))

        assert rotated is not client
        assert rotated.credential.partner_id == "partner-2"
        assert client.credential == credential
        assert rotated.base_url == client.base_url

    def test_rotated_client_signs_with_new_secret(self, client, fixed_now):
        rotated = client.with_credential(Credential(partner_id="partner-1", token="new"))

        old = client.sign("GET", "balance", now=fixed_now)
        new = rotated.sign("GET", "balance", now=fixed_now)

        assert old.canonical == new.canonical
        assert old.signature != new.signature

    def test_credential_is_frozen(self, credential):
        with pytest.raises(AttributeError):
            credential.token = "changed"


class TestFromSettings:
    def test_builds_client(self, settings):
        client = BaasClient.from_settings(settings)

        assert client.base_url == BASE_URL
        assert client.credential == Credential(partner_id="partner-1", token="s3cr3t")

    def test_missing_token(self):
        with pytest.raises(ConfigurationError):
            BaasClient.from_settings(Settings(partner_id="p", token=None))

    def test_insecure_tls(self, settings):
        client = BaasClient.from_settings(settings.model_copy(update={"tls_insecure": True}))

        assert client._ssl is False

    def test_ca_bundle(self, settings):
        context = ssl.create_default_context()
        with patch("talkbank_baas.client.ssl.create_default_context", return_value=context) as create:
            client = BaasClient.from_settings(
                settings.model_copy(update={"tls_ca_cert": "/etc/ssl/ca.pem"})
            )

        create.assert_called_once_with(cafile="/etc/ssl/ca.pem")
        assert client._ssl is context


class TestSessionLifecycle:
    @pytest.mark.asyncio
    async def test_context_manager_closes_session(self, client, session):
        async with client:
            pass

        session.close.assert_awaited_once()
        assert client._session is None
