"""
Canonical request construction and TB1-HMAC-SHA256 request signing.

Every signed call is reduced to a canonical string::

    METHOD
    /absolute/path
    sorted=query&string=rfc3986
    date:<RFC 7231 date>
    tb-content-sha256:<hex sha256 of body>
    <hex sha256 of body>

The string is signed with HMAC-SHA256 keyed by the partner token and sent as
``Authorization: TB1-HMAC-SHA256 <partner_id>:<signature>``. The server
recomputes the same string from the received request, so every byte here
must be reproducible.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any
from urllib.parse import quote, urlsplit

from talkbank_baas.common.errors import EncodingError
from talkbank_baas.common.hmac import sha256_hex, sign

AUTH_SCHEME = "TB1-HMAC-SHA256"
CONTENT_HASH_HEADER = "TB-Content-SHA256"
EMPTY_BODY_HASH = sha256_hex("")


@dataclass(frozen=True)
class Credential:
    """Partner identity and the shared secret used as HMAC key."""

    partner_id: str
    token: str = field(repr=False)


@dataclass(frozen=True)
class RequestSpec:
    """A call to sign: method, path relative to the base URL, query and JSON body."""

    method: str
    path: str
    query: Mapping[str, Any] = field(default_factory=dict)
    body: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class CanonicalRequest:
    """Canonical form of a request, the exact input of the signature."""

    method: str
    path: str
    query_string: str
    headers: tuple[tuple[str, str], ...]
    body: str
    body_hash: str
    date: str

    @property
    def header_block(self) -> str:
        return "\n".join(f"{name}:{value}" for name, value in self.headers)

    def to_string(self) -> str:
        return (
            f"{self.method}\n"
            f"{self.path}\n"
            f"{self.query_string}\n"
            f"{self.header_block}\n"
            f"{self.body_hash}"
        )


@dataclass(frozen=True)
class SignedRequest:
    """A request ready for dispatch."""

    spec: RequestSpec
    url: str
    canonical: CanonicalRequest
    signature: str
    headers: dict[str, str]

    @property
    def body(self) -> str:
        return self.canonical.body


def format_http_date(now: datetime | None = None) -> str:
    """Format an instant as an RFC 7231 HTTP-date; naive datetimes are taken as UTC."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return format_datetime(now.astimezone(timezone.utc), usegmt=True)


def serialize_body(body: Mapping[str, Any] | None) -> str:
    """Compact JSON with non-ASCII left unescaped; no parameters means an empty body."""
    if not body:
        return ""
    try:
        return json.dumps(dict(body), ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Request body is not JSON serializable: {e}") from e


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def canonical_query_string(query: Mapping[str, Any]) -> str:
    """Key-sorted, RFC 3986 encoded query string (space is ``%20``)."""
    items = sorted(
        (str(key), _query_value(value)) for key, value in query.items() if value is not None
    )
    return "&".join(f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in items)


def canonical_headers(headers: Mapping[str, str]) -> tuple[tuple[str, str], ...]:
    """Lower-case header names, trim values and sort by name."""
    return tuple(sorted((name.lower(), value.strip()) for name, value in headers.items()))


def absolute_path(base_url: str, path: str) -> str:
    """Path component of ``base_url + path``."""
    return urlsplit(base_url + path).path or "/"


def build_canonical_request(
    spec: RequestSpec,
    base_url: str,
    now: datetime | None = None,
) -> CanonicalRequest:
    """
    Build the canonical form of a request.

    The date is captured once here and reused for the ``Date`` header, so the
    signed value and the sent value cannot drift apart.

    Args:
        spec: Request to canonicalize
        base_url: Client base URL the path is appended to
        now: Instant to sign at (defaults to the current UTC time)

    Returns:
        CanonicalRequest
    """
    date = format_http_date(now)
    body = serialize_body(spec.body)
    body_hash = sha256_hex(body)
    headers = canonical_headers(
        {
            CONTENT_HASH_HEADER: body_hash,
            "Date": date,
        }
    )
    return CanonicalRequest(
        method=spec.method.upper(),
        path=absolute_path(base_url, spec.path),
        query_string=canonical_query_string(spec.query),
        headers=headers,
        body=body,
        body_hash=body_hash,
        date=date,
    )


def authorization_header(credential: Credential, signature: str) -> str:
    return f"{AUTH_SCHEME} {credential.partner_id}:{signature}"


def sign_request(
    spec: RequestSpec,
    credential: Credential,
    base_url: str,
    now: datetime | None = None,
) -> SignedRequest:
    """
    Canonicalize and sign a request.

    Args:
        spec: Request to sign
        credential: Partner credential
        base_url: Client base URL
        now: Instant to sign at (defaults to the current UTC time)

    Returns:
        SignedRequest carrying the URL to call and the outgoing headers
    """
    canonical = build_canonical_request(spec, base_url, now)
    signature = sign(credential.token, canonical.to_string())

    url = base_url + spec.path
    if canonical.query_string:
        url = f"{url}?{canonical.query_string}"

    headers = {
        "Content-Type": "application/json",
        CONTENT_HASH_HEADER: canonical.body_hash,
        "Date": canonical.date,
        "Authorization": authorization_header(credential, signature),
    }
    return SignedRequest(
        spec=spec,
        url=url,
        canonical=canonical,
        signature=signature,
        headers=headers,
    )
