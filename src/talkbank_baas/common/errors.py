"""Client error types and codes."""

from __future__ import annotations


class ErrorCode:
    TRANSPORT = "transport_error"
    HTTP_STATUS = "http_status_error"
    ENCODING = "encoding_error"
    CONFIGURATION = "configuration_error"


class BaasError(Exception):
    """Base class for all client errors."""

    code = "baas_error"


class ConfigurationError(BaasError):
    """Client cannot be built from the given settings."""

    code = ErrorCode.CONFIGURATION


class EncodingError(BaasError):
    """Request body or response payload could not be (de)serialized."""

    code = ErrorCode.ENCODING


class RequestFailed(BaasError):
    """
    A call did not produce a successful response.

    Carries the HTTP status and the response body when the server answered;
    both are ``None`` when the failure happened below HTTP.
    """

    code = "request_failed"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class TransportError(RequestFailed):
    """Network, DNS, TLS or timeout failure."""

    code = ErrorCode.TRANSPORT


class HttpStatusError(RequestFailed):
    """Server answered with a non-2xx status."""

    code = ErrorCode.HTTP_STATUS

    def __init__(self, status_code: int, body: str, method: str, path: str) -> None:
        super().__init__(
            f"{method} {path} failed with HTTP {status_code}",
            status_code=status_code,
            body=body,
        )
        self.method = method
        self.path = path
