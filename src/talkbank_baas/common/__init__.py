"""Common utilities for the BaaS client."""

from talkbank_baas.common.errors import (
    BaasError,
    ConfigurationError,
    EncodingError,
    HttpStatusError,
    RequestFailed,
    TransportError,
)
from talkbank_baas.common.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "BaasError",
    "ConfigurationError",
    "EncodingError",
    "HttpStatusError",
    "RequestFailed",
    "TransportError",
]
