"""
talkbank-baas: async client for the TalkBank partner BaaS API.

Requests are authenticated with TB1-HMAC-SHA256 signatures computed over a
canonical form of each call.
"""

from talkbank_baas.client import BaasClient
from talkbank_baas.signing import Credential, RequestSpec, sign_request

__version__ = "1.0.0"

__all__ = [
    "BaasClient",
    "Credential",
    "RequestSpec",
    "sign_request",
]
