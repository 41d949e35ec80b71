"""Identity verification collaborators.

Proxies forward requests to the Moldova identity API and LV Auth, or
answer with canned responses when no upstream is configured. The client
calls the proxy endpoints on behalf of the capture flow.
"""

from remitdemo.identity.base import (
    IdentityProxy,
    IdentityRequestError,
    IdentityResult,
    LvAuthProxy,
    UpstreamResponse,
    UpstreamUnavailableError,
)
from remitdemo.identity.client import IdentityClient
from remitdemo.identity.factory import get_identity_proxy, get_lv_auth_proxy, reset_proxies

__all__ = [
    "IdentityClient",
    "IdentityProxy",
    "IdentityRequestError",
    "IdentityResult",
    "LvAuthProxy",
    "UpstreamResponse",
    "UpstreamUnavailableError",
    "get_identity_proxy",
    "get_lv_auth_proxy",
    "reset_proxies",
]
