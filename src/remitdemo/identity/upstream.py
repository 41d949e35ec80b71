"""HTTP forwarding proxies for the Moldova identity API and LV Auth."""

import logging
from typing import Any, Optional
from urllib.parse import quote, urljoin

import httpx

from remitdemo.identity.base import (
    IdentityProxy,
    LvAuthProxy,
    UpstreamResponse,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


async def _forward(
    method: str,
    url: str,
    headers: dict[str, str],
    json_body: Optional[Any],
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport],
) -> UpstreamResponse:
    """Send one request upstream and capture status and JSON body.

    A body that is not JSON is reported as an empty object.
    """
    logger.info(f"Forwarding {method} {url}")
    try:
        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            response = await client.request(method, url, headers=headers, json=json_body)
    except httpx.HTTPError as e:
        logger.warning(f"Upstream {method} {url} failed: {e}")
        raise UpstreamUnavailableError(url, str(e) or e.__class__.__name__) from e

    try:
        body = response.json()
    except ValueError:
        body = {}

    logger.debug(f"Upstream {method} {url} -> {response.status_code}")
    return UpstreamResponse(status_code=response.status_code, body=body, upstream_url=url)


class MoldovaIdentityProxy(IdentityProxy):
    """Moldova identity API proxy.

    Requests go to <base_url><api_prefix>/identity... Register and check
    send the API key as a Bearer token. Confirm and delete send it in the
    x-api-key header.
    """

    def __init__(
        self,
        base_url: str,
        api_prefix: str = "/moldova/v2",
        api_key: str = "",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "moldova"

    def _url(self, path: str) -> str:
        return f"{self.base_url}{self.api_prefix}{path}"

    def _bearer_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _key_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def register(self, body: dict) -> UpstreamResponse:
        return await _forward(
            "POST", self._url("/identity"), self._bearer_headers(), body, self.timeout, self._transport
        )

    async def confirm(self, identity_id: str, image: Optional[str]) -> UpstreamResponse:
        url = self._url(f"/identity/{quote(str(identity_id), safe='')}")
        return await _forward(
            "PUT", url, self._key_headers(), {"image": image}, self.timeout, self._transport
        )

    async def delete(self, identity_id: str) -> UpstreamResponse:
        url = self._url(f"/identity/{quote(str(identity_id), safe='')}")
        return await _forward("DELETE", url, self._key_headers(), None, self.timeout, self._transport)

    async def check(self, body: dict) -> UpstreamResponse:
        return await _forward(
            "POST", self._url("/identity/check"), self._bearer_headers(), body, self.timeout, self._transport
        )


class HttpLvAuthProxy(LvAuthProxy):
    """LV Auth proxy using bearer token authentication."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        register_path: str = "api/register",
        find_path: str = "api/find",
        delete_path: str = "api/delete",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/") + "/"
        self.api_key = api_key
        self.register_path = register_path
        self.find_path = find_path
        self.delete_path = delete_path
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "lvauth"

    def build_url(self, path: str) -> str:
        """Resolve a path relative to the base URL, ignoring leading slashes."""
        return urljoin(self.base_url, (path or "").lstrip("/"))

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def register(self, image: str, user_id: Optional[str], name: Optional[str]) -> UpstreamResponse:
        body = {"image": image, "userId": user_id, "name": name}
        return await _forward(
            "POST", self.build_url(self.register_path), self._headers(), body, self.timeout, self._transport
        )

    async def find(self, image: Optional[str]) -> UpstreamResponse:
        return await _forward(
            "POST", self.build_url(self.find_path), self._headers(), {"image": image},
            self.timeout, self._transport,
        )

    async def delete(self, user_id: str) -> UpstreamResponse:
        return await _forward(
            "POST", self.build_url(self.delete_path), self._headers(), {"userId": user_id},
            self.timeout, self._transport,
        )
