"""Client for the identity proxy endpoints, as used by the capture flow."""

import logging
import random
from typing import Any, Optional
from urllib.parse import quote

import httpx

from remitdemo.identity.base import IdentityRequestError, IdentityResult

logger = logging.getLogger(__name__)

MAX_IDENTITY_ID = 10_000_000


class IdentityClient:
    """Calls /api/moldova/identity endpoints and normalizes the responses.

    Any non-2xx response or transport failure raises IdentityRequestError.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        prefix: str = "/api/moldova",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rng: Optional[random.Random] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.prefix = prefix
        self.timeout = timeout
        self._transport = transport
        self._rng = rng or random.Random()

    async def _request(self, method: str, path: str, body: Optional[dict], failure: str) -> Any:
        url = f"{self.base_url}{self.prefix}{path}"
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.request(method, url, json=body)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise IdentityRequestError(failure) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise IdentityRequestError(message or failure, status_code=response.status_code, data=data)

        return data

    async def create(self, image: str) -> IdentityResult:
        """Register a face under a fresh random numeric id.

        Returns:
            IdentityResult with the id and the aligned face image
        """
        identity_id = self._rng.randrange(MAX_IDENTITY_ID)
        data = await self._request(
            "POST", "/identity", {"id": identity_id, "image": image}, "Registration failed"
        )
        result = IdentityResult.from_payload(data)
        if result.id is None:
            result.id = str(identity_id)
        return result

    async def confirm(self, identity_id: str, image: str) -> IdentityResult:
        """Confirm the aligned face for a registered id."""
        data = await self._request(
            "PUT",
            f"/identity/{quote(str(identity_id), safe='')}",
            {"image": image},
            "Registration confirmation failed",
        )
        result = IdentityResult.from_payload(data)
        if result.id is None:
            result.id = str(identity_id)
        return result

    async def check(self, image: str) -> IdentityResult:
        """Verify a face against registered identities."""
        data = await self._request("POST", "/identity/check", {"image": image}, "Verification failed")
        return IdentityResult.from_payload(data)

    async def delete(self, identity_id: str) -> None:
        """Remove a registered identity."""
        await self._request(
            "DELETE", f"/identity/{quote(str(identity_id), safe='')}", None, "Delete failed"
        )
