"""Identity service proxy interface and response schema."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


@dataclass
class UpstreamResponse:
    """Status and JSON body to hand back to the caller verbatim."""

    status_code: int
    body: Any = field(default_factory=dict)
    upstream_url: Optional[str] = None
    mocked: bool = False


class IdentityResult(BaseModel):
    """Normalized view of an identity service response.

    Upstream payloads name the identity id in several ways; `from_payload`
    is the only place that knows about them.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    image: Optional[str] = None
    score: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "IdentityResult":
        """Map any known upstream shape onto IdentityResult."""
        if not isinstance(payload, dict):
            return cls()

        identity_id = payload.get("id") or payload.get("identityId") or payload.get("userId")
        score = payload.get("score")

        matches = payload.get("matches")
        if not identity_id and isinstance(matches, list) and matches and isinstance(matches[0], dict):
            identity_id = matches[0].get("id")
            score = matches[0].get("score", score)

        result = payload.get("result")
        if not identity_id and isinstance(result, dict):
            identity_id = result.get("id")

        image = payload.get("image")
        return cls(
            id=str(identity_id) if identity_id else None,
            image=image if isinstance(image, str) else None,
            score=score if isinstance(score, (int, float)) else None,
        )


class IdentityProxy(ABC):
    """Forwards identity requests to the Moldova identity API."""

    @abstractmethod
    async def register(self, body: dict) -> UpstreamResponse:
        """Create an identity (POST /identity)."""
        raise NotImplementedError()

    @abstractmethod
    async def confirm(self, identity_id: str, image: Optional[str]) -> UpstreamResponse:
        """Confirm or update an identity image (PUT /identity/{id})."""
        raise NotImplementedError()

    @abstractmethod
    async def delete(self, identity_id: str) -> UpstreamResponse:
        """Remove an identity (DELETE /identity/{id})."""
        raise NotImplementedError()

    @abstractmethod
    async def check(self, body: dict) -> UpstreamResponse:
        """Verify a face against registered identities (POST /identity/check)."""
        raise NotImplementedError()

    @property
    @abstractmethod
    def name(self) -> str:
        """Proxy name."""
        raise NotImplementedError()


class LvAuthProxy(ABC):
    """Forwards face requests to LV Auth."""

    @abstractmethod
    async def register(self, image: str, user_id: Optional[str], name: Optional[str]) -> UpstreamResponse:
        raise NotImplementedError()

    @abstractmethod
    async def find(self, image: Optional[str]) -> UpstreamResponse:
        raise NotImplementedError()

    @abstractmethod
    async def delete(self, user_id: str) -> UpstreamResponse:
        raise NotImplementedError()

    @property
    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError()


class UpstreamUnavailableError(Exception):
    """Raised when the upstream identity service cannot be reached."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Upstream {url} unavailable: {reason}")


class IdentityRequestError(Exception):
    """Raised by IdentityClient when the identity endpoint rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None, data: Any = None):
        self.status_code = status_code
        self.data = data
        super().__init__(message)
