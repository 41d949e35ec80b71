"""Mock identity proxies used when no upstream is configured."""

from typing import Optional

from remitdemo.identity.base import IdentityProxy, LvAuthProxy, UpstreamResponse

DEMO_USER_ID = "demo-user"


class MockIdentityProxy(IdentityProxy):
    """Answers identity requests with canned responses.

    Registration echoes the submitted image back as the "aligned" face,
    and every check matches the demo user.
    """

    @property
    def name(self) -> str:
        return "mock"

    async def register(self, body: dict) -> UpstreamResponse:
        return UpstreamResponse(
            status_code=200,
            body={"id": body.get("id"), "image": body.get("image", "")},
            mocked=True,
        )

    async def confirm(self, identity_id: str, image: Optional[str]) -> UpstreamResponse:
        return UpstreamResponse(
            status_code=200,
            body={"id": identity_id, "status": "registered"},
            mocked=True,
        )

    async def delete(self, identity_id: str) -> UpstreamResponse:
        return UpstreamResponse(
            status_code=200,
            body={"id": identity_id, "deleted": True},
            mocked=True,
        )

    async def check(self, body: dict) -> UpstreamResponse:
        return UpstreamResponse(
            status_code=200,
            body={"ok": True, "matches": [{"id": DEMO_USER_ID, "score": 0.99}], "count": 1},
            mocked=True,
        )


class MockLvAuthProxy(LvAuthProxy):
    """Canned LV Auth responses."""

    @property
    def name(self) -> str:
        return "mock"

    async def register(self, image: str, user_id: Optional[str], name: Optional[str]) -> UpstreamResponse:
        return UpstreamResponse(
            status_code=200,
            body={"ok": True, "userId": user_id or "demo", "name": name or "Demo User"},
            mocked=True,
        )

    async def find(self, image: Optional[str]) -> UpstreamResponse:
        return UpstreamResponse(
            status_code=200,
            body={"ok": True, "matches": [{"id": DEMO_USER_ID, "score": 0.99}], "count": 1},
            mocked=True,
        )

    async def delete(self, user_id: str) -> UpstreamResponse:
        return UpstreamResponse(status_code=200, body={"ok": True, "userId": user_id}, mocked=True)
