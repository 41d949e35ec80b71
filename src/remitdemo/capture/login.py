"""Verified-login state kept in the client session."""

import logging
from typing import Optional

from remitdemo.identity.base import IdentityRequestError
from remitdemo.identity.client import IdentityClient
from remitdemo.sessions import SessionStore

logger = logging.getLogger(__name__)

VERIFIED_KEY = "lv_verified"
USER_ID_KEY = "lv_user_id"


class LoginSession:
    """Remembers whether the session passed face verification, and as whom."""

    def __init__(self, store: SessionStore):
        self.store = store

    @property
    def is_logged_in(self) -> bool:
        return self.store.get(VERIFIED_KEY) == "1"

    @property
    def user_id(self) -> Optional[str]:
        return self.store.get(USER_ID_KEY)

    def mark_verified(self, user_id: str) -> None:
        self.store.set(VERIFIED_KEY, "1")
        self.store.set(USER_ID_KEY, str(user_id))
        logger.info(f"Session {self.store.session_id} verified as {user_id}")

    def logout(self) -> None:
        self.store.remove(VERIFIED_KEY)
        self.store.remove(USER_ID_KEY)

    async def delete_identity(self, client: IdentityClient) -> None:
        """Delete the logged-in identity upstream, then log out.

        A failed delete still logs the session out.
        """
        user_id = self.user_id
        if not user_id:
            return

        try:
            await client.delete(user_id)
        except IdentityRequestError as e:
            logger.warning(f"Deleting identity {user_id} failed: {e}")

        self.logout()
