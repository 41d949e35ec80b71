"""Session-scoped key/value storage.

Each client session owns one SessionStore holding string values, the way
a browser's sessionStorage does. Stores live in memory only and vanish
with the process.
"""

import logging
import uuid
from collections import OrderedDict
from typing import Optional

logger = logging.getLogger(__name__)


class SessionStore:
    """String key/value store for a single session."""

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or uuid.uuid4().hex
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class SessionRegistry:
    """Registry of session stores keyed by session id.

    Ids are always generated server-side: a cookie naming an unknown
    session starts a fresh one under a new id. At most `max_sessions`
    stores are kept; the least recently used is evicted first.
    """

    def __init__(self, max_sessions: int = 10_000):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, SessionStore] = OrderedDict()

    def get_or_create(self, session_id: Optional[str] = None) -> SessionStore:
        """Return the store for a session, creating it if unknown.

        Args:
            session_id: Id from the client cookie, or None for a new session

        Returns:
            SessionStore for the session; its id differs from `session_id`
            when that session is unknown
        """
        if session_id and session_id in self._sessions:
            self._sessions.move_to_end(session_id)
            return self._sessions[session_id]

        store = SessionStore()
        self._sessions[store.session_id] = store
        logger.debug(f"Created session {store.session_id}")

        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.debug(f"Evicted session {evicted}")

        return store

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def drop(self, session_id: str) -> None:
        """Forget a session and everything stored in it."""
        if self._sessions.pop(session_id, None) is not None:
            logger.debug(f"Dropped session {session_id}")

    def clear(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
