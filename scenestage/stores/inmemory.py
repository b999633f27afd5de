"""In-memory implementation of SessionStore."""

from datetime import UTC, datetime

from scenestage.models import SessionRecord
from scenestage.store import SessionStore


class InMemorySessionStore(SessionStore):
    """In-memory implementation of SessionStore for testing and development.

    Records are copied on the way in and out, so a caller only changes
    stored state through ``set_session``. Nothing is evicted and all data
    is lost when the process exits.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._sessions: dict[str, SessionRecord] = {}

    async def get_session(self, user_id: str) -> SessionRecord | None:
        """Get the session for a user."""
        record = self._sessions.get(user_id)
        if record is None:
            return None
        return record.model_copy(deep=True)

    async def set_session(self, user_id: str, record: SessionRecord) -> None:
        """Store a session, replacing any existing record."""
        stored = record.model_copy(deep=True)
        stored.updated_at = datetime.now(UTC)
        self._sessions[user_id] = stored

    async def delete_session(self, user_id: str) -> bool:
        """Delete a user's session."""
        if user_id in self._sessions:
            del self._sessions[user_id]
            return True
        return False

    def count(self) -> int:
        """Number of stored sessions."""
        return len(self._sessions)

    def clear(self) -> None:
        """Drop all sessions."""
        self._sessions.clear()
