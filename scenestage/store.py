"""SessionStore abstract interface."""

from abc import ABC, abstractmethod

from scenestage.models import SessionRecord


class SessionStore(ABC):
    """Abstract interface for per-user session storage.

    Maps an opaque user id to a single SessionRecord. Implementations
    must not raise for missing users: ``get_session`` returns None and
    ``delete_session`` returns False. Backend failures should be wrapped
    in StoreError.
    """

    @abstractmethod
    async def get_session(self, user_id: str) -> SessionRecord | None:
        """Get the session for a user, or None if there is none."""
        pass

    @abstractmethod
    async def set_session(self, user_id: str, record: SessionRecord) -> None:
        """Store a session, replacing any existing record for the user."""
        pass

    @abstractmethod
    async def delete_session(self, user_id: str) -> bool:
        """Delete a user's session, returning whether one existed."""
        pass
