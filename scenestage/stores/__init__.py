"""Session store implementations."""

from scenestage.store import SessionStore
from scenestage.stores.inmemory import InMemorySessionStore

__all__ = [
    "SessionStore",
    "InMemorySessionStore",
]
