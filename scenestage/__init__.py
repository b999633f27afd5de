"""scenestage: multi-step conversational scenes for per-user sessions.

A Stage holds a registry of Scenes and a SessionStore. Each user is in
at most one scene at a time; entering a scene runs the previous scene's
leave callbacks first, and incoming messages are routed to the active
scene's message callbacks with the user's session data attached.
"""

from scenestage.context import SceneContext
from scenestage.errors import SceneError, SceneNotFoundError, StoreError
from scenestage.locking import UserLockRegistry
from scenestage.models import SessionRecord
from scenestage.scene import Scene, SceneCallback, SceneEvent
from scenestage.stage import Stage
from scenestage.store import SessionStore
from scenestage.stores import InMemorySessionStore

__all__ = [
    "InMemorySessionStore",
    "Scene",
    "SceneCallback",
    "SceneContext",
    "SceneError",
    "SceneEvent",
    "SceneNotFoundError",
    "SessionRecord",
    "SessionStore",
    "Stage",
    "StoreError",
    "UserLockRegistry",
]
