"""Error hierarchy for scene orchestration and session storage."""


class SceneError(Exception):
    """Base exception for all scenestage errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class SceneNotFoundError(SceneError):
    """Raised when a transition targets a scene that is not registered."""

    def __init__(self, scene_name: str, user_id: str | None = None) -> None:
        super().__init__(f'Scene "{scene_name}" not found')
        self.scene_name = scene_name
        self.user_id = user_id


class StoreError(SceneError):
    """Raised when a session store backend fails.

    For SessionStore implementations outside this package (key-value
    databases, caches): wrap backend-specific errors such as connection
    loss or serialization failures in it so callers of Stage handle one
    type. InMemorySessionStore has no backend and never raises it.
    """

    pass
