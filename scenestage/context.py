"""Per-invocation context passed to scene callbacks."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SceneContext:
    """Context carried through a single enter or message dispatch.

    The transport layer builds one context per incoming event and
    attaches whatever it needs (the raw message, a reply handle) through
    ``message`` and ``extras``. Stage populates ``session_data`` with the
    user's live session data before running callbacks and reads it back
    afterwards, so callbacks may either mutate the mapping in place or
    replace it.
    """

    user_id: str
    message: Any = None
    session_data: dict[str, Any] | None = None
    extras: dict[str, Any] = field(default_factory=dict)
    # bumped by Stage.enter so an outer dispatch can see a nested transition
    transition_count: int = field(default=0, init=False, repr=False)
    # >0 while Stage is running callbacks with this context
    dispatch_depth: int = field(default=0, init=False, repr=False)

    @property
    def dispatching(self) -> bool:
        """Whether scene callbacks are currently running with this context."""
        return self.dispatch_depth > 0

    @property
    def data(self) -> dict[str, Any]:
        """Session data, creating an empty mapping if none is attached."""
        if self.session_data is None:
            self.session_data = {}
        return self.session_data
