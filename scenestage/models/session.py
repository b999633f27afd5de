"""Session record model."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class SessionRecord(BaseModel):
    """Per-user session state owned by a SessionStore.

    A record either names the active scene or has no scene at all.
    ``data`` is an open mapping shared by the scene callbacks; it
    survives scene-to-scene transitions and disappears only when the
    session itself is deleted.
    """

    model_config = ConfigDict(frozen=False, validate_assignment=True)

    current_scene: str | None = Field(
        default=None, description="Name of the active scene"
    )
    data: dict[str, Any] = Field(
        default_factory=dict, description="Scene-scoped user data"
    )
    created_at: datetime = Field(
        default_factory=utc_now, description="Creation time"
    )
    updated_at: datetime = Field(
        default_factory=utc_now, description="Last write time"
    )

    @property
    def in_scene(self) -> bool:
        """Whether the record names an active scene."""
        return self.current_scene is not None
