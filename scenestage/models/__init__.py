"""Session domain models."""

from scenestage.models.session import SessionRecord

__all__ = ["SessionRecord"]
