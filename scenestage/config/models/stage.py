"""Stage behaviour configuration."""

from pydantic import BaseModel, Field


class StageConfig(BaseModel):
    """Controls how Stage handles transitions and concurrency."""

    preserve_data_across_scenes: bool = Field(
        default=True,
        description=(
            "Keep session data when moving from one scene to another; "
            "data is dropped only when the session is deleted"
        ),
    )
    validate_target: bool = Field(
        default=True,
        description=(
            "Check that the target scene is registered before writing it "
            "into the session record"
        ),
    )
    serialize_per_user: bool = Field(
        default=False,
        description="Run each user's enter/handle_message calls one at a time",
    )
