"""Root settings model for scenestage configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from scenestage.config.models.observability import ObservabilityConfig
from scenestage.config.models.stage import StageConfig


class Settings(BaseSettings):
    """Root configuration object.

    Sources, highest priority first:
    1. constructor arguments
    2. SCENESTAGE_* environment variables (``__`` separates nested keys)
    3. TOML files listed in ``model_config["toml_file"]``, later files
       overriding earlier ones key by key
    4. model defaults

    Plain ``Settings()`` reads no files; ``get_settings()`` builds a
    subclass bound to the files found by ``config_files()``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCENESTAGE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="scenestage", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")

    stage: StageConfig = Field(
        default_factory=StageConfig,
        description="Scene transition behaviour",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """One TOML source per file so nested tables merge instead of replacing."""
        files = settings_cls.model_config.get("toml_file") or []
        toml_sources = tuple(
            TomlConfigSettingsSource(settings_cls, toml_file=path)
            for path in reversed(list(files))
        )
        return (init_settings, env_settings, *toml_sources)


def settings_from_files(files: list[Path]) -> type[Settings]:
    """A Settings subclass that layers the given TOML files."""

    class FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=files)

    return FileSettings
