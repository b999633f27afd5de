"""Configuration loading for scenestage.

Settings come from config/default.toml, config/{SCENESTAGE_ENV}.toml and
SCENESTAGE_* environment variables. The library reads the ``stage`` and
``observability.metrics`` sections itself (``Stage.from_settings``).
Logging is process-wide, so applying the ``observability.logging``
section is left to the application:

    from scenestage.config import get_settings
    from scenestage.observability.logging import setup_logging

    settings = get_settings()
    setup_logging(**settings.observability.logging.model_dump())
    stage = Stage.from_settings(store, settings)
"""

from functools import lru_cache

from scenestage.config.files import config_files
from scenestage.config.settings import Settings, settings_from_files


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process.

    Call `get_settings.cache_clear()` or `reload_settings()` to re-read
    the files and environment.
    """
    return settings_from_files(config_files())()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
