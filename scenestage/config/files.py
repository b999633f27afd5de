"""Locating the TOML files that feed Settings."""

import os
from pathlib import Path


def config_dir() -> Path:
    """Directory holding default.toml and the per-environment files.

    ``SCENESTAGE_CONFIG_DIR`` wins; otherwise ``./config``.
    """
    override = os.environ.get("SCENESTAGE_CONFIG_DIR")
    if override:
        path = Path(override)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {override}")
        return path
    return Path.cwd() / "config"


def environment() -> str:
    """Active environment name (``SCENESTAGE_ENV``, default 'development')."""
    return os.environ.get("SCENESTAGE_ENV", "development")


def config_files() -> list[Path]:
    """TOML files to load, lowest priority first.

    default.toml is required; ``{environment}.toml`` is added when present.
    """
    directory = config_dir()
    default = directory / "default.toml"
    if not default.is_file():
        raise FileNotFoundError(
            f"Default configuration file not found: {default}. "
            "Create config/default.toml or set SCENESTAGE_CONFIG_DIR."
        )
    files = [default]
    overlay = directory / f"{environment()}.toml"
    if overlay.is_file() and overlay != default:
        files.append(overlay)
    return files
