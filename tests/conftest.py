"""Shared test fixtures for the scenestage test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from scenestage import InMemorySessionStore, Scene, SceneContext, Stage
from scenestage.config import get_settings


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(
    test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Callable[[dict[str, str]], Path]:
    """Factory fixture to create TOML files and point config file resolution at them.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> Path:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)
        monkeypatch.setenv("SCENESTAGE_CONFIG_DIR", str(test_config_dir))
        return test_config_dir

    return _create_toml_files


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear cached settings around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemorySessionStore:
    """Create a fresh store for each test."""
    return InMemorySessionStore()


@pytest.fixture
def stage(store: InMemorySessionStore) -> Stage:
    """Stage over an empty in-memory store, metrics off."""
    return Stage(store, metrics_enabled=False)


@pytest.fixture
def ctx() -> SceneContext:
    return SceneContext(user_id="u1")


@pytest.fixture
def recorder() -> Callable[[list[str], str], Callable[[SceneContext], None]]:
    """Factory for callbacks that append a label to a shared log."""

    def _make(log: list[str], label: str) -> Callable[[SceneContext], None]:
        async def _callback(_ctx: SceneContext) -> None:
            log.append(label)

        return _callback

    return _make


@pytest.fixture
def traced_scene(recorder) -> Callable[[str, list[str]], Scene]:
    """Factory for a scene whose callbacks log '<name>:<event>'."""

    def _make(name: str, log: list[str]) -> Scene:
        return (
            Scene(name)
            .on_enter(recorder(log, f"{name}:enter"))
            .on_leave(recorder(log, f"{name}:leave"))
            .on_message(recorder(log, f"{name}:message"))
        )

    return _make
