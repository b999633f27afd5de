"""Stage: scene registry, transition protocol and message routing.

Per-user state lives entirely in the SessionStore. A user is either in
no scene (no record, or a record without ``current_scene``) or in exactly
one registered scene. Stage keeps nothing between calls except the
scene registry.

Transition protocol for ``enter(name, ctx)``:
1. Load the user's record (a fresh one if none exists)
2. Run the previous scene's leave callbacks, if that scene is registered
3. ``name is None``: delete the session and stop
4. Write the record naming the target scene, then run its enter callbacks
5. Persist data changed by the enter callbacks
"""

import time
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from types import MappingProxyType

from scenestage.config import Settings, get_settings
from scenestage.config.models import StageConfig
from scenestage.context import SceneContext
from scenestage.errors import SceneNotFoundError
from scenestage.locking import UserLockRegistry
from scenestage.models import SessionRecord
from scenestage.observability import metrics
from scenestage.observability.logging import get_logger
from scenestage.scene import Scene, SceneEvent
from scenestage.store import SessionStore

logger = get_logger(__name__)


class Stage:
    """Orchestrates scene transitions and message dispatch per user.

    Concurrency: calls for different users are independent. Overlapping
    calls for the same user are only ordered when
    ``config.serialize_per_user`` is set; otherwise the last write-back
    wins and callers must serialize a user's events themselves.
    """

    def __init__(
        self,
        store: SessionStore,
        config: StageConfig | None = None,
        *,
        metrics_enabled: bool = True,
    ) -> None:
        """Initialize the stage.

        Args:
            store: Backend holding one SessionRecord per user
            config: Transition behaviour (defaults if not provided)
            metrics_enabled: Record Prometheus metrics
        """
        self._store = store
        self._config = config or StageConfig()
        self._metrics_enabled = metrics_enabled
        self._scenes: dict[str, Scene] = {}
        self._locks = UserLockRegistry()

    @classmethod
    def from_settings(
        cls, store: SessionStore, settings: Settings | None = None
    ) -> "Stage":
        """Build a stage from loaded Settings (``get_settings()`` by default)."""
        settings = settings or get_settings()
        return cls(
            store,
            settings.stage,
            metrics_enabled=settings.observability.metrics.enabled,
        )

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def config(self) -> StageConfig:
        return self._config

    @property
    def scenes(self) -> Mapping[str, Scene]:
        """Read-only view of the registry."""
        return MappingProxyType(self._scenes)

    def register(self, *scenes: Scene) -> None:
        """Add scenes to the registry; a later scene replaces an earlier one of the same name."""
        for scene in scenes:
            if scene.name in self._scenes and self._scenes[scene.name] is not scene:
                logger.debug("scene_replaced", scene=scene.name)
            self._scenes[scene.name] = scene
            logger.debug("scene_registered", scene=scene.name)

    def get_scene(self, name: str) -> Scene | None:
        return self._scenes.get(name)

    def has_scene(self, name: str) -> bool:
        return name in self._scenes

    async def current_scene(self, user_id: str) -> str | None:
        """Name of the user's active scene, or None."""
        record = await self._store.get_session(user_id)
        return record.current_scene if record else None

    async def enter(self, scene_name: str | None, ctx: SceneContext) -> None:
        """Move the user into ``scene_name``, or out of every scene if None.

        The previous scene's leave callbacks always complete before the
        target is resolved or entered.

        Raises:
            SceneNotFoundError: If ``scene_name`` is not registered
        """
        async with self._user_scope(ctx.user_id):
            await self._enter(scene_name, ctx)

    async def leave(self, ctx: SceneContext) -> None:
        """Leave the active scene and delete the user's session."""
        await self.enter(None, ctx)

    async def handle_message(self, ctx: SceneContext) -> None:
        """Route an incoming message to the user's active scene.

        Users without a session, or whose session names no registered
        scene, are ignored. Otherwise ``ctx.session_data`` is bound to
        the session data, the scene's message callbacks run, and the
        data is written back to the record loaded at the start of the
        call. The write-back is skipped if a callback moved the user to
        another scene through ``enter``, since that call already
        persisted the session.
        """
        async with self._user_scope(ctx.user_id):
            await self._handle_message(ctx)

    @asynccontextmanager
    async def _user_scope(self, user_id: str) -> AsyncIterator[None]:
        if not self._config.serialize_per_user:
            yield
            return
        async with self._locks.hold(user_id):
            yield

    async def _enter(self, scene_name: str | None, ctx: SceneContext) -> None:
        user_id = ctx.user_id
        ctx.transition_count += 1
        marker = ctx.transition_count

        stored = await self._store.get_session(user_id)
        record = stored or SessionRecord()
        previous = record.current_scene

        if stored is not None and ctx.dispatching and ctx.session_data is not None:
            # Called from a running callback: its handle is newer than the store
            record.data = ctx.session_data
        ctx.session_data = record.data

        if previous is not None:
            previous_scene = self._scenes.get(previous)
            if previous_scene is not None:
                await self._run(previous_scene, SceneEvent.LEAVE, ctx)
                logger.debug("scene_left", user_id=user_id, scene=previous)
            else:
                logger.debug(
                    "previous_scene_not_registered", user_id=user_id, scene=previous
                )
            record.data = ctx.session_data if ctx.session_data is not None else {}

        if scene_name is None:
            await self._store.delete_session(user_id)
            ctx.session_data = None
            self._count_transition(previous, None)
            logger.debug("session_deleted", user_id=user_id, previous_scene=previous)
            return

        target = self._scenes.get(scene_name)
        if target is None and self._config.validate_target:
            if stored is not None and previous is not None:
                record.current_scene = None
                await self._store.set_session(user_id, record)
            logger.warning(
                "scene_not_found",
                user_id=user_id,
                scene=scene_name,
                previous_scene=previous,
            )
            raise SceneNotFoundError(scene_name, user_id=user_id)

        if (
            previous is not None
            and previous != scene_name
            and not self._config.preserve_data_across_scenes
        ):
            record.data = {}

        record.current_scene = scene_name
        ctx.session_data = record.data
        await self._store.set_session(user_id, record)

        if target is None:
            logger.warning("scene_not_found", user_id=user_id, scene=scene_name)
            raise SceneNotFoundError(scene_name, user_id=user_id)

        self._count_transition(previous, scene_name)
        await self._run(target, SceneEvent.ENTER, ctx)

        if ctx.transition_count == marker:
            record.data = ctx.session_data if ctx.session_data is not None else {}
            await self._store.set_session(user_id, record)
        logger.debug("scene_entered", user_id=user_id, scene=scene_name)

    async def _handle_message(self, ctx: SceneContext) -> None:
        user_id = ctx.user_id
        record = await self._store.get_session(user_id)

        if record is None or record.current_scene is None:
            self._count_message("", "no_session")
            logger.debug("message_ignored", user_id=user_id, reason="no_scene")
            return

        scene = self._scenes.get(record.current_scene)
        if scene is None:
            self._count_message(record.current_scene, "unregistered")
            logger.debug(
                "message_ignored",
                user_id=user_id,
                scene=record.current_scene,
                reason="scene_not_registered",
            )
            return

        ctx.session_data = record.data
        marker = ctx.transition_count

        await self._run(scene, SceneEvent.MESSAGE, ctx)

        if ctx.transition_count != marker:
            self._count_message(scene.name, "transitioned")
            logger.debug("message_routed", user_id=user_id, scene=scene.name, transitioned=True)
            return

        record.data = ctx.session_data if ctx.session_data is not None else {}
        await self._store.set_session(user_id, record)
        self._count_message(scene.name, "handled")
        logger.debug("message_routed", user_id=user_id, scene=scene.name)

    async def _run(self, scene: Scene, event: SceneEvent, ctx: SceneContext) -> None:
        """Dispatch one scene event, recording latency and failures."""
        start = time.perf_counter()
        ctx.dispatch_depth += 1
        try:
            await scene.dispatch(event, ctx)
        except Exception as e:
            if self._metrics_enabled:
                metrics.CALLBACK_ERRORS.labels(scene=scene.name, event=event.value).inc()
            logger.warning(
                "scene_callback_failed",
                user_id=ctx.user_id,
                scene=scene.name,
                event=event.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        finally:
            ctx.dispatch_depth -= 1
            if self._metrics_enabled:
                metrics.CALLBACK_LATENCY.labels(event=event.value).observe(
                    time.perf_counter() - start
                )

    def _count_transition(self, previous: str | None, target: str | None) -> None:
        if self._metrics_enabled:
            metrics.SCENE_TRANSITIONS.labels(
                from_scene=previous or "", to_scene=target or ""
            ).inc()

    def _count_message(self, scene: str, outcome: str) -> None:
        if self._metrics_enabled:
            metrics.MESSAGES_HANDLED.labels(scene=scene, outcome=outcome).inc()
