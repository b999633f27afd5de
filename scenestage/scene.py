"""Scene: a named set of ordered lifecycle callbacks."""

import inspect
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from scenestage.context import SceneContext

SceneCallback = Callable[[SceneContext], Awaitable[Any] | Any]


class SceneEvent(str, Enum):
    """Lifecycle events a scene reacts to."""

    ENTER = "enter"
    LEAVE = "leave"
    MESSAGE = "message"


class Scene:
    """A named unit of conversational logic.

    Callbacks are grouped by SceneEvent and run strictly in registration
    order, one at a time. Coroutine callbacks are awaited; plain
    callables are called and their result ignored. The first exception
    stops the remaining callbacks for that event and propagates to the
    caller unchanged.

    Registration methods return the scene so they can be chained:

        greet = (
            Scene("greet")
            .on_enter(ask_name)
            .on_message(store_name)
            .on_leave(say_bye)
        )
    """

    def __init__(self, name: str) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("Scene name must be a non-empty string")
        self.name = name
        self._callbacks: dict[SceneEvent, list[SceneCallback]] = {
            event: [] for event in SceneEvent
        }

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{event.value}={len(cbs)}" for event, cbs in self._callbacks.items()
        )
        return f"Scene({self.name!r}, {counts})"

    def on(self, event: SceneEvent | str, callback: SceneCallback) -> "Scene":
        """Append a callback for an event.

        Args:
            event: Event kind, as SceneEvent or its string value
            callback: Unary callable receiving the SceneContext

        Returns:
            This scene, for chaining
        """
        if not callable(callback):
            raise TypeError(f"Scene callback must be callable, got {type(callback)!r}")
        self._callbacks[SceneEvent(event)].append(callback)
        return self

    def on_enter(self, callback: SceneCallback) -> "Scene":
        return self.on(SceneEvent.ENTER, callback)

    def on_leave(self, callback: SceneCallback) -> "Scene":
        return self.on(SceneEvent.LEAVE, callback)

    def on_message(self, callback: SceneCallback) -> "Scene":
        return self.on(SceneEvent.MESSAGE, callback)

    # Decorator forms: register and hand the function back unchanged.

    def enter_handler(self, callback: SceneCallback) -> SceneCallback:
        self.on(SceneEvent.ENTER, callback)
        return callback

    def leave_handler(self, callback: SceneCallback) -> SceneCallback:
        self.on(SceneEvent.LEAVE, callback)
        return callback

    def message_handler(self, callback: SceneCallback) -> SceneCallback:
        self.on(SceneEvent.MESSAGE, callback)
        return callback

    def callbacks(self, event: SceneEvent | str) -> tuple[SceneCallback, ...]:
        """Registered callbacks for an event, in execution order."""
        return tuple(self._callbacks[SceneEvent(event)])

    async def enter(self, ctx: SceneContext) -> None:
        """Run all enter callbacks."""
        await self.dispatch(SceneEvent.ENTER, ctx)

    async def leave(self, ctx: SceneContext) -> None:
        """Run all leave callbacks."""
        await self.dispatch(SceneEvent.LEAVE, ctx)

    async def handle_message(self, ctx: SceneContext) -> None:
        """Run all message callbacks."""
        await self.dispatch(SceneEvent.MESSAGE, ctx)

    async def dispatch(self, event: SceneEvent, ctx: SceneContext) -> None:
        """Run the callbacks of one event sequentially.

        The list is snapshotted first, so a callback that registers more
        callbacks on this scene only affects later dispatches.
        """
        for callback in tuple(self._callbacks[event]):
            result = callback(ctx)
            if inspect.isawaitable(result):
                await result
