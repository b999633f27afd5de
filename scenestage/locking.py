"""Per-user serialization for Stage operations.

Stage itself is not safe against overlapping calls for the same user:
two concurrent message dispatches both read the same record and the
second write-back wins. UserLockRegistry gives each user an asyncio.Lock
so callers that need strict ordering can funnel a user's operations
through it.

A hold is re-entrant only for the task that took it, so a callback may
trigger a nested transition for the user it is already serving. Tasks
spawned while a hold is active (``asyncio.gather``, ``create_task``)
inherit the hold through a ContextVar but do not share it: they queue on
a lock owned by that hold, so they run one at a time while the parent
waits on them, and a parent awaiting its children cannot deadlock.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field


@dataclass(eq=False)
class _Hold:
    """One active hold of a user's lock."""

    owner: asyncio.Task | None
    active: bool = True
    # taken by tasks spawned inside this hold
    children: asyncio.Lock = field(default_factory=asyncio.Lock)


# (registry id, user id) -> innermost hold visible to the current context
_holds: ContextVar[dict[tuple[int, str], _Hold]] = ContextVar("scenestage_user_holds")


class UserLockRegistry:
    """Lazily created per-user locks, dropped once nobody holds or waits."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        """Hold the user's lock for the duration of the block."""
        key = (id(self), user_id)
        task = asyncio.current_task()
        holds = _holds.get({})
        outer = holds.get(key)
        if outer is not None and not outer.active:
            # inherited by a task that outlived the hold
            outer = None

        if outer is not None and outer.owner is task:
            yield
            return

        # Spawned from inside an active hold: queue behind siblings only
        lock = outer.children if outer is not None else self._user_lock(user_id)
        self._users[user_id] = self._users.get(user_id, 0) + 1
        try:
            async with lock:
                current = _Hold(owner=task)
                token = _holds.set({**holds, key: current})
                try:
                    yield
                finally:
                    current.active = False
                    _holds.reset(token)
        finally:
            self._users[user_id] -= 1
            if self._users[user_id] == 0:
                del self._users[user_id]
                self._locks.pop(user_id, None)

    def _user_lock(self, user_id: str) -> asyncio.Lock:
        return self._locks.setdefault(user_id, asyncio.Lock())

    def is_locked(self, user_id: str) -> bool:
        """Whether some task currently holds the user's lock."""
        lock = self._locks.get(user_id)
        return lock is not None and lock.locked()

    def active_count(self) -> int:
        """Number of users with a held or awaited lock."""
        return len(self._locks)
