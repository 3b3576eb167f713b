"""Keyed trailing-edge debouncer."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import anyio
from anyio.abc import TaskGroup
from structlog.typing import FilteringBoundLogger

from strategysuite.utils import create_logger

__all__ = ["DebouncedCallback", "KeyedDebouncer"]

type DebouncedCallback = Callable[[], Awaitable[None]]


@dataclass(eq=False, slots=True)
class _Entry:
    callback: DebouncedCallback
    scope: anyio.CancelScope = field(default_factory=anyio.CancelScope)


class KeyedDebouncer:
    """Cancellable timers keyed by an identifier.

    ``schedule`` restarts the window for its key; the callback runs once the
    window elapses without another ``schedule`` for the same key. Keys are
    independent. A callback that has started running is never cancelled.

    Timers run as tasks in the task group passed in, so they stop when the
    group is cancelled.
    """

    def __init__(
        self,
        task_group: TaskGroup,
        delay: float,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._task_group = task_group
        self._delay = delay
        self._pending: dict[str, _Entry] = {}
        self._logger = logger if logger is not None else create_logger()

    @property
    def delay(self) -> float:
        return self._delay

    def pending(self, key: str) -> bool:
        """Whether a timer is waiting for this key."""
        return key in self._pending

    @property
    def pending_keys(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def schedule(self, key: str, callback: DebouncedCallback) -> None:
        """Start or restart the window for a key."""
        _ = self.cancel(key)
        entry = _Entry(callback)
        self._pending[key] = entry
        self._task_group.start_soon(self._run, key, entry)

    def cancel(self, key: str) -> bool:
        """Drop the pending timer for a key.

        Returns:
            True if a timer was pending.
        """
        entry = self._pending.pop(key, None)
        if entry is None:
            return False
        entry.scope.cancel()
        return True

    async def flush(self, key: str | None = None) -> None:
        """Run pending callbacks now instead of waiting for their window.

        Args:
            key: Flush only this key; all keys when None.
        """
        keys = [key] if key is not None else list(self._pending)
        for pending_key in keys:
            entry = self._pending.pop(pending_key, None)
            if entry is None:
                continue
            entry.scope.cancel()
            await self._invoke(pending_key, entry)

    async def _run(self, key: str, entry: _Entry) -> None:
        with entry.scope:
            await anyio.sleep(self._delay)
        if self._pending.get(key) is not entry:
            return
        del self._pending[key]
        await self._invoke(key, entry)

    async def _invoke(self, key: str, entry: _Entry) -> None:
        try:
            await entry.callback()
        except Exception:
            self._logger.exception("debounced_callback_failed", key=key)
