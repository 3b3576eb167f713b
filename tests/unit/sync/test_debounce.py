import anyio
import pytest
from structlog.typing import FilteringBoundLogger

from strategysuite.sync import KeyedDebouncer

pytestmark = pytest.mark.anyio

DELAY = 0.05


class TestKeyedDebouncer:
    async def test_runs_once_after_quiet_window(
        self, logger: FilteringBoundLogger
    ) -> None:
        calls: list[int] = []

        async with anyio.create_task_group() as tg:
            debouncer = KeyedDebouncer(tg, DELAY, logger=logger)
            for n in range(3):

                async def _record(n: int = n) -> None:
                    calls.append(n)

                debouncer.schedule("a", _record)
                await anyio.sleep(DELAY / 5)

            assert debouncer.pending("a")
            await anyio.sleep(DELAY * 3)

        assert calls == [2]

    async def test_keys_are_independent(self, logger: FilteringBoundLogger) -> None:
        calls: list[str] = []

        async def _a() -> None:
            calls.append("a")

        async def _b() -> None:
            calls.append("b")

        async with anyio.create_task_group() as tg:
            debouncer = KeyedDebouncer(tg, DELAY, logger=logger)
            debouncer.schedule("a", _a)
            debouncer.schedule("b", _b)
            assert set(debouncer.pending_keys) == {"a", "b"}

        assert sorted(calls) == ["a", "b"]

    async def test_cancel_drops_pending_callback(
        self, logger: FilteringBoundLogger
    ) -> None:
        calls: list[str] = []

        async def _a() -> None:
            calls.append("a")

        async with anyio.create_task_group() as tg:
            debouncer = KeyedDebouncer(tg, DELAY, logger=logger)
            debouncer.schedule("a", _a)

            assert debouncer.cancel("a") is True
            assert debouncer.cancel("a") is False
            await anyio.sleep(DELAY * 3)

        assert calls == []

    async def test_flush_runs_immediately(self, logger: FilteringBoundLogger) -> None:
        calls: list[str] = []

        async def _a() -> None:
            calls.append("a")

        async with anyio.create_task_group() as tg:
            debouncer = KeyedDebouncer(tg, 10.0, logger=logger)
            debouncer.schedule("a", _a)

            await debouncer.flush()

            assert calls == ["a"]
            assert debouncer.pending_keys == ()

    async def test_failing_callback_is_logged_not_raised(
        self, logger: FilteringBoundLogger
    ) -> None:
        async def _boom() -> None:
            msg = "boom"
            raise RuntimeError(msg)

        async with anyio.create_task_group() as tg:
            debouncer = KeyedDebouncer(tg, DELAY, logger=logger)
            debouncer.schedule("a", _boom)
            await anyio.sleep(DELAY * 3)

        assert debouncer.pending_keys == ()
