from collections.abc import Callable

import pytest
from rich.console import Console
from structlog.typing import FilteringBoundLogger

from strategysuite.project import ProjectState, new_project
from strategysuite.utils import create_logger


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> int:
        self.now += millis
        return self.now


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def logger() -> FilteringBoundLogger:
    return create_logger(level="debug")


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def make_project() -> Callable[..., ProjectState]:
    """Return a factory building catalog-complete projects."""

    def _make(
        project_id: str = "p1", name: str = "Acme", last_updated: int = 1000
    ) -> ProjectState:
        return new_project(project_id, name, last_updated)

    return _make
