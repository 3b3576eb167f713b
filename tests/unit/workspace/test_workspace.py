from collections.abc import Callable
from pathlib import Path

import pytest
from structlog.typing import FilteringBoundLogger

from strategysuite.exceptions import (
    CategoryNotFoundError,
    ProjectNotFoundError,
    SuggestionError,
)
from strategysuite.project import (
    AI_MARKER,
    FrameworkKey,
    ProjectState,
    add_idea,
    set_business_details,
)
from strategysuite.store import ProjectStore
from strategysuite.sync import LegacyProjectCache, SyncFailure
from strategysuite.workspace import Workspace
from tests.conftest import FakeClock
from tests.unit.sync.conftest import RecordingGateway

pytestmark = pytest.mark.anyio

DEBOUNCE = 0.01


class FakeSuggestions:
    """SuggestionGateway returning canned texts and recording calls."""

    def __init__(
        self,
        texts: list[str] | None = None,
        *,
        error: SuggestionError | None = None,
        during: Callable[[], None] | None = None,
    ) -> None:
        self.texts: list[str] = ["Alpha", "Beta", "Gamma"] if texts is None else texts
        self.error = error
        self.during = during
        self.calls: list[tuple[str, str, str, str | None]] = []

    async def suggest(
        self,
        framework_key: FrameworkKey | str,
        item_title: str,
        business_context: str,
        focus: str | None = None,
    ) -> list[str]:
        self.calls.append((str(framework_key), item_title, business_context, focus))
        if self.during is not None:
            self.during()
        if self.error is not None:
            raise self.error
        return self.texts


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def store(clock: FakeClock, logger: FilteringBoundLogger) -> ProjectStore:
    return ProjectStore(clock=clock, logger=logger)


@pytest.fixture
def suggestions() -> FakeSuggestions:
    return FakeSuggestions()


@pytest.fixture
def make_workspace(
    store: ProjectStore,
    gateway: RecordingGateway,
    suggestions: FakeSuggestions,
    logger: FilteringBoundLogger,
) -> Callable[..., Workspace]:
    def _make(**kwargs: object) -> Workspace:
        options: dict[str, object] = {
            "persistence": gateway,
            "suggestions": suggestions,
            "store": store,
            "debounce_seconds": DEBOUNCE,
            "logger": logger,
            **kwargs,
        }
        return Workspace("u1", **options)  # pyright: ignore[reportArgumentType]

    return _make


class TestOpen:
    async def test_loads_from_gateway_newest_first(
        self,
        make_workspace: Callable[..., Workspace],
        gateway: RecordingGateway,
        make_project: Callable[..., ProjectState],
    ) -> None:
        gateway.projects = [
            make_project("old", last_updated=1),
            make_project("new", last_updated=5),
        ]

        async with make_workspace() as workspace:
            projects = await workspace.open()

        assert [p.id for p in projects] == ["new", "old"]
        assert gateway.saves == []

    async def test_migrates_legacy_cache_instead_of_loading(
        self,
        make_workspace: Callable[..., Workspace],
        gateway: RecordingGateway,
        make_project: Callable[..., ProjectState],
        tmp_path: Path,
    ) -> None:
        cache = LegacyProjectCache(tmp_path / "cache.json")
        cache.write([make_project("cached")])
        gateway.projects = [make_project("remote")]

        async with make_workspace(legacy_cache=cache) as workspace:
            projects = await workspace.open()

        assert [p.id for p in projects] == ["cached"]
        assert [p.id for p in gateway.saves] == ["cached"]
        assert not cache.exists()

    async def test_failed_migration_falls_back_to_load(
        self,
        make_workspace: Callable[..., Workspace],
        gateway: RecordingGateway,
        make_project: Callable[..., ProjectState],
        tmp_path: Path,
    ) -> None:
        cache = LegacyProjectCache(tmp_path / "cache.json")
        cache.write([make_project("cached")])
        gateway.projects = [make_project("remote")]
        gateway.fail_saves = True

        async with make_workspace(legacy_cache=cache) as workspace:
            projects = await workspace.open()

        assert [p.id for p in projects] == ["remote"]
        assert cache.exists()


class TestProjectOperations:
    async def test_created_project_is_saved_after_exit(
        self, make_workspace: Callable[..., Workspace], gateway: RecordingGateway
    ) -> None:
        async with make_workspace() as workspace:
            project = workspace.create_project("Acme")
            assert workspace.active_project == project

        assert [p.name for p in gateway.saves] == ["Acme"]

    async def test_update_defaults_to_active_project(
        self, make_workspace: Callable[..., Workspace], gateway: RecordingGateway
    ) -> None:
        async with make_workspace() as workspace:
            _ = workspace.create_project("Acme")
            updated = workspace.update(set_business_details("Coffee roaster"))

        assert updated is not None
        assert updated.business_details == "Coffee roaster"
        assert gateway.saves[-1].business_details == "Coffee roaster"

    async def test_update_without_active_project_is_noop(
        self, make_workspace: Callable[..., Workspace]
    ) -> None:
        async with make_workspace() as workspace:
            assert workspace.update(set_business_details("x")) is None

    async def test_delete_is_sent_to_gateway(
        self, make_workspace: Callable[..., Workspace], gateway: RecordingGateway
    ) -> None:
        async with make_workspace() as workspace:
            project = workspace.create_project("Acme")
            assert workspace.delete_project(project.id)
            assert workspace.active_project is None

        assert gateway.deletes == [project.id]

    async def test_reorder_at_boundary_changes_nothing(
        self, make_workspace: Callable[..., Workspace]
    ) -> None:
        async with make_workspace() as workspace:
            _ = workspace.create_project("Acme")
            project = workspace.update(add_idea("swot", "strengths", "First"))
            assert project is not None
            idea_id = project.item("swot", "strengths").idea_ids[0]

            assert workspace.reorder_idea("swot", "strengths", idea_id, "up") is None
            assert workspace.active_project == project

    async def test_failures_are_reported(
        self, make_workspace: Callable[..., Workspace], gateway: RecordingGateway
    ) -> None:
        seen: list[SyncFailure] = []
        gateway.fail_saves = True

        async with make_workspace(on_failure=seen.append) as workspace:
            _ = workspace.create_project("Acme")

        assert [f.operation for f in seen] == ["save"]
        assert workspace.projects[0].name == "Acme"


class TestGenerateIdeas:
    async def test_merges_suggestions_as_unselected_ai_ideas(
        self,
        make_workspace: Callable[..., Workspace],
        suggestions: FakeSuggestions,
    ) -> None:
        async with make_workspace() as workspace:
            _ = workspace.create_project("Acme")
            _ = workspace.update(set_business_details("Tea shop"))

            merged = await workspace.generate_ideas(
                "swot", "opportunities", focus="pricing"
            )

            project = workspace.active_project
        assert merged == ("Alpha", "Beta", "Gamma")
        assert project is not None
        ideas = project.item_ideas("swot", "opportunities")
        assert [i.text for i in ideas] == [f"{t}{AI_MARKER}" for t in merged]
        assert all(i.is_ai_generated and not i.is_selected for i in ideas)
        assert suggestions.calls == [
            (
                "swot",
                "Opportunities",
                "Business Context: Tea shop. Additional files: ",
                "pricing",
            )
        ]

    async def test_keeps_edits_made_while_waiting(
        self,
        make_workspace: Callable[..., Workspace],
        store: ProjectStore,
    ) -> None:
        def _edit() -> None:
            _ = store.update_active(add_idea("swot", "opportunities", "Mine"))

        suggestions = FakeSuggestions(["Theirs"], during=_edit)
        async with make_workspace(suggestions=suggestions) as workspace:
            _ = workspace.create_project("Acme")
            _ = await workspace.generate_ideas("swot", "opportunities")
            project = workspace.active_project

        assert project is not None
        texts = [i.text for i in project.item_ideas("swot", "opportunities")]
        assert texts == ["Mine", f"Theirs{AI_MARKER}"]

    async def test_unusable_suggestions_leave_project_untouched(
        self, make_workspace: Callable[..., Workspace]
    ) -> None:
        suggestions = FakeSuggestions(["", "   "])
        async with make_workspace(suggestions=suggestions) as workspace:
            before = workspace.create_project("Acme")

            assert await workspace.generate_ideas("swot", "threats") == ()
            assert workspace.active_project == before

    async def test_no_active_project_skips_request(
        self, make_workspace: Callable[..., Workspace], suggestions: FakeSuggestions
    ) -> None:
        async with make_workspace() as workspace:
            assert await workspace.generate_ideas("swot", "threats") == ()

        assert suggestions.calls == []

    async def test_unknown_category_raises(
        self, make_workspace: Callable[..., Workspace]
    ) -> None:
        async with make_workspace() as workspace:
            _ = workspace.create_project("Acme")
            with pytest.raises(CategoryNotFoundError):
                _ = await workspace.generate_ideas("swot", "nope")

    async def test_suggestion_error_propagates(
        self, make_workspace: Callable[..., Workspace]
    ) -> None:
        suggestions = FakeSuggestions(error=SuggestionError("quota", status_code=429))
        async with make_workspace(suggestions=suggestions) as workspace:
            _ = workspace.create_project("Acme")
            with pytest.raises(SuggestionError) as exc_info:
                _ = await workspace.generate_ideas("swot", "threats")

        assert exc_info.value.status_code == 429


class TestExportAndSave:
    async def test_export_active_project(
        self, make_workspace: Callable[..., Workspace]
    ) -> None:
        async with make_workspace() as workspace:
            _ = workspace.create_project("Acme Co")
            report = workspace.export()

        assert report.filename.startswith("Strategy_Report_Acme_Co_")

    async def test_export_without_active_project_raises(
        self, make_workspace: Callable[..., Workspace]
    ) -> None:
        async with make_workspace() as workspace:
            with pytest.raises(ProjectNotFoundError):
                _ = workspace.export()

    async def test_save_now_writes_immediately(
        self, make_workspace: Callable[..., Workspace], gateway: RecordingGateway
    ) -> None:
        async with make_workspace(debounce_seconds=60) as workspace:
            project = workspace.create_project("Acme")
            await workspace.save_now()
            assert [p.id for p in gateway.saves] == [project.id]
            assert not workspace.sync.pending(project.id)

    async def test_save_now_without_active_project_raises(
        self, make_workspace: Callable[..., Workspace]
    ) -> None:
        async with make_workspace() as workspace:
            with pytest.raises(ProjectNotFoundError):
                await workspace.save_now()
