"""Entity model for strategy projects.

A ProjectState is an aggregate root that owns its FrameworkItems and Ideas
through two flat maps: items keyed by (framework, category id) and ideas
keyed by idea id. Each FrameworkItem lists the ids of the ideas it owns, in
display order. All entities are frozen; updates build new maps for the path
that changed and share everything else.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final
from uuid import uuid4

import pendulum

from strategysuite.exceptions import CategoryNotFoundError, ProjectIntegrityError
from strategysuite.project._catalog import FRAMEWORKS, FrameworkKey, parse_framework_key

__all__ = [
    "AI_MARKER",
    "MAX_FILE_CHARS",
    "BusinessFile",
    "FrameworkItem",
    "Idea",
    "ItemKey",
    "MoveDirection",
    "ProjectState",
    "current_millis",
    "new_id",
    "new_project",
]

# Uploaded document content is cut to this many characters at ingestion
MAX_FILE_CHARS: Final = 5000

# Suffix appended to the text of AI-suggested ideas
AI_MARKER: Final = " (AI)"

type ItemKey = tuple[FrameworkKey, str]


class MoveDirection(StrEnum):
    """Direction for manual idea reordering."""

    UP = "up"
    DOWN = "down"


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid4().hex


def current_millis() -> int:
    """Current UTC time as epoch milliseconds."""
    return int(pendulum.now("UTC").timestamp() * 1000)


@dataclass(frozen=True, slots=True)
class Idea:
    """A single short strategic statement attached to a category.

    Attributes:
        id: Opaque unique identifier.
        text: Display text.
        is_ai_generated: True when the idea came from a suggestion.
        is_selected: True when the idea is included in the report.
        order: Relative order value used for manual reordering.
    """

    id: str
    text: str
    is_ai_generated: bool = False
    is_selected: bool = False
    order: int = 0


@dataclass(frozen=True, slots=True)
class FrameworkItem:
    """One category of a framework within a project.

    Attributes:
        id: Category slug from the catalog.
        title: Display title.
        color: Display color.
        idea_ids: Ids of the owned ideas, in display order.
        justification: Free-text justification.
    """

    id: str
    title: str
    color: str
    idea_ids: tuple[str, ...] = ()
    justification: str = ""


@dataclass(frozen=True, slots=True)
class BusinessFile:
    """An uploaded reference document."""

    id: str
    name: str
    content: str


@dataclass(frozen=True, slots=True)
class ProjectState:
    """Aggregate root for one strategy project.

    Attributes:
        id: Opaque unique identifier.
        name: Display name.
        last_updated: Epoch milliseconds of the last accepted mutation.
        business_details: Free-text business description.
        business_files: Uploaded reference documents, in upload order.
        items: FrameworkItems keyed by (framework key, category id).
        ideas: Ideas keyed by idea id.
    """

    id: str
    name: str
    last_updated: int
    business_details: str = ""
    business_files: tuple[BusinessFile, ...] = ()
    items: Mapping[ItemKey, FrameworkItem] = field(default_factory=dict)
    ideas: Mapping[str, Idea] = field(default_factory=dict)

    def framework(self, key: FrameworkKey | str) -> tuple[FrameworkItem, ...]:
        """Get the items of one framework in catalog order."""
        framework_key = parse_framework_key(key)
        return tuple(
            self.items[(framework_key, category.id)]
            for category in FRAMEWORKS[framework_key].categories
            if (framework_key, category.id) in self.items
        )

    def item(self, key: FrameworkKey | str, item_id: str) -> FrameworkItem:
        """Get one FrameworkItem.

        Raises:
            CategoryNotFoundError: If the framework or category is unknown.
        """
        framework_key = parse_framework_key(key)
        found = self.items.get((framework_key, item_id))
        if found is None:
            msg = f"Unknown category {item_id!r} in framework {framework_key.value}"
            raise CategoryNotFoundError(
                msg, framework_key=framework_key.value, item_id=item_id
            )
        return found

    def item_ideas(self, key: FrameworkKey | str, item_id: str) -> tuple[Idea, ...]:
        """Get the ideas of one FrameworkItem in display order."""
        item = self.item(key, item_id)
        return tuple(self.ideas[idea_id] for idea_id in item.idea_ids)

    def selected_ideas(
        self, key: FrameworkKey | str, item_id: str
    ) -> tuple[Idea, ...]:
        return tuple(idea for idea in self.item_ideas(key, item_id) if idea.is_selected)

    def file(self, file_id: str) -> BusinessFile | None:
        return next((f for f in self.business_files if f.id == file_id), None)

    def check_invariants(self) -> None:
        """Verify the ownership and catalog invariants.

        Raises:
            ProjectIntegrityError: If any invariant is violated.
        """
        violations: list[str] = []

        expected_keys = {
            (framework.key, category.id)
            for framework in FRAMEWORKS.values()
            for category in framework.categories
        }
        missing = expected_keys - set(self.items)
        extra = set(self.items) - expected_keys
        violations.extend(f"missing category {k.value}/{i}" for k, i in sorted(missing))
        violations.extend(f"unknown category {k}/{i}" for k, i in sorted(extra))

        owners: dict[str, int] = {}
        for (key, item_id), item in self.items.items():
            if item.id != item_id:
                violations.append(f"item {key}/{item_id} carries id {item.id!r}")
            for idea_id in item.idea_ids:
                owners[idea_id] = owners.get(idea_id, 0) + 1
                if idea_id not in self.ideas:
                    violations.append(f"item {key}/{item_id} references {idea_id!r}")

        for idea_id, idea in self.ideas.items():
            if idea.id != idea_id:
                violations.append(f"idea {idea_id!r} carries id {idea.id!r}")
            count = owners.get(idea_id, 0)
            if count != 1:
                violations.append(f"idea {idea_id!r} has {count} owners")

        violations.extend(
            f"file {f.id!r} exceeds {MAX_FILE_CHARS} characters"
            for f in self.business_files
            if len(f.content) > MAX_FILE_CHARS
        )

        if violations:
            msg = f"Project {self.id} violates {len(violations)} invariant(s)"
            raise ProjectIntegrityError(
                msg, project_id=self.id, violations=tuple(violations)
            )


def new_project(project_id: str, name: str, timestamp: int) -> ProjectState:
    """Build a project with the full framework map from the catalog.

    Args:
        project_id: Identifier for the new project.
        name: Display name.
        timestamp: Creation time in epoch milliseconds.

    Returns:
        A ProjectState with every catalog category present and empty.
    """
    items: dict[ItemKey, FrameworkItem] = {
        (framework.key, category.id): FrameworkItem(
            id=category.id, title=category.title, color=category.color
        )
        for framework in FRAMEWORKS.values()
        for category in framework.categories
    }
    return ProjectState(id=project_id, name=name, last_updated=timestamp, items=items)
