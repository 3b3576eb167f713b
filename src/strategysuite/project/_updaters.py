"""Pure project updaters.

Every function here returns an Updater, a ``ProjectState -> ProjectState``
callable meant to be passed to ``ProjectStore.update_project``. Updaters never
touch ``last_updated``; the store refreshes it after the transformation.

Unknown framework keys and category ids raise CategoryNotFoundError. Idea
operations that name an idea the category does not own return the project
unchanged.
"""

from collections.abc import Callable, Sequence
from dataclasses import replace

from strategysuite.exceptions import IdeaValidationError, ProjectValidationError
from strategysuite.project._catalog import FrameworkKey, parse_framework_key
from strategysuite.project._models import (
    AI_MARKER,
    MAX_FILE_CHARS,
    BusinessFile,
    FrameworkItem,
    Idea,
    ItemKey,
    MoveDirection,
    ProjectState,
    new_id,
)

__all__ = [
    "Updater",
    "add_business_file",
    "add_idea",
    "delete_idea",
    "edit_idea_text",
    "merge_suggestions",
    "move_idea",
    "normalize_suggestions",
    "remove_business_file",
    "rename_business_file",
    "rename_project",
    "set_business_details",
    "set_justification",
    "swap_target",
    "toggle_idea",
]

type Updater = Callable[[ProjectState], ProjectState]


# -----------------------------------------------------------------------------
# Copy-on-write helpers
# -----------------------------------------------------------------------------


def _item_key(state: ProjectState, key: FrameworkKey | str, item_id: str) -> ItemKey:
    framework_key = parse_framework_key(key)
    _ = state.item(framework_key, item_id)
    return (framework_key, item_id)


def _with_item(state: ProjectState, key: ItemKey, item: FrameworkItem) -> ProjectState:
    items = dict(state.items)
    items[key] = item
    return replace(state, items=items)


def _with_idea(state: ProjectState, idea: Idea) -> ProjectState:
    ideas = dict(state.ideas)
    ideas[idea.id] = idea
    return replace(state, ideas=ideas)


def _owned_idea(state: ProjectState, key: ItemKey, idea_id: str) -> Idea | None:
    if idea_id not in state.items[key].idea_ids:
        return None
    return state.ideas[idea_id]


def _require_text(text: str, *, field: str) -> str:
    stripped = text.strip()
    if not stripped:
        msg = "Idea text cannot be empty"
        raise IdeaValidationError(msg, field=field, expected="non-empty string")
    return stripped


def swap_target(
    state: ProjectState,
    key: FrameworkKey | str,
    item_id: str,
    idea_id: str,
    direction: MoveDirection | str,
) -> int | None:
    """Index an idea would be swapped with, or None at a boundary.

    Returns:
        The neighbor index, or None if the idea is absent or already first
        (for ``up``) or last (for ``down``).
    """
    idea_ids = state.item(key, item_id).idea_ids
    if idea_id not in idea_ids:
        return None
    index = idea_ids.index(idea_id)
    target = index - 1 if MoveDirection(direction) is MoveDirection.UP else index + 1
    if target < 0 or target >= len(idea_ids):
        return None
    return target


# -----------------------------------------------------------------------------
# Idea updaters
# -----------------------------------------------------------------------------


def add_idea(key: FrameworkKey | str, item_id: str, text: str) -> Updater:
    """Append a human-authored, selected idea to a category.

    Raises:
        IdeaValidationError: If the text is blank (raised immediately).
    """
    clean_text = _require_text(text, field="text")

    def _apply(state: ProjectState) -> ProjectState:
        item_key = _item_key(state, key, item_id)
        item = state.items[item_key]
        idea = Idea(
            id=new_id(),
            text=clean_text,
            is_ai_generated=False,
            is_selected=True,
            order=len(item.idea_ids),
        )
        state = _with_idea(state, idea)
        return _with_item(
            state, item_key, replace(item, idea_ids=(*item.idea_ids, idea.id))
        )

    return _apply


def toggle_idea(key: FrameworkKey | str, item_id: str, idea_id: str) -> Updater:
    """Flip the inclusion flag of one idea."""

    def _apply(state: ProjectState) -> ProjectState:
        idea = _owned_idea(state, _item_key(state, key, item_id), idea_id)
        if idea is None:
            return state
        return _with_idea(state, replace(idea, is_selected=not idea.is_selected))

    return _apply


def edit_idea_text(
    key: FrameworkKey | str, item_id: str, idea_id: str, text: str
) -> Updater:
    """Replace the text of one idea.

    Raises:
        IdeaValidationError: If the new text is blank (raised immediately).
    """
    clean_text = _require_text(text, field="text")

    def _apply(state: ProjectState) -> ProjectState:
        idea = _owned_idea(state, _item_key(state, key, item_id), idea_id)
        if idea is None:
            return state
        return _with_idea(state, replace(idea, text=clean_text))

    return _apply


def delete_idea(key: FrameworkKey | str, item_id: str, idea_id: str) -> Updater:
    """Remove one idea from its category and from the project."""

    def _apply(state: ProjectState) -> ProjectState:
        item_key = _item_key(state, key, item_id)
        if _owned_idea(state, item_key, idea_id) is None:
            return state
        item = state.items[item_key]
        ideas = dict(state.ideas)
        del ideas[idea_id]
        state = replace(state, ideas=ideas)
        remaining = tuple(i for i in item.idea_ids if i != idea_id)
        return _with_item(state, item_key, replace(item, idea_ids=remaining))

    return _apply


def move_idea(
    key: FrameworkKey | str,
    item_id: str,
    idea_id: str,
    direction: MoveDirection | str,
) -> Updater:
    """Swap an idea with its neighbor; no change at the boundary.

    Both the display positions and the two ideas' order values are swapped.
    """

    def _apply(state: ProjectState) -> ProjectState:
        item_key = _item_key(state, key, item_id)
        target = swap_target(state, item_key[0], item_id, idea_id, direction)
        if target is None:
            return state
        item = state.items[item_key]
        idea_ids = list(item.idea_ids)
        index = idea_ids.index(idea_id)
        idea_ids[index], idea_ids[target] = idea_ids[target], idea_ids[index]

        moved = state.ideas[idea_id]
        neighbor = state.ideas[idea_ids[index]]
        ideas = dict(state.ideas)
        ideas[moved.id] = replace(moved, order=neighbor.order)
        ideas[neighbor.id] = replace(neighbor, order=moved.order)
        state = replace(state, ideas=ideas)
        return _with_item(state, item_key, replace(item, idea_ids=tuple(idea_ids)))

    return _apply


def normalize_suggestions(suggestions: Sequence[object]) -> tuple[str, ...]:
    """Keep only non-blank string suggestions, trimmed, in order."""
    return tuple(
        text.strip() for text in suggestions if isinstance(text, str) and text.strip()
    )


def merge_suggestions(
    key: FrameworkKey | str, item_id: str, suggestions: Sequence[object]
) -> Updater:
    """Append suggested ideas to a category as unselected AI ideas.

    Each usable suggestion becomes one idea whose text carries the AI marker
    and whose order continues after the existing ideas, preserving batch
    order. Unusable entries (non-strings, blank strings) are skipped.
    """
    texts = normalize_suggestions(suggestions)

    def _apply(state: ProjectState) -> ProjectState:
        item_key = _item_key(state, key, item_id)
        item = state.items[item_key]
        if not texts:
            return state
        base = len(item.idea_ids)
        new_ideas = [
            Idea(
                id=new_id(),
                text=f"{text}{AI_MARKER}",
                is_ai_generated=True,
                is_selected=False,
                order=base + position,
            )
            for position, text in enumerate(texts)
        ]
        ideas = dict(state.ideas)
        ideas.update((idea.id, idea) for idea in new_ideas)
        state = replace(state, ideas=ideas)
        idea_ids = (*item.idea_ids, *(idea.id for idea in new_ideas))
        return _with_item(state, item_key, replace(item, idea_ids=idea_ids))

    return _apply


def set_justification(key: FrameworkKey | str, item_id: str, text: str) -> Updater:
    def _apply(state: ProjectState) -> ProjectState:
        item_key = _item_key(state, key, item_id)
        item = state.items[item_key]
        return _with_item(state, item_key, replace(item, justification=text))

    return _apply


# -----------------------------------------------------------------------------
# Project-level updaters
# -----------------------------------------------------------------------------


def set_business_details(text: str) -> Updater:
    def _apply(state: ProjectState) -> ProjectState:
        return replace(state, business_details=text)

    return _apply


def rename_project(name: str) -> Updater:
    """Rename a project.

    Raises:
        ProjectValidationError: If the name is blank (raised immediately).
    """
    clean_name = name.strip()
    if not clean_name:
        msg = "Project name cannot be empty"
        raise ProjectValidationError(msg, field="name", expected="non-empty string")

    def _apply(state: ProjectState) -> ProjectState:
        return replace(state, name=clean_name)

    return _apply


def add_business_file(
    name: str, content: str, *, file_id: str | None = None
) -> Updater:
    """Attach an uploaded document, truncating its content at ingestion."""
    document = BusinessFile(
        id=file_id or new_id(), name=name, content=content[:MAX_FILE_CHARS]
    )

    def _apply(state: ProjectState) -> ProjectState:
        return replace(state, business_files=(*state.business_files, document))

    return _apply


def rename_business_file(file_id: str, name: str) -> Updater:
    def _apply(state: ProjectState) -> ProjectState:
        files = tuple(
            replace(f, name=name) if f.id == file_id else f
            for f in state.business_files
        )
        return replace(state, business_files=files)

    return _apply


def remove_business_file(file_id: str) -> Updater:
    def _apply(state: ProjectState) -> ProjectState:
        files = tuple(f for f in state.business_files if f.id != file_id)
        return replace(state, business_files=files)

    return _apply
