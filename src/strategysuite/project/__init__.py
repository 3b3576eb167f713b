"""Strategy project model.

This package provides the static framework catalog, the arena-based
ProjectState entity model, pure updater functions, and the wire documents
used to persist and transport projects.
"""

from strategysuite.project._catalog import (
    FRAMEWORKS,
    CategorySpec,
    FrameworkKey,
    FrameworkSpec,
    get_category,
    get_framework,
    parse_framework_key,
)
from strategysuite.project._context import build_business_context
from strategysuite.project._documents import (
    BusinessFileDocument,
    FrameworkItemDocument,
    IdeaDocument,
    ProjectDocument,
    dump_document,
    from_document,
    to_document,
)
from strategysuite.project._models import (
    AI_MARKER,
    MAX_FILE_CHARS,
    BusinessFile,
    FrameworkItem,
    Idea,
    ItemKey,
    MoveDirection,
    ProjectState,
    current_millis,
    new_id,
    new_project,
)
from strategysuite.project._updaters import (
    Updater,
    add_business_file,
    add_idea,
    delete_idea,
    edit_idea_text,
    merge_suggestions,
    move_idea,
    normalize_suggestions,
    remove_business_file,
    rename_business_file,
    rename_project,
    set_business_details,
    set_justification,
    swap_target,
    toggle_idea,
)

__all__ = [
    "AI_MARKER",
    "FRAMEWORKS",
    "MAX_FILE_CHARS",
    "BusinessFile",
    "BusinessFileDocument",
    "CategorySpec",
    "FrameworkItem",
    "FrameworkItemDocument",
    "FrameworkKey",
    "FrameworkSpec",
    "Idea",
    "IdeaDocument",
    "ItemKey",
    "MoveDirection",
    "ProjectDocument",
    "ProjectState",
    "Updater",
    "add_business_file",
    "add_idea",
    "build_business_context",
    "current_millis",
    "delete_idea",
    "dump_document",
    "edit_idea_text",
    "from_document",
    "get_category",
    "get_framework",
    "merge_suggestions",
    "move_idea",
    "new_id",
    "new_project",
    "normalize_suggestions",
    "parse_framework_key",
    "remove_business_file",
    "rename_business_file",
    "rename_project",
    "set_business_details",
    "set_justification",
    "swap_target",
    "to_document",
    "toggle_idea",
]
