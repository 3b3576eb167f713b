"""Wire documents for persisted and transported projects.

Projects travel and rest as nested camelCase JSON::

    {id, name, lastUpdated, businessDetails, businessFiles: [...],
     frameworks: {pestle: [{id, title, color, justification, ideas: [...]}]}}

The pydantic models here validate that shape; ``to_document`` and
``from_document`` convert between it and the arena-based ProjectState.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from strategysuite.project._catalog import FRAMEWORKS
from strategysuite.project._models import (
    MAX_FILE_CHARS,
    BusinessFile,
    FrameworkItem,
    Idea,
    ItemKey,
    ProjectState,
    new_id,
)

__all__ = [
    "BusinessFileDocument",
    "FrameworkItemDocument",
    "IdeaDocument",
    "ProjectDocument",
    "dump_document",
    "from_document",
    "to_document",
]


class _WireModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class IdeaDocument(_WireModel):
    id: str
    text: str
    is_ai_generated: bool = False
    is_selected: bool = False
    order: int = 0


class FrameworkItemDocument(_WireModel):
    id: str
    title: str = ""
    color: str = ""
    ideas: list[IdeaDocument] = Field(default_factory=list)
    justification: str = ""


class BusinessFileDocument(_WireModel):
    id: str
    name: str
    content: str = ""


class ProjectDocument(_WireModel):
    """A complete project as stored in the document collection."""

    id: str
    name: str
    last_updated: int
    business_details: str = ""
    business_files: list[BusinessFileDocument] = Field(default_factory=list)
    frameworks: dict[str, list[FrameworkItemDocument]] = Field(default_factory=dict)


def to_document(state: ProjectState) -> ProjectDocument:
    """Convert a ProjectState to its nested wire document."""
    frameworks: dict[str, list[FrameworkItemDocument]] = {}
    for framework in FRAMEWORKS.values():
        frameworks[framework.key.value] = [
            FrameworkItemDocument(
                id=item.id,
                title=item.title,
                color=item.color,
                justification=item.justification,
                ideas=[
                    IdeaDocument(
                        id=idea.id,
                        text=idea.text,
                        is_ai_generated=idea.is_ai_generated,
                        is_selected=idea.is_selected,
                        order=idea.order,
                    )
                    for idea in state.item_ideas(framework.key, item.id)
                ],
            )
            for item in state.framework(framework.key)
        ]
    return ProjectDocument(
        id=state.id,
        name=state.name,
        last_updated=state.last_updated,
        business_details=state.business_details,
        business_files=[
            BusinessFileDocument(id=f.id, name=f.name, content=f.content)
            for f in state.business_files
        ],
        frameworks=frameworks,
    )


def from_document(document: ProjectDocument) -> ProjectState:
    """Rebuild a ProjectState from a wire document.

    The framework map is rebuilt from the catalog: unknown frameworks and
    categories are dropped, missing categories come back empty, and titles
    and colors are taken from the catalog. An idea id seen twice in the
    same project is given a fresh id. Business file content longer than
    MAX_FILE_CHARS is truncated, as when the file is added.
    """
    items: dict[ItemKey, FrameworkItem] = {}
    ideas: dict[str, Idea] = {}

    for framework in FRAMEWORKS.values():
        stored = {
            item.id: item for item in document.frameworks.get(framework.key.value, [])
        }
        for category in framework.categories:
            stored_item = stored.get(category.id)
            idea_ids: list[str] = []
            for idea_doc in stored_item.ideas if stored_item else ():
                idea_id = idea_doc.id if idea_doc.id not in ideas else new_id()
                ideas[idea_id] = Idea(
                    id=idea_id,
                    text=idea_doc.text,
                    is_ai_generated=idea_doc.is_ai_generated,
                    is_selected=idea_doc.is_selected,
                    order=idea_doc.order,
                )
                idea_ids.append(idea_id)
            items[(framework.key, category.id)] = FrameworkItem(
                id=category.id,
                title=category.title,
                color=category.color,
                idea_ids=tuple(idea_ids),
                justification=stored_item.justification if stored_item else "",
            )

    return ProjectState(
        id=document.id,
        name=document.name,
        last_updated=document.last_updated,
        business_details=document.business_details,
        business_files=tuple(
            BusinessFile(id=f.id, name=f.name, content=f.content[:MAX_FILE_CHARS])
            for f in document.business_files
        ),
        items=items,
        ideas=ideas,
    )


def dump_document(state: ProjectState) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Serialize a ProjectState to a camelCase JSON-compatible dict."""
    return to_document(state).model_dump(by_alias=True, mode="json")
