"""Request and response bodies of the idea generation endpoint."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = ["IdeasResponse", "SuggestionRequest"]


class SuggestionRequest(BaseModel):
    """Body of ``POST /api/v1/generate-ideas``.

    Missing ``frameworkKey`` or ``itemTitle`` arrive as empty strings and are
    rejected by the endpoint with its own error body.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    framework_key: str = ""
    item_title: str = ""
    business_context: str = ""
    prompt_override: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.framework_key.strip() and self.item_title.strip())


class IdeasResponse(BaseModel):
    ideas: list[str] = Field(default_factory=list)
