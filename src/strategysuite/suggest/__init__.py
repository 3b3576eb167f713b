"""AI idea suggestions: client gateway and server-side generation."""

from strategysuite.suggest._gateway import (
    GENERATE_IDEAS_PATH,
    HttpSuggestionGateway,
    SuggestionGateway,
)
from strategysuite.suggest._models import IdeasResponse, SuggestionRequest
from strategysuite.suggest._parse import MAX_SUGGESTIONS, parse_suggestions
from strategysuite.suggest._service import (
    DEFAULT_MODEL,
    GeminiSuggestionService,
    SuggestionService,
    build_prompt,
)

__all__ = [
    "DEFAULT_MODEL",
    "GENERATE_IDEAS_PATH",
    "MAX_SUGGESTIONS",
    "GeminiSuggestionService",
    "HttpSuggestionGateway",
    "IdeasResponse",
    "SuggestionGateway",
    "SuggestionRequest",
    "SuggestionService",
    "build_prompt",
    "parse_suggestions",
]
