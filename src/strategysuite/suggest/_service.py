"""Server-side suggestion generation with Gemini."""

from typing import Protocol, runtime_checkable

import httpx
from google import genai
from google.genai import errors, types
from structlog.typing import FilteringBoundLogger

from strategysuite.exceptions import SuggestionError
from strategysuite.suggest._models import SuggestionRequest
from strategysuite.suggest._parse import parse_suggestions
from strategysuite.templating import render_template
from strategysuite.utils import create_logger

__all__ = [
    "DEFAULT_MODEL",
    "GeminiSuggestionService",
    "SuggestionService",
    "build_prompt",
]

DEFAULT_MODEL = "gemini-3-flash-preview"


@runtime_checkable
class SuggestionService(Protocol):
    async def generate(self, request: SuggestionRequest) -> list[str]:
        """Produce up to three short ideas for one framework category.

        Raises:
            SuggestionError: If generation or decoding fails.
        """
        ...


def build_prompt(request: SuggestionRequest) -> str:
    """Render the consultant prompt for a request."""
    return render_template(
        "suggestion_prompt.j2",
        item_title=request.item_title,
        framework_key=request.framework_key,
        business_context=request.business_context,
        focus=request.prompt_override,
    )


class GeminiSuggestionService:
    """Suggestion service calling the Google Gen AI SDK."""

    def __init__(
        self,
        client: genai.Client,
        *,
        model: str = DEFAULT_MODEL,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._logger = logger if logger is not None else create_logger()

    @classmethod
    def from_api_key(
        cls,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        logger: FilteringBoundLogger | None = None,
    ) -> "GeminiSuggestionService":
        return cls(genai.Client(api_key=api_key), model=model, logger=logger)

    @property
    def model(self) -> str:
        return self._model

    async def generate(self, request: SuggestionRequest) -> list[str]:
        prompt = build_prompt(request)
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                ),
            )
        except errors.APIError as e:
            self._logger.warning(
                "ai_generation_failed", model=self._model, status_code=e.code
            )
            msg = e.message or str(e)
            raise SuggestionError(msg, status_code=e.code) from e
        except (httpx.HTTPError, ValueError) as e:
            self._logger.warning(
                "ai_generation_failed", model=self._model, reason=str(e)
            )
            msg = str(e) or type(e).__name__
            raise SuggestionError(msg) from e

        text = response.text
        if not text:
            msg = "Model returned an empty response"
            raise SuggestionError(msg)

        ideas = parse_suggestions(text)
        self._logger.info(
            "ideas_generated",
            framework_key=request.framework_key,
            item_title=request.item_title,
            count=len(ideas),
        )
        return ideas
