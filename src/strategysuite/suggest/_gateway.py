"""Client for the idea generation endpoint."""

from typing import Protocol, runtime_checkable

import httpx
from structlog.typing import FilteringBoundLogger

from strategysuite.exceptions import SuggestionError
from strategysuite.project import FrameworkKey
from strategysuite.suggest._models import SuggestionRequest
from strategysuite.utils import create_logger, error_message, load_json, send_with_retry

__all__ = ["GENERATE_IDEAS_PATH", "HttpSuggestionGateway", "SuggestionGateway"]

GENERATE_IDEAS_PATH = "/api/v1/generate-ideas"


@runtime_checkable
class SuggestionGateway(Protocol):
    async def suggest(
        self,
        framework_key: FrameworkKey | str,
        item_title: str,
        business_context: str,
        focus: str | None = None,
    ) -> list[str]:
        """Ask for short ideas for one framework category.

        Raises:
            SuggestionError: If the backend is unavailable or answers badly.
        """
        ...


class HttpSuggestionGateway:
    """Suggestion gateway posting to a StrategySuite server."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._client = client
        self._logger = logger if logger is not None else create_logger()

    @classmethod
    def connect(
        cls,
        base_url: str,
        *,
        timeout: float = 30.0,
        logger: FilteringBoundLogger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpSuggestionGateway":
        """Create a gateway with its own HTTP client."""
        client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )
        return cls(client, logger=logger)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def suggest(
        self,
        framework_key: FrameworkKey | str,
        item_title: str,
        business_context: str,
        focus: str | None = None,
    ) -> list[str]:
        request = SuggestionRequest(
            framework_key=str(framework_key),
            item_title=item_title,
            business_context=business_context,
            prompt_override=focus,
        )
        try:
            response = await send_with_retry(
                self._client,
                "POST",
                GENERATE_IDEAS_PATH,
                request.model_dump(by_alias=True, exclude_none=True),
            )
        except httpx.HTTPError as e:
            msg = f"Suggestion service unreachable: {e}"
            raise SuggestionError(msg) from e

        if not response.is_success:
            raise SuggestionError(
                error_message(response), status_code=response.status_code
            )

        body = load_json(response.content)
        ideas = body.get("ideas") if isinstance(body, dict) else None
        if not isinstance(ideas, list):
            msg = "Suggestion service returned an invalid payload"
            raise SuggestionError(msg, status_code=response.status_code)

        self._logger.debug(
            "suggestions_received", framework_key=str(framework_key), count=len(ideas)
        )
        return [idea for idea in ideas if isinstance(idea, str)]
