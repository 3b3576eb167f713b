"""Decoding of generated suggestion payloads."""

from typing import Final

from strategysuite.exceptions import SuggestionError
from strategysuite.project import normalize_suggestions
from strategysuite.utils import load_json

__all__ = ["MAX_SUGGESTIONS", "parse_suggestions"]

MAX_SUGGESTIONS: Final = 3


def parse_suggestions(text: str) -> list[str]:
    """Extract suggested ideas from model output.

    Accepts a JSON array, or an object whose ``ideas`` member is an array.
    Non-string and blank entries are dropped and at most three are kept.

    Raises:
        SuggestionError: If the text is not one of the accepted shapes.
    """
    data = load_json(text.strip())
    if isinstance(data, dict):
        data = data.get("ideas")
    if not isinstance(data, list):
        msg = "Model response is not a JSON array of ideas"
        raise SuggestionError(msg)
    return list(normalize_suggestions(data)[:MAX_SUGGESTIONS])
