"""Category suggestions from an OpenAI compatible chat completions API."""

import logging
from typing import List, Optional, Sequence

import requests

from grocery_utils.exceptions import SuggestionError
from grocery_utils.ingredients.models import CategorySuggestion, GroceryCategory
from grocery_utils.suggestions.base import (
    build_system_prompt,
    build_user_prompt,
    extract_json,
    parse_suggestions,
)
from grocery_utils.suggestions.retry import retry_on_transient_error

logger = logging.getLogger(__name__)


class OpenAISuggester:
    """Maps ingredients to grocery categories with a chat model.

    Attributes:
        session: The underlying requests session, carrying the auth header
        model: Chat model name
        base_url: API base URL, without a trailing slash
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"Bearer {api_key}"
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @retry_on_transient_error()
    def _post(self, payload: dict) -> dict:
        response = self.session.post(
            f"{self.base_url}/chat/completions", json=payload, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def suggest(
        self, ingredients: Sequence[str], categories: Sequence[GroceryCategory]
    ) -> List[CategorySuggestion]:
        """Ask the model for one category suggestion per ingredient.

        Raises:
            requests.RequestException: On transport or HTTP errors.
            SuggestionError: If the completion holds no usable mappings.
        """
        if not ingredients:
            return []

        logger.debug("Mapping ingredients with %s: %s", self.model, list(ingredients))
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": build_system_prompt(categories)},
                {"role": "user", "content": build_user_prompt(ingredients)},
            ],
            "response_format": {"type": "json_object"},
            "temperature": 0.3,
        }
        body = self._post(payload)

        choices = body.get("choices") or []
        content = choices[0].get("message", {}).get("content") if choices else None
        if not content:
            raise SuggestionError("No completion returned by the provider")

        logger.debug("Raw completion: %s", content)
        return parse_suggestions(extract_json(content))
