"""Pluggable providers that suggest grocery categories for ingredients."""

import logging
from typing import Optional

from grocery_utils.config import Settings

from .base import (
    CategorySuggester,
    NullSuggester,
    build_system_prompt,
    build_user_prompt,
    extract_json,
    fallback_suggestions,
    parse_suggestions,
)
from .bedrock import BedrockSuggester
from .openai_api import OpenAISuggester
from .retry import retry_on_transient_error

logger = logging.getLogger(__name__)


def get_suggester(settings: Optional[Settings] = None) -> CategorySuggester:
    """Build the category suggester selected by ``settings.ai_provider``.

    Args:
        settings: Settings to use; read from the environment when omitted.

    Raises:
        ValueError: If OpenAI is requested explicitly without an API key.
    """
    settings = settings or Settings.from_env()
    provider = settings.ai_provider

    if provider == "auto":
        provider = "openai" if settings.openai_api_key else "none"

    if provider == "openai":
        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY is required for the openai provider")
        return OpenAISuggester(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.ai_timeout,
        )
    if provider == "bedrock":
        return BedrockSuggester(
            model_id=settings.bedrock_model_id,
            region_name=settings.aws_region,
            timeout=settings.ai_timeout,
        )

    logger.info("No AI provider configured, categories come from heuristics only")
    return NullSuggester()


__all__ = [
    "CategorySuggester",
    "NullSuggester",
    "BedrockSuggester",
    "OpenAISuggester",
    "build_system_prompt",
    "build_user_prompt",
    "extract_json",
    "fallback_suggestions",
    "get_suggester",
    "parse_suggestions",
    "retry_on_transient_error",
]
