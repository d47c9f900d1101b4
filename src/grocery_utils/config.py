"""Runtime settings read from the environment."""

import dataclasses
import os
from typing import Mapping, Optional

PROVIDERS = ("auto", "bedrock", "openai", "none")


@dataclasses.dataclass
class Settings:
    """Configuration shared by the store, the category providers and the scripts.

    Attributes:
        db_path: Path to the SQLite database holding recipes and groceries.
        ai_provider: One of ``auto``, ``bedrock``, ``openai`` or ``none``.
            ``auto`` uses OpenAI when an API key is configured and no
            provider otherwise.
        openai_api_key: API key for the OpenAI chat completions endpoint.
        openai_model: Chat model used for category suggestions.
        openai_base_url: Base URL of the OpenAI compatible API.
        bedrock_model_id: AWS Bedrock model ID used for category suggestions.
        aws_region: AWS region for the Bedrock runtime client.
        ai_timeout: Timeout in seconds for a single provider request.
    """

    db_path: str = "data/groceries.db"
    ai_provider: str = "auto"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"
    bedrock_model_id: str = "anthropic.claude-3-5-haiku-20241022-v1:0"
    aws_region: str = "us-east-1"
    ai_timeout: float = 30.0

    def __post_init__(self):
        self.ai_provider = self.ai_provider.lower().strip()
        if self.ai_provider not in PROVIDERS:
            raise ValueError(
                f"Unknown AI provider '{self.ai_provider}', expected one of {PROVIDERS}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            db_path=env.get("GROCERY_DB_PATH", defaults.db_path),
            ai_provider=env.get("GROCERY_AI_PROVIDER", defaults.ai_provider),
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            openai_model=env.get("OPENAI_MODEL", defaults.openai_model),
            openai_base_url=env.get("OPENAI_BASE_URL", defaults.openai_base_url),
            bedrock_model_id=env.get("BEDROCK_MODEL_ID", defaults.bedrock_model_id),
            aws_region=env.get("AWS_REGION", defaults.aws_region),
            ai_timeout=float(env.get("GROCERY_AI_TIMEOUT", defaults.ai_timeout)),
        )
