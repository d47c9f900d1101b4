"""Category suggestions from a model hosted on AWS Bedrock."""

import json
import logging
from typing import List, Optional, Sequence

import boto3
from botocore.config import Config

from grocery_utils.exceptions import SuggestionError
from grocery_utils.ingredients.models import CategorySuggestion, GroceryCategory
from grocery_utils.suggestions.base import (
    build_system_prompt,
    build_user_prompt,
    extract_json,
    parse_suggestions,
)

logger = logging.getLogger(__name__)


class BedrockSuggester:
    """Maps ingredients to grocery categories with a Bedrock model.

    Claude 3 messages models and Amazon Nova models are supported; any other
    model id is sent a legacy Claude text-completion body.

    Attributes:
        bedrock_client: boto3 ``bedrock-runtime`` client.
        model_id (str): The Bedrock model ID to invoke.
    """

    def __init__(
        self,
        model_id: str = "anthropic.claude-3-5-haiku-20241022-v1:0",
        region_name: str = "us-east-1",
        timeout: float = 30.0,
        bedrock_client=None,
    ):
        self.model_id = model_id
        self.bedrock_client = bedrock_client or boto3.client(
            "bedrock-runtime",
            region_name=region_name,
            config=Config(read_timeout=timeout, retries={"max_attempts": 1}),
        )

    def _request_body(self, system: str, prompt: str) -> str:
        if "anthropic.claude-3" in self.model_id:
            return json.dumps(
                {
                    "anthropic_version": "bedrock-2023-05-31",
                    "max_tokens": 2048,
                    "temperature": 0.3,
                    "system": system,
                    "messages": [
                        {"role": "user", "content": [{"type": "text", "text": prompt}]}
                    ],
                }
            )
        if "amazon.nova" in self.model_id:
            return json.dumps(
                {
                    "system": [{"text": system}],
                    "messages": [{"role": "user", "content": [{"text": prompt}]}],
                }
            )
        return json.dumps(
            {
                "prompt": f"\n\nHuman:{system}\n\n{prompt}\n\nAssistant:",
                "max_tokens_to_sample": 2048,
                "temperature": 0.3,
            }
        )

    def _completion_text(self, response_body: dict) -> str:
        if "anthropic.claude-3" in self.model_id:
            return response_body.get("content", [{}])[0].get("text", "")
        if "amazon.nova" in self.model_id:
            return (
                response_body.get("output", {})
                .get("message", {})
                .get("content", [{}])[0]
                .get("text", "")
            )
        return response_body.get("completion", "")

    def suggest(
        self, ingredients: Sequence[str], categories: Sequence[GroceryCategory]
    ) -> List[CategorySuggestion]:
        """Ask the model for one category suggestion per ingredient.

        Raises:
            botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError:
                On AWS errors.
            SuggestionError: If the completion holds no usable mappings.
        """
        if not ingredients:
            return []

        body = self._request_body(
            build_system_prompt(categories), build_user_prompt(ingredients)
        )
        response = self.bedrock_client.invoke_model(
            body=body,
            modelId=self.model_id,
            accept="application/json",
            contentType="application/json",
        )
        response_body = json.loads(response.get("body").read())
        completion = self._completion_text(response_body)
        if not completion:
            raise SuggestionError(f"Empty completion from {self.model_id}")

        logger.debug("Raw completion from %s: %s", self.model_id, completion)
        return parse_suggestions(extract_json(completion))
