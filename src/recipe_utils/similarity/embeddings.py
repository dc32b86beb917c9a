"""Text embeddings for recipe duplicate detection via AWS Bedrock."""

import json
import logging
from typing import Dict, Iterable, List, Optional

import boto3

from recipe_utils.config import Settings

logger = logging.getLogger(__name__)


def build_embedding_text(
    title: str, ingredient_lines: Iterable[str], steps: Iterable[str]
) -> str:
    """Join title, raw ingredient lines and steps with newlines."""
    return "\n".join([title, *ingredient_lines, *steps])


class BedrockEmbeddingProvider:
    """Compute text embeddings with a Bedrock embedding model.

    Attributes:
        model_id (str): Bedrock model id, e.g. "amazon.titan-embed-text-v1".
        dimensions (int): Expected vector length; other lengths are rejected.
        client: bedrock-runtime client.
        cache (dict): Embeddings already computed, keyed by text.
    """

    def __init__(
        self,
        model_id: str = Settings.embedding_model,
        dimensions: int = Settings.embedding_dimensions,
        region_name: str = Settings.aws_region,
        client=None,
    ):
        self.model_id = model_id
        self.dimensions = dimensions
        self.client = client or boto3.client("bedrock-runtime", region_name=region_name)
        self.cache: Dict[str, List[float]] = {}

    @classmethod
    def from_settings(cls, settings: Settings, client=None) -> "BedrockEmbeddingProvider":
        return cls(
            model_id=settings.embedding_model,
            dimensions=settings.embedding_dimensions,
            region_name=settings.aws_region,
            client=client,
        )

    def _request_body(self, text: str) -> str:
        body = {"inputText": text}
        # Titan v2 takes the output size as a parameter
        if "titan-embed-text-v2" in self.model_id:
            body["dimensions"] = self.dimensions
        return json.dumps(body)

    def embed(self, text: str) -> Optional[List[float]]:
        """Embed ``text``.

        Returns:
            The embedding vector, or None if the model call fails or returns a
            vector of the wrong dimension.
        """
        if not text or not text.strip():
            return None
        if text in self.cache:
            return self.cache[text]

        try:
            response = self.client.invoke_model(
                body=self._request_body(text),
                modelId=self.model_id,
                accept="application/json",
                contentType="application/json",
            )
            response_body = json.loads(response.get("body").read())
        except Exception as e:
            logger.warning(f"Embedding failed with model {self.model_id}: {e}")
            return None

        vector = response_body.get("embedding")
        if not isinstance(vector, list) or not vector:
            logger.warning(f"Embedding response from {self.model_id} had no vector")
            return None
        if len(vector) != self.dimensions:
            logger.warning(
                f"Embedding from {self.model_id} has {len(vector)} dimensions, "
                f"expected {self.dimensions}"
            )
            return None

        vector = [float(value) for value in vector]
        self.cache[text] = vector
        return vector
